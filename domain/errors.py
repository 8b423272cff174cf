from __future__ import annotations


class AlreadyRunning(Exception):
    """start() called while a workload is active."""

    def __init__(self) -> None:
        super().__init__("Workload already running")


class ConfigError(ValueError):
    pass
