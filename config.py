from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from domain.errors import ConfigError

MAX_PORT = 65535


@dataclass(frozen=True)
class AppConfig:
    nfs_dir: str
    filename: str
    port: int

    host: str = "0.0.0.0"
    window_sec: float = 1.0
    channel_size: int = 1000
    default_interval_ms: int = 1000
    report_windows: bool = False
    log_level: str = "INFO"

    @property
    def target_path(self) -> str:
        return os.path.join(self.nfs_dir, self.filename)


def _req(d: Mapping[str, Any], path: str) -> Any:
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            raise ConfigError(f"Invalid config: required field '{path}' is missing.")
        cur = cur[part]
    return cur


def _opt(d: Mapping[str, Any], path: str, default: Any) -> Any:
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, Mapping) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _num(value: Any, path: str, kind: type) -> Any:
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config: '{path}' must be {kind.__name__}, got {value!r}") from e


def nfs_dir_from_vcap(raw: str) -> str:
    """
    Mount directory of the first NFS volume service bound to the app.

    Expects VCAP_SERVICES shaped like:
      {"nfs": [{"volume_mounts": [{"container_dir": "/var/vcap/data/..."}]}]}
    """
    try:
        services = json.loads(raw)
    except ValueError as e:
        raise ConfigError("Unable to parse VCAP_SERVICES") from e

    nfs = services.get("nfs") if isinstance(services, Mapping) else None
    if not nfs or not isinstance(nfs, list) or not isinstance(nfs[0], Mapping):
        raise ConfigError("No volume mounts found in VCAP_SERVICES")

    mounts = nfs[0].get("volume_mounts")
    if not mounts or not isinstance(mounts, list) or not isinstance(mounts[0], Mapping):
        raise ConfigError("No volume mounts found in VCAP_SERVICES")

    container_dir = mounts[0].get("container_dir")
    if not container_dir:
        raise ConfigError("Volume mount is empty in VCAP_SERVICES")
    return str(container_dir)


def _read_yaml(path: Optional[str], env: Mapping[str, str]) -> Mapping[str, Any]:
    explicit = path is not None or "NFSLOAD_CONFIG" in env
    p = Path(path or env.get("NFSLOAD_CONFIG", "config.yaml"))

    if not p.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {p}")
        return {}

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Unable to parse {p}: {e}") from e
    if not isinstance(data, Mapping):
        raise ConfigError(f"Invalid config: {p} must contain a mapping.")
    return data


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    YAML file (optional) first, then the platform environment on top:
      VCAP_SERVICES -> nfs_dir, FILENAME -> filename, PORT -> port
    """
    env = os.environ if env is None else env
    data = dict(_read_yaml(path, env))

    if env.get("VCAP_SERVICES"):
        data["nfs_dir"] = nfs_dir_from_vcap(env["VCAP_SERVICES"])
    elif "nfs_dir" not in data:
        raise ConfigError("VCAP_SERVICES not defined")
    if env.get("FILENAME"):
        data["filename"] = env["FILENAME"]
    if env.get("PORT"):
        data["port"] = env["PORT"]

    nfs_dir = str(_req(data, "nfs_dir"))
    if not nfs_dir:
        raise ConfigError("Invalid config: 'nfs_dir' is empty.")
    filename = str(_req(data, "filename"))
    if not filename:
        raise ConfigError("Invalid config: 'filename' is empty.")

    port = _num(_req(data, "port"), "port", int)
    if port < 1 or port > MAX_PORT:
        raise ConfigError(f"Port out of range: {port}")

    window_sec = _num(_opt(data, "window_sec", 1.0), "window_sec", float)
    if window_sec <= 0:
        raise ConfigError("Invalid config: 'window_sec' must be > 0.")
    channel_size = _num(_opt(data, "channel_size", 1000), "channel_size", int)
    if channel_size < 1:
        raise ConfigError("Invalid config: 'channel_size' must be >= 1.")
    default_interval_ms = _num(_opt(data, "default_interval_ms", 1000), "default_interval_ms", int)
    if not 0 <= default_interval_ms / 1000.0 <= threading.TIMEOUT_MAX:
        raise ConfigError("Invalid config: 'default_interval_ms' out of range.")
    log_level = str(_opt(data, "log_level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Invalid config: unknown log_level {log_level!r}.")

    return AppConfig(
        nfs_dir=nfs_dir,
        filename=filename,
        port=port,
        host=str(_opt(data, "host", "0.0.0.0")),
        window_sec=window_sec,
        channel_size=channel_size,
        default_interval_ms=default_interval_ms,
        report_windows=bool(_opt(data, "report_windows", False)),
        log_level=log_level,
    )
