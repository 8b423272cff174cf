"""
Shared pytest fixtures.

The pipeline is built from the same pieces main.py uses, with a fake clock
and a stub reader where a test needs deterministic timing.
"""

from __future__ import annotations

import pytest

from app.channel import SampleChannel
from app.context import LoadTestContext
from app.metrics_store import MetricsStore
from config import AppConfig
from infra.clock import SystemClock
from infra.control_api import create_app
from infra.file_reader import PlainFileReader

from helpers import FakeClock


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def channel():
    return SampleChannel(maxsize=1000)


@pytest.fixture
def store():
    return MetricsStore()


@pytest.fixture
def nfs_dir(tmp_path):
    """A fake mount with a target file and an img/ directory."""
    (tmp_path / "target.bin").write_bytes(b"x" * 4096)
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "logo.txt").write_text("logo", encoding="utf-8")
    return tmp_path


@pytest.fixture
def app_config(nfs_dir):
    return AppConfig(
        nfs_dir=str(nfs_dir),
        filename="target.bin",
        port=8080,
        window_sec=0.1,
    )


@pytest.fixture
def context(app_config):
    """A live context: aggregator thread running, real reads on tmp files."""
    ctx = LoadTestContext.build(app_config, clock=SystemClock(), reader=PlainFileReader())
    ctx.start()
    yield ctx
    ctx.runner.stop()
    ctx.runner.join(timeout=2)
    ctx.shutdown()


@pytest.fixture
def client(context):
    app = create_app(context)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
