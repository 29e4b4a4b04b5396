"""Shared fixtures for the throttler test suite."""

from __future__ import annotations

import pytest
from loguru import logger

from throttler.models import CounterSample, ThrottleConfig

# ── /proc/net/dev content ─────────────────────────────────────────────

NETDEV_TABLE = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  264424    2542    0    0    0     0          0         0   264424    2542    0    0    0     0       0          0
 eth01: 7777777    5000    0    0    0     0          0         0  8888888    4000    0    0    0     0       0          0
  eth0:     100       1    0    0    0     0          0         0      200       2    0    0    0     0       0          0
 wwan0: 3221225472 2200000 0    0    0     0          0         0 1073741824 900000  0    0    0     0       0          0
"""


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch):
    """Keep LOGURU_LEVEL and loguru sinks from leaking between tests."""
    monkeypatch.setenv("LOGURU_LEVEL", "WARNING")
    yield
    logger.remove()
    logger.disable("throttler")


@pytest.fixture()
def netdev_lines():
    """The sample table as a list of lines."""
    return NETDEV_TABLE.splitlines(keepends=True)


@pytest.fixture()
def stats_file(tmp_path):
    """Factory fixture writing a statistics table to a temporary file."""

    def _make(content: str = NETDEV_TABLE) -> str:
        path = tmp_path / "net_dev"
        path.write_text(content)
        return str(path)

    return _make


@pytest.fixture()
def make_config():
    """Factory fixture returning a ThrottleConfig with customizable fields."""

    def _make(**kwargs):
        defaults = {
            "interface": "eth0",
            "max_upload": None,
            "max_download": None,
            "max_total": None,
            "action": None,
        }
        defaults.update(kwargs)
        return ThrottleConfig(**defaults)

    return _make


@pytest.fixture()
def make_sample():
    """Factory fixture returning a CounterSample."""

    def _make(rx: int = 0, tx: int = 0, interface: str = "eth0"):
        return CounterSample(interface=interface, bytes_received=rx, bytes_transmitted=tx)

    return _make
