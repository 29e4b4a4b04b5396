"""Throttler — run an action once a network interface has moved too many bytes.

Reads the cumulative traffic counters of one interface from ``/proc/net/dev``,
compares them against upload/download/total limits and runs a shell command
when any limit is exceeded. Meant to be called periodically (cron, systemd
timer), not run as a daemon.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    level: str | None = None,
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a single stderr ``loguru`` sink and enable the package logger.

    The level is taken from ``level``, then ``LOGURU_LEVEL``, then ``WARNING``.
    stdout is left alone so scripted callers only see the status line.
    """
    os.environ["LOGURU_LEVEL"] = level or os.getenv("LOGURU_LEVEL", "WARNING")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from throttler.action import run_action  # noqa: E402
from throttler.evaluator import Decision, Evaluation, evaluate, format_status_line  # noqa: E402
from throttler.exceptions import (  # noqa: E402
    ActionError,
    ByteQuantityError,
    InterfaceNotFoundError,
    StatsSourceError,
    ThrottlerError,
)
from throttler.models import CounterSample, ThrottleConfig  # noqa: E402
from throttler.netdev import PROC_NET_DEV, find_interface_counters, read_interface_counters  # noqa: E402
from throttler.units import parse_byte_quantity  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "parse_byte_quantity",
    "find_interface_counters",
    "read_interface_counters",
    "evaluate",
    "format_status_line",
    "run_action",
    "Decision",
    "Evaluation",
    "CounterSample",
    "ThrottleConfig",
    "PROC_NET_DEV",
    "ThrottlerError",
    "ByteQuantityError",
    "StatsSourceError",
    "InterfaceNotFoundError",
    "ActionError",
]
