"""Threshold evaluation — decide whether a counter sample should trigger the action."""

from __future__ import annotations

from enum import Enum

from loguru import logger
from pydantic import BaseModel, Field

from throttler.models import CounterSample, ThrottleConfig


class Decision(str, Enum):
    REPORT = "report"  # no limits configured, print the counters
    FIRE = "fire"
    QUIESCENT = "quiescent"


class Evaluation(BaseModel):
    decision: Decision
    breaches: list[str] = Field(default_factory=list)


def format_status_line(sample: CounterSample) -> str:
    """Return the line printed when no limits are configured."""
    return f"Interface {sample.interface}: Down: {sample.bytes_received}, Up: {sample.bytes_transmitted}"


def evaluate(sample: CounterSample, config: ThrottleConfig) -> Evaluation:
    """Compare ``sample`` against the limits in ``config``.

    Without any limit the result is ``REPORT``. Otherwise each configured
    limit is checked with a strict greater-than and a single exceeded limit
    is enough to ``FIRE``.
    """
    if not config.has_limits:
        return Evaluation(decision=Decision.REPORT)

    breaches: list[str] = []
    if config.max_upload is not None and sample.bytes_transmitted > config.max_upload:
        breaches.append(f"upload {sample.bytes_transmitted} > {config.max_upload}")
    if config.max_download is not None and sample.bytes_received > config.max_download:
        breaches.append(f"download {sample.bytes_received} > {config.max_download}")
    if config.max_total is not None and sample.bytes_total > config.max_total:
        breaches.append(f"total {sample.bytes_total} > {config.max_total}")

    if breaches:
        logger.info(f"{sample.interface}: limit exceeded ({'; '.join(breaches)})")
        return Evaluation(decision=Decision.FIRE, breaches=breaches)

    logger.debug(f"{sample.interface}: within limits")
    return Evaluation(decision=Decision.QUIESCENT)
