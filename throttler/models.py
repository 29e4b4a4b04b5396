"""Pydantic models for throttler configuration and counter samples."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Largest value an unsigned 64-bit kernel counter can hold
U64_MAX = 2**64 - 1


class ThrottleConfig(BaseModel):
    """Limits, interface and action for one invocation.

    A limit of ``None`` means "not configured"; ``0`` is a real threshold.
    """

    model_config = ConfigDict(frozen=True)

    interface: str = Field(min_length=1)
    max_upload: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    max_download: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    max_total: Optional[int] = Field(default=None, ge=0, le=U64_MAX)
    action: Optional[str] = None

    @property
    def has_limits(self) -> bool:
        return any(limit is not None for limit in (self.max_upload, self.max_download, self.max_total))


class CounterSample(BaseModel):
    """Cumulative byte counters of one interface since its last reset."""

    model_config = ConfigDict(frozen=True)

    interface: str
    bytes_received: int = Field(ge=0)
    bytes_transmitted: int = Field(ge=0)

    @property
    def bytes_total(self) -> int:
        return self.bytes_received + self.bytes_transmitted
