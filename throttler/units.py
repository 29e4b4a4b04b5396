"""Byte quantities with binary unit suffixes (``512``, ``10k``, ``1G``, ``2T``)."""

from __future__ import annotations

import re

from throttler.exceptions import ByteQuantityError
from throttler.models import U64_MAX

UNIT_FACTORS: dict[str, int] = {
    "k": 1 << 10,
    "m": 1 << 20,
    "g": 1 << 30,
    "t": 1 << 40,
}

# Leading integer plus at most one unit character; anything after it is ignored
_QUANTITY_RE = re.compile(r"\s*([0-9]+)(.)?", re.DOTALL)


def unit_factor(unit: str) -> int:
    """Return the multiplier for a unit character, 1 if it is not a known suffix."""
    return UNIT_FACTORS.get(unit.lower(), 1)


def parse_byte_quantity(value: str) -> int:
    """Parse a byte quantity such as ``10G`` into a number of bytes.

    The suffixes k, m, g and t (any case) scale by 2^10, 2^20, 2^30 and 2^40.
    An unknown trailing character counts as a factor of 1 and everything
    after the first trailing character is not looked at, so ``"10x"`` and
    ``"10 GB"`` both mean 10 bytes.

    Raises:
        ByteQuantityError: If the string does not start with an unsigned
            integer or the result does not fit into 64 bits.
    """
    m = _QUANTITY_RE.match(value)
    if not m:
        raise ByteQuantityError(f"Not a byte quantity: {value!r}", value=value)

    number = int(m.group(1))
    if m.group(2) is not None:
        number *= unit_factor(m.group(2))

    if number > U64_MAX:
        raise ByteQuantityError(f"Byte quantity out of range: {value!r}", value=value)
    return number
