"""Reader for the per-interface traffic table in ``/proc/net/dev``.

The table looks like::

    Inter-|   Receive                                                |  Transmit
     face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets ...
        lo:  264424    2542    0    0    0     0          0         0   264424    2542 ...
      eth0: 9817542   12310    0    0    0     0          0       133  1459862    8417 ...

Each interface line is ``<name>:`` followed by 16 counters, eight for receive
and eight for transmit. Only the two byte counters are used here.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from throttler.exceptions import InterfaceNotFoundError, StatsSourceError
from throttler.models import CounterSample

PROC_NET_DEV = "/proc/net/dev"

NET_DEV_RX_BYTES = 0
NET_DEV_TX_BYTES = 8
NET_DEV_NUM_STATS = 16


def split_netdev_line(line: str) -> tuple[str, list[str]] | None:
    """Split a table line into the interface name and its counter fields.

    Returns None for lines without a colon, i.e. the two header lines.
    """
    name, sep, rest = line.partition(":")
    if not sep:
        return None
    return name.strip(), rest.split()


def parse_netdev_line(line: str, interface: str) -> CounterSample | None:
    """Return the byte counters of ``interface`` if ``line`` describes it.

    The name must match exactly, so ``eth0`` does not pick up ``eth01`` or
    ``veth0``. Lines whose first nine counters are not plain unsigned
    integers are treated as non-matching.
    """
    parts = split_netdev_line(line)
    if parts is None:
        return None
    name, fields = parts
    if name != interface:
        return None

    needed = fields[: NET_DEV_TX_BYTES + 1]
    if len(needed) <= NET_DEV_TX_BYTES or not all(f.isascii() and f.isdigit() for f in needed):
        logger.debug(f"Malformed counter line for {interface}: {line.rstrip()!r}")
        return None

    return CounterSample(
        interface=name,
        bytes_received=int(fields[NET_DEV_RX_BYTES]),
        bytes_transmitted=int(fields[NET_DEV_TX_BYTES]),
    )


def list_interfaces(lines: Iterable[str]) -> list[str]:
    """Return the names of all interface lines in the table."""
    names: list[str] = []
    for line in lines:
        parts = split_netdev_line(line)
        if parts is not None and parts[0]:
            names.append(parts[0])
    return names


def find_interface_counters(
    lines: Iterable[str],
    interface: str,
    source: str = PROC_NET_DEV,
) -> CounterSample:
    """Scan table lines and return the counters of the first line for ``interface``.

    Raises:
        InterfaceNotFoundError: If no line matches.
    """
    for line in lines:
        sample = parse_netdev_line(line, interface)
        if sample is not None:
            logger.debug(f"{interface}: rx={sample.bytes_received} tx={sample.bytes_transmitted}")
            return sample

    raise InterfaceNotFoundError(
        f"Could not find interface {interface} in {source}",
        interface=interface,
        source=source,
    )


def read_interface_counters(interface: str, path: str = PROC_NET_DEV) -> CounterSample:
    """Read the counters of ``interface`` from the statistics file at ``path``.

    The file is closed before this returns, whether or not the interface
    was found.

    Raises:
        StatsSourceError: If the file cannot be opened or read.
        InterfaceNotFoundError: If the interface is not listed.
    """
    try:
        with open(path) as fh:
            lines = fh.readlines()
    except OSError as e:
        logger.debug(f"Reading {path} failed: {e}")
        raise StatsSourceError(f"Error opening {path}, permissions?", path=path) from e

    try:
        return find_interface_counters(lines, interface, source=path)
    except InterfaceNotFoundError:
        logger.debug(f"Interfaces in {path}: {', '.join(list_interfaces(lines)) or '-'}")
        raise
