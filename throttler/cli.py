"""CLI entry point for throttler.

Examples:
  # print the counters of eth0
  throttler eth0

  # shut the interface down after 10 GiB up or down, or 15 GiB combined
  throttler eth0 -u 10G -d 10G -t 15G 'ip link set eth0 down'

  # crontab entry, checks every five minutes
  */5 * * * * /usr/local/bin/throttler wwan0 -t 2G 'systemctl stop wwan.service'
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from loguru import logger
from tabulate import tabulate

from throttler import __version__, configure_logging
from throttler.action import run_action
from throttler.evaluator import Decision, evaluate, format_status_line
from throttler.exceptions import ActionError, ByteQuantityError, InterfaceNotFoundError, StatsSourceError
from throttler.models import ThrottleConfig
from throttler.netdev import PROC_NET_DEV, read_interface_counters
from throttler.units import parse_byte_quantity

_EPILOG = """\
Limits are measured in bytes and may be specified with the following suffixes:
  k or K for Kilobytes, m or M for Megabytes, g or G for Gigabytes, t or T for Terabytes.
  If no suffix is specified pure bytes are assumed.
  Example: throttler eth0 -u 10G -d 10G -t 15G 'echo Throttle'
If called without any limits it simply outputs the number of bytes received and
transmitted on the specified interface.
"""

# argparse dest -> (ThrottleConfig field, label used in diagnostics)
_LIMIT_OPTIONS = {
    "max_up": ("max_upload", "upload"),
    "max_down": ("max_download", "download"),
    "max_total": ("max_total", "total"),
}


class ThrottlerArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting with 2."""

    def error(self, message: str) -> NoReturn:
        raise argparse.ArgumentError(None, message)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for throttler."""
    parser = ThrottlerArgumentParser(
        prog="throttler",
        description="Perform an action once a network interface has used too much volume.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        exit_on_error=False,
    )
    parser.add_argument("-u", "--max-up", metavar="LIMIT", help="Upload (transmitted bytes) limit")
    parser.add_argument("-d", "--max-down", metavar="LIMIT", help="Download (received bytes) limit")
    parser.add_argument("-t", "--max-total", metavar="LIMIT", help="Limit of up- and download combined")
    parser.add_argument("-v", "--version", action="version", version=f"Throttler {__version__}")
    parser.add_argument(
        "--stats-file",
        default=PROC_NET_DEV,
        metavar="PATH",
        help=f"Interface statistics table to read (default: {PROC_NET_DEV})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument("interface", nargs="?", help="Network interface to watch, e.g. eth0")
    parser.add_argument("action", nargs="?", help="Shell command line to run once a limit is exceeded")
    return parser


def parse_args(args: list[str] | None = None) -> tuple[argparse.Namespace, list[str]]:
    """Parse the command line, allowing options after the positionals.

    Everything after a ``--`` is positional, so an action line may start
    with a dash. Returns the namespace and the arguments argparse did not
    recognise.

    Raises:
        argparse.ArgumentError: If an option is missing its value or is an
            ambiguous abbreviation.
    """
    args = list(sys.argv[1:] if args is None else args)
    tail: list[str] = []
    if "--" in args:
        split = args.index("--")
        args, tail = args[:split], args[split + 1 :]

    parsed, extras = build_parser().parse_known_intermixed_args(args)
    if not tail:
        return parsed, extras

    positionals = [value for value in (parsed.interface, parsed.action) if value is not None]
    positionals.extend(tail)
    parsed.interface = positionals[0]
    parsed.action = positionals[1] if len(positionals) > 1 else None
    extras.extend(positionals[2:])
    return parsed, extras


def _parse_limit(raw: str | None, label: str) -> int | None:
    """Parse one limit option; an invalid value is reported and left unset."""
    if raw is None:
        return None
    try:
        return parse_byte_quantity(raw)
    except ByteQuantityError as e:
        print(f"Invalid argument for max {label}")
        logger.warning(f"{e}, max {label} stays unset")
        return None


def build_config(parsed: argparse.Namespace) -> ThrottleConfig:
    """Turn parsed arguments into a ThrottleConfig.

    ``parsed.interface`` must already be checked to be non-empty.
    """
    limits = {field: _parse_limit(getattr(parsed, dest), label) for dest, (field, label) in _LIMIT_OPTIONS.items()}
    return ThrottleConfig(interface=parsed.interface, action=parsed.action or None, **limits)


def _report_extras(extras: list[str]) -> None:
    for extra in extras:
        if extra.startswith("-") and extra != "-":
            print(f"?? unrecognized option '{extra}' ??")
        else:
            logger.debug(f"Ignoring surplus argument {extra!r}")


def _log_startup_table(config: ThrottleConfig, stats_file: str) -> None:
    rows = [
        ["version", __version__],
        ["interface", config.interface],
        ["max upload", "-" if config.max_upload is None else config.max_upload],
        ["max download", "-" if config.max_download is None else config.max_download],
        ["max total", "-" if config.max_total is None else config.max_total],
        ["stats file", stats_file],
        ["action", config.action or "-"],
    ]
    logger.opt(raw=True).debug("\n{}\n", tabulate(rows, tablefmt="mixed_grid"))


def _fire(config: ThrottleConfig) -> None:
    if not config.action:
        logger.warning(f"Threshold exceeded on {config.interface} but no action configured")
        return
    try:
        run_action(config.action)
    except ActionError as e:
        logger.error(str(e))


def main(args: list[str] | None = None) -> None:
    """Main entry point for the throttler CLI."""
    try:
        parsed, extras = parse_args(args)
    except argparse.ArgumentError as e:
        print(f"Invalid command line: {e} - call with --help to get information")
        sys.exit(1)

    configure_logging("DEBUG" if parsed.verbose else None)
    _report_extras(extras)

    if not parsed.interface:
        print("Missing interface specifier - call with --help to get information")
        sys.exit(1)

    config = build_config(parsed)
    if parsed.verbose:
        _log_startup_table(config, parsed.stats_file)

    try:
        sample = read_interface_counters(config.interface, parsed.stats_file)
        evaluation = evaluate(sample, config)
        if evaluation.decision == Decision.REPORT:
            print(format_status_line(sample))
        elif evaluation.decision == Decision.FIRE:
            _fire(config)
    except (StatsSourceError, InterfaceNotFoundError) as e:
        print(e)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
