"""
Consensus parameter inspection CLI.

Print the consensus parameters of one or all built-in networks.

Usage::

    python -m chainparams
    python -m chainparams regtest
    python -m chainparams dogecoin --json
    python -m chainparams --all

Options:
    NETWORK      Network name (default: $CHAINPARAMS_NETWORK, or 'bitcoin')
    --all        Show every built-in network
    --json       Emit JSON with camelCase keys instead of a table
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from chainparams import config
from chainparams.consensus import ConsensusParams, all_params, lookup_by_name
from chainparams.exceptions import UnknownNetworkError
from chainparams.network import NetworkId

logger = logging.getLogger(__name__)


def params_to_json(params: ConsensusParams) -> dict[str, Any]:
    """
    Serialize a record to a JSON-ready dict with camelCase keys.

    Derived values are included alongside the stored fields.
    """
    data = params.model_dump(mode="json", by_alias=True)
    data["powLimit"] = f"0x{int(params.pow_limit):064x}"
    data["powLimitBits"] = f"0x{int(params.pow_limit_bits):08x}"
    data["difficultyAdjustmentInterval"] = int(params.difficulty_adjustment_interval())
    return data


def format_params(params: ConsensusParams) -> str:
    """Render a record as an aligned, human-readable table."""
    rows = [
        ("network", params.network.value),
        ("family", params.network.family.value),
        ("bip16 time", str(params.legacy_feature_activation_time)),
        ("bip34 height", str(params.height_activation_a)),
        ("bip65 height", str(params.height_activation_b)),
        ("bip66 height", str(params.height_activation_c)),
        (
            "activation threshold",
            f"{params.rule_change_activation_threshold} / {params.miner_confirmation_window}",
        ),
        ("pow limit", f"0x{int(params.pow_limit):064x}"),
        ("pow limit bits", f"0x{int(params.pow_limit_bits):08x}"),
        ("target spacing", f"{params.pow_target_spacing}s"),
        ("target timespan", f"{params.pow_target_timespan}s"),
        ("adjustment interval", f"{params.difficulty_adjustment_interval()} blocks"),
        ("min difficulty blocks", str(params.allow_min_difficulty_blocks).lower()),
        ("no retargeting", str(params.no_pow_retargeting).lower()),
    ]
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label:<{width}}  {value}" for label, value in rows)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="chainparams",
        description="Show built-in consensus parameters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "network",
        nargs="?",
        default=config.CHAINPARAMS_NETWORK,
        help=f"Network name, one of: {', '.join(NetworkId.names())} "
        f"(default: {config.CHAINPARAMS_NETWORK})",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Show every built-in network",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of a table",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    if args.all:
        records = all_params()
    else:
        try:
            records = [lookup_by_name(args.network)]
        except UnknownNetworkError as e:
            logger.error("%s", e.message)
            return 2

    logger.debug("Loaded consensus parameters for %s", ", ".join(str(r.network) for r in records))

    if args.json:
        payload: Any = [params_to_json(r) for r in records]
        if not args.all:
            payload = payload[0]
        print(json.dumps(payload, indent=2))
    else:
        print("\n\n".join(format_params(r) for r in records))

    return 0


if __name__ == "__main__":
    sys.exit(main())
