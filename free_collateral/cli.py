"""Command-line interface for running the plugin hooks once."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from . import build_plugin
from .config import load_config
from .interfaces import NotificationPlugin
from .logging_setup import configure_logging
from .plugin import THRESHOLD_FIELD


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="free-collateral",
        description="Notional V2 free collateral notifications",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    form_parser = sub.add_parser("form", help="Render the subscription form")
    form_parser.add_argument("address", help="Account address")

    check_parser = sub.add_parser("check", help="Evaluate one account once")
    check_parser.add_argument("address", help="Account address")
    check_parser.add_argument(
        "--threshold",
        type=float,
        default=1000.0,
        help="Free collateral threshold in USD (default: 1000)",
    )

    sub.add_parser("accounts", help="Evaluate every account in config.yaml")

    return parser


def _print(result: Any) -> None:
    print(json.dumps(result, indent=2))


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    plugin: NotificationPlugin = build_plugin(config)
    await plugin.on_init({})

    if args.command == "form":
        _print(await plugin.on_subscribe_form({"address": args.address}))
    elif args.command == "check":
        _print(
            await plugin.on_blocks(
                {
                    "address": args.address,
                    "subscription": {THRESHOLD_FIELD: args.threshold},
                }
            )
        )
    elif args.command == "accounts":
        results = {}
        for account in config.accounts:
            results[account.label or account.address] = await plugin.on_blocks(
                {
                    "address": account.address,
                    "subscription": {THRESHOLD_FIELD: account.threshold},
                }
            )
        _print(results)
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))


if __name__ == "__main__":
    main()
