"""Command-line access to the wallet core.

Usage:
  python -m arena_wallet balances G...
  python -m arena_wallet history [--limit N]
  python -m arena_wallet clear-history
  python -m arena_wallet session [show|connect G... --signer freighter|disconnect]
  python -m arena_wallet link HASH [--kind classic|soroban]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from arena_wallet.core import WalletCore
from arena_wallet.features.balances.service import BalanceQueryError, format_asset_amount
from arena_wallet.shared.logging import get_logger, setup_logging
from arena_wallet.types import SignerKind, TxKind

logger = get_logger(__name__)


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2))


def cmd_balances(core: WalletCore, args: argparse.Namespace) -> int:
    try:
        balances = asyncio.run(core.balances.get_balances(args.public_key))
    except BalanceQueryError as e:
        print(str(e), file=sys.stderr)
        return 1

    if args.json:
        _print_json({code.value: balance.to_dict() for code, balance in balances.items()})
        return 0

    for code, balance in balances.items():
        trustline = "" if balance.has_trustline else "  (no trustline)"
        print(
            f"{code.value:<7} available {format_asset_amount(balance.available):>16}"
            f"  locked {format_asset_amount(balance.locked):>12}"
            f"  total {format_asset_amount(balance.total):>16}{trustline}"
        )
    return 0


def cmd_history(core: WalletCore, args: argparse.Namespace) -> int:
    items = core.tracker.history[: args.limit]
    if args.json:
        _print_json([item.to_dict() for item in items])
        return 0

    if not items:
        print("No transactions recorded.")
        return 0

    for item in items:
        line = (
            f"{item.timestamp}  {item.status.value:<8} {item.direction.value:<8} "
            f"{format_asset_amount(item.amount)} {item.asset.value}"
        )
        if item.explorer_url:
            line += f"  {item.explorer_url}"
        if item.reason:
            line += f"  ({item.reason})"
        print(line)
    return 0


def cmd_clear_history(core: WalletCore, args: argparse.Namespace) -> int:
    core.tracker.clear_history()
    print("Transaction history cleared.")
    return 0


def cmd_session(core: WalletCore, args: argparse.Namespace) -> int:
    if args.action == "connect":
        if not args.public_key:
            print("A public key is required to connect.", file=sys.stderr)
            return 2
        try:
            session = core.sessions.connect(args.public_key, SignerKind(args.signer))
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 1
        _print_json(session.to_dict())
        return 0

    if args.action == "disconnect":
        core.sessions.disconnect()
        print("Wallet disconnected.")
        return 0

    session = core.sessions.current()
    if session is None:
        print("No wallet connected.")
        return 0
    _print_json(session.to_dict())
    return 0


def cmd_link(core: WalletCore, args: argparse.Namespace) -> int:
    print(core.links.build_link(args.hash, TxKind(args.kind)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arena_wallet", description=__doc__.splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    balances = subparsers.add_parser("balances", help="Show reconciled balances")
    balances.add_argument("public_key")
    balances.add_argument("--json", action="store_true")
    balances.set_defaults(handler=cmd_balances)

    history = subparsers.add_parser("history", help="Show recorded transactions")
    history.add_argument("--limit", type=int, default=20)
    history.add_argument("--json", action="store_true")
    history.set_defaults(handler=cmd_history)

    clear = subparsers.add_parser("clear-history", help="Forget recorded transactions")
    clear.set_defaults(handler=cmd_clear_history)

    session = subparsers.add_parser("session", help="Inspect or change the wallet session")
    session.add_argument(
        "action", nargs="?", default="show", choices=("show", "connect", "disconnect")
    )
    session.add_argument("public_key", nargs="?")
    session.add_argument(
        "--signer", default=SignerKind.FREIGHTER.value, choices=[k.value for k in SignerKind]
    )
    session.set_defaults(handler=cmd_session)

    link = subparsers.add_parser("link", help="Print the explorer link for a hash")
    link.add_argument("hash")
    link.add_argument("--kind", default=TxKind.CLASSIC.value, choices=[k.value for k in TxKind])
    link.set_defaults(handler=cmd_link)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    core = WalletCore.create()
    logger.debug("Running command %s", args.command)
    return args.handler(core, args)


if __name__ == "__main__":
    sys.exit(main())
