"""CLI entry point: python main.py positions --accounts 123456782"""

import argparse
import asyncio
import json
import sys

from src.logging_config import LoggingConfig, LogLevel, configure_logging
from src.settings import get_settings
from src.tradestation import (
    LoggingObserver,
    TradeStationClient,
    TradeStationError,
    is_heartbeat,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TradeStation - query accounts, orders and market data"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log every request with timing"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("accounts", help="List brokerage accounts")

    p = sub.add_parser("balances", help="Account balances")
    p.add_argument("--accounts", required=True, help="Comma-separated account IDs")

    p = sub.add_parser("positions", help="Account positions")
    p.add_argument("--accounts", required=True, help="Comma-separated account IDs")
    p.add_argument("--symbol", default=None, help="Filter by symbol(s)")

    p = sub.add_parser("orders", help="Today's and open orders")
    p.add_argument("--accounts", required=True, help="Comma-separated account IDs")

    p = sub.add_parser("quotes", help="Quote snapshots")
    p.add_argument("symbols", help="Comma-separated symbols")

    p = sub.add_parser("bars", help="Historical bars")
    p.add_argument("symbol")
    p.add_argument("--interval", default=None, help="Bar interval (default: 1)")
    p.add_argument("--unit", default=None, help="Minute, Daily, Weekly, Monthly (default: Daily)")
    p.add_argument("--barsback", default=None, help="Bars back (default: 1)")

    p = sub.add_parser("suggest", help="Suggest symbols from partial text")
    p.add_argument("text")
    p.add_argument("--top", type=int, default=None)

    p = sub.add_parser("stream-quotes", help="Stream quote changes")
    p.add_argument("symbols", help="Comma-separated symbols")
    p.add_argument(
        "--limit", type=int, default=10,
        help="Stop after this many quotes (default: 10)"
    )
    return parser


async def run(args: argparse.Namespace, client: TradeStationClient):
    """Dispatch one CLI command; returns the JSON-serialisable result."""
    if args.command == "accounts":
        return await client.accounts.get_accounts()
    if args.command == "balances":
        return await client.accounts.get_account_balances(args.accounts)
    if args.command == "positions":
        return await client.accounts.get_positions(args.accounts, symbol=args.symbol)
    if args.command == "orders":
        return await client.accounts.get_orders(args.accounts)
    if args.command == "quotes":
        return await client.market_data.get_quote_snapshots(args.symbols)
    if args.command == "bars":
        return await client.market_data.get_bars(
            args.symbol, interval=args.interval, unit=args.unit, barsback=args.barsback
        )
    if args.command == "suggest":
        return await client.symbols.suggest_symbols(args.text, top=args.top)
    if args.command == "stream-quotes":
        seen = 0
        async with await client.market_data.stream_quote_changes(args.symbols) as stream:
            async for record in stream:
                if is_heartbeat(record):
                    continue
                print(json.dumps(record))
                seen += 1
                if seen >= args.limit:
                    break
        return None
    raise ValueError(f"Unknown command: {args.command}")


async def amain(args: argparse.Namespace) -> int:
    settings = get_settings()
    if not settings.access_token:
        print("TRADESTATION_ACCESS_TOKEN is not set", file=sys.stderr)
        return 2

    log_config = LoggingConfig.from_settings(settings)
    if args.verbose:
        log_config.level = LogLevel.DEBUG
    configure_logging(log_config)
    observer = LoggingObserver(config=log_config) if args.verbose else None

    async with TradeStationClient.from_settings(settings, observer=observer) as client:
        try:
            result = await run(args, client)
        except TradeStationError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if result is not None:
        print(json.dumps(result, indent=2))
    return 0


def main():
    args = build_parser().parse_args()
    sys.exit(asyncio.run(amain(args)))


if __name__ == "__main__":
    main()
