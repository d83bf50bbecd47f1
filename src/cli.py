#!/usr/bin/env python3
"""
Leaderboard admin tool.

Works directly against the configured store (Firestore when credentials
are set, otherwise the local JSON file).

Usage:
    python -m src.cli show
    python -m src.cli submit <name> <score>
    python -m src.cli reset
"""

import argparse
import asyncio
import logging
import sys

from tabulate import tabulate

from src.config import Config
from src.errors import InvalidScore
from src.models import LeaderboardEntry, format_timestamp
from src.services import LeaderboardService
from src.stores import create_store


def format_table(entries: list[LeaderboardEntry]) -> str:
    """Render entries as a ranked table"""
    if not entries:
        return "(leaderboard is empty)"

    table_data = [
        [i + 1, entry.name, entry.score, format_timestamp(entry.submittedAt)]
        for i, entry in enumerate(entries)
    ]
    return tabulate(
        table_data,
        headers=["Rank", "Name", "Score", "Submitted"],
        tablefmt="grid",
    )


async def run(args: argparse.Namespace, config: Config) -> int:
    store = create_store(config)
    service = LeaderboardService(store)

    try:
        if args.command == "show":
            entries = await service.get_top()
        elif args.command == "submit":
            try:
                entries = await service.submit(args.name, args.score)
            except InvalidScore as e:
                print(f"Error: {e}")
                return 1
        elif args.command == "reset":
            await store.save([])
            entries = []
        else:
            raise ValueError(f"Unknown command: {args.command}")
    finally:
        await store.close()

    print(format_table(entries))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and edit the Dust Farm leaderboard"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("show", help="Print the current top five")

    submit = subparsers.add_parser("submit", help="Submit a score")
    submit.add_argument("name", help="Submitter name")
    submit.add_argument("score", help="Score (non-negative number)")

    subparsers.add_parser("reset", help="Clear the leaderboard")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    config = Config.from_env()

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
