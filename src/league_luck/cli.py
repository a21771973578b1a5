"""
League Luck CLI

Command-line interface for luck analysis without running the API server.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from league_luck.clients.sleeper import SleeperAPIError, SleeperClient, SleeperHistoryLoader
from league_luck.config import configure_logging, get_settings
from league_luck.models import LeagueHistory, LeagueLuckReport, MemberLuckReport
from league_luck.services.formatting import (
    format_luck_index,
    format_schedule_strength,
    format_win_percentage,
)
from league_luck.services.history import LuckHistoryService


class LeagueLuck:
    """
    Loads Sleeper league history and produces luck reports.

    Can be used as a library or via CLI.

    Example:
        async with LeagueLuck() as luck:
            history = await luck.load_history("1127116641403351040")
            report = luck.league_report(history)
            print(report.luckiest_member)
    """

    def __init__(self, include_playoffs: bool = False):
        self.include_playoffs = include_playoffs
        self.client: SleeperClient | None = None

    async def __aenter__(self):
        self.client = SleeperClient()
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.__aexit__(exc_type, exc_val, exc_tb)

    async def load_history(
        self, league_id: str, max_seasons: int | None = None
    ) -> LeagueHistory:
        """Load a league's seasons from Sleeper, most recent first."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        loader = SleeperHistoryLoader(self.client)
        return await loader.load(league_id, max_seasons=max_seasons)

    def member_report(self, history: LeagueHistory, member_id: str) -> MemberLuckReport:
        return LuckHistoryService(history, self.include_playoffs).member_report(member_id)

    def league_report(self, history: LeagueHistory) -> LeagueLuckReport:
        return LuckHistoryService(history, self.include_playoffs).league_report()


def load_history_file(path: str) -> LeagueHistory:
    """Read a LeagueHistory JSON document."""
    return LeagueHistory.model_validate_json(Path(path).read_text())


def print_member_report(report: MemberLuckReport) -> None:
    print(f"🍀 {report.member_name} - Luck Report\n")

    career = report.career
    if career is None:
        print("No final games found.")
        return

    record = f"{career.actual_wins}-{career.actual_losses}"
    if career.actual_ties:
        record += f"-{career.actual_ties}"
    print(f"Career record:      {record} ({career.weeks_played} weeks)")
    print(f"Expected wins:      {career.expected_wins:.1f}")
    print(f"Luck index:         {report.luck_display} ({report.luck_description})")
    print(f"Schedule strength:  {report.schedule_display} ({report.schedule_classification.value})")

    if not report.seasons:
        return

    print()
    print(f"{'Year':<6} {'Record':<10} {'xW':<7} {'Luck':<7} {'SoS':<6}")
    print("-" * 40)
    for s in report.seasons:
        record = f"{s.actual_wins}-{s.actual_losses}"
        if s.actual_ties:
            record += f"-{s.actual_ties}"
        print(
            f"{s.year:<6} {record:<10} {s.expected_wins:<7.1f} "
            f"{format_luck_index(s.luck_index):<7} {format_schedule_strength(s.schedule_strength):<6}"
        )


def print_league_report(report: LeagueLuckReport) -> None:
    name = report.league_name or "League"
    print(f"🍀 {name} - Luck Rankings ({report.seasons_analyzed} seasons)\n")

    if not report.members:
        print("No final games found.")
        return

    print(f"{'Rank':<5} {'Manager':<25} {'W':<5} {'xW':<7} {'Luck':<7} {'Opp Win%':<8}")
    print("-" * 60)
    for m in report.members:
        print(
            f"{m.luck_rank:<5} {m.member_name:<25} {m.stats.actual_wins:<5} "
            f"{m.stats.expected_wins:<7.1f} {format_luck_index(m.stats.luck_index):<7} "
            f"{format_win_percentage(m.stats.schedule_strength):<8}"
        )

    print(f"\nLuckiest:   {report.luckiest_member} ({format_luck_index(report.luckiest_score)})")
    print(f"Unluckiest: {report.unluckiest_member} ({format_luck_index(report.unluckiest_score)})")


async def cli_main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fantasy league all-play luck analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Luck rankings across a Sleeper league's seasons
  league-luck league 1127116641403351040

  # One manager's career and season-by-season luck
  league-luck member 1127116641403351040 396848925316399104 --max-seasons 3

  # Rankings from an exported history file
  league-luck file history.json
        """,
    )

    parser.add_argument(
        "--include-playoffs",
        action="store_true",
        default=None,
        help="Count playoff weeks (default from LEAGUE_LUCK_INCLUDE_PLAYOFFS)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # league command
    league_parser = subparsers.add_parser("league", help="League-wide luck rankings")
    league_parser.add_argument("league_id", help="Most recent Sleeper league ID")
    league_parser.add_argument(
        "--max-seasons", type=int, default=None, help="Seasons to load (default: all)"
    )

    # member command
    member_parser = subparsers.add_parser("member", help="One manager's luck report")
    member_parser.add_argument("league_id", help="Most recent Sleeper league ID")
    member_parser.add_argument("user_id", help="Sleeper user ID")
    member_parser.add_argument(
        "--max-seasons", type=int, default=None, help="Seasons to load (default: all)"
    )

    # file command
    file_parser = subparsers.add_parser("file", help="Analyze a league history JSON file")
    file_parser.add_argument("path", help="Path to a LeagueHistory JSON document")
    file_parser.add_argument(
        "member_id", nargs="?", help="Member to report on (default: league rankings)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    settings = get_settings()
    configure_logging(settings)
    include_playoffs = (
        settings.include_playoffs if args.include_playoffs is None else args.include_playoffs
    )

    if args.command == "file":
        try:
            history = load_history_file(args.path)
        except (OSError, ValidationError) as e:
            print(f"❌ Could not read {args.path}: {e}")
            sys.exit(1)

        luck = LeagueLuck(include_playoffs=include_playoffs)
        if args.member_id:
            print_member_report(luck.member_report(history, args.member_id))
        else:
            print_league_report(luck.league_report(history))
        return

    async with LeagueLuck(include_playoffs=include_playoffs) as luck:
        try:
            history = await luck.load_history(args.league_id, args.max_seasons)
        except SleeperAPIError as e:
            print(f"❌ {e.message}")
            sys.exit(1)

        if args.command == "league":
            print_league_report(luck.league_report(history))

        elif args.command == "member":
            print_member_report(luck.member_report(history, args.user_id))


def run_cli():
    """Entry point for CLI."""
    asyncio.run(cli_main())


if __name__ == "__main__":
    run_cli()
