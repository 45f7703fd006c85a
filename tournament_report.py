#!/usr/bin/env python3
"""
Softball Tournament Report CLI

Loads a tournament file, rebuilds the standings and the championship
pairing, and prints them (optionally with the batting and pitching leaders).

Usage:
    python tournament_report.py --data data/tournament.json
    python tournament_report.py --data data/tournament.json --leaders
    python tournament_report.py --data data/tournament.json --json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from softball import JsonTournamentStore, StoreError, Tournament, standings_to_dicts
from softball.logging_config import setup_logging
from softball.utils import format_average, format_era, format_games_behind


def print_standings(tournament: Tournament) -> None:
    print("\n" + "=" * 60)
    print("STANDINGS")
    print("=" * 60)
    print(f"  {'#':>2}  {'Team':<20} {'W':>3} {'L':>3} {'PCT':>5} {'RS':>4} {'RA':>4} {'GB':>4}")
    for s in tournament.standings:
        print(
            f"  {s.rank:>2}  {s.team_name:<20} {s.wins:>3} {s.losses:>3} {s.pct:>5} "
            f"{s.runs_scored:>4} {s.runs_allowed:>4} {format_games_behind(s.games_behind):>4}"
        )


def print_championship(tournament: Tournament) -> None:
    final = tournament.championship_game
    team1 = tournament.find_team(final.team1_id)
    team2 = tournament.find_team(final.team2_id)

    print("\n" + "=" * 60)
    print("CHAMPIONSHIP")
    print("=" * 60)
    if team1 is None or team2 is None:
        print("  Not seeded yet")
        return

    score = ""
    if final.has_scores:
        score = f"  ({final.score1}-{final.score2})"
    print(f"  {team1.name} vs {team2.name}{score}")
    if final.day or final.time:
        print(f"  {final.day} {final.time}".rstrip())
    if tournament.champion:
        print(f"  Champion: {tournament.champion}")


def print_leaders(tournament: Tournament) -> None:
    print("\n" + "=" * 60)
    print("BATTING LEADERS")
    print("=" * 60)
    for rank, leader in enumerate(tournament.batting_leaders(), 1):
        print(
            f"  {rank:>2}. {leader.name:<20} {leader.team_name:<16} "
            f"{format_average(leader.avg)}  HR {leader.home_runs}  RBI {leader.rbi}"
        )

    print("\n" + "=" * 60)
    print("PITCHING LEADERS")
    print("=" * 60)
    for rank, leader in enumerate(tournament.pitching_leaders(), 1):
        print(
            f"  {rank:>2}. {leader.name:<20} {leader.team_name:<16} "
            f"ERA {format_era(leader.era)}  K {leader.strike_outs}  IP {leader.innings_pitched}"
        )


def main():
    parser = argparse.ArgumentParser(description="Softball tournament standings and leaders")
    parser.add_argument(
        "--data", "-d",
        default="data/tournament.json",
        help="Path to the tournament JSON file",
    )
    parser.add_argument(
        "--leaders", "-l",
        action="store_true",
        help="Also print batting and pitching leaders",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print standings as JSON instead of a table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_to_file=False,
    )

    data_path = Path(args.data)
    if not data_path.exists():
        print(f"❌ Tournament file not found: {data_path}")
        sys.exit(1)

    try:
        tournament = asyncio.run(Tournament.load(JsonTournamentStore(data_path)))
    except StoreError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(standings_to_dicts(tournament.standings), indent=2))
        return

    print_standings(tournament)
    print_championship(tournament)
    if args.leaders:
        print_leaders(tournament)


if __name__ == "__main__":
    main()
