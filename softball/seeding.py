"""Championship seeding and champion detection.

The final is a single game between the top two teams of the preliminary
round:

- side 1 (team1): 2nd place
- side 2 (team2): 1st place, batting last
"""

import logging
from typing import Optional

from .game import GameRecord
from .innings import has_entries
from .models import Standing, Team

logger = logging.getLogger('softball.seeding')


def determine_seeds(standings: list[Standing]) -> dict[int, int]:
    """
    Map team id -> seed from standings already sorted by rank.

    Args:
        standings: Standings sorted best first

    Returns:
        Dict mapping team id to seed number (1-based)
    """
    return {standing.team_id: seed for seed, standing in enumerate(standings, 1)}


def get_championship_matchup(standings: list[Standing]) -> Optional[tuple[int, int]]:
    """Return (team1_id, team2_id) for the final, or None with fewer than two teams."""
    if len(standings) < 2:
        return None
    return standings[1].team_id, standings[0].team_id


def championship_started(game: GameRecord) -> bool:
    """True once any score, innings cell or box score line exists for the final."""
    return (
        has_entries(game.innings)
        or game.score1 is not None
        or game.score2 is not None
        or bool(game.batting_stats)
        or bool(game.pitching_stats)
    )


def seed_championship(championship: GameRecord, standings: list[Standing]) -> bool:
    """
    Point the championship game at the current top two teams.

    Only the team references are rewritten; scores, innings and box score
    already entered for the final are left alone.

    Returns:
        True if the pairing changed
    """
    matchup = get_championship_matchup(standings)
    if matchup is None:
        return False

    changed = championship.set_teams(*matchup)
    if changed:
        logger.info(
            f'Championship seeded: team {matchup[0]} (2nd) vs team {matchup[1]} (1st)'
        )
    return changed


def determine_champion(championship: GameRecord, teams: list[Team]) -> Optional[Team]:
    """
    Return the winner of the final once both scores are in and not level.

    Args:
        championship: The championship game record
        teams: All tournament teams

    Returns:
        Winning Team, or None if the final is unfinished, tied or unseeded
    """
    winner_id = championship.winner_id()
    if winner_id is None:
        return None
    return next((team for team in teams if team.id == winner_id), None)
