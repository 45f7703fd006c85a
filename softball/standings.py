"""Round-robin standings calculation."""

import logging
import math
from typing import Iterable, Optional

from .game import GameRecord
from .models import Standing, Team

logger = logging.getLogger('softball.standings')


def find_tied_game(games: Iterable[GameRecord]) -> Optional[GameRecord]:
    """Return the first game whose two entered scores are level, if any."""
    for game in games:
        if game.is_tied:
            return game
    return None


def _sort_key(standing: Standing) -> tuple[float, int, int]:
    # Best first: win pct, run differential, then fewer games played
    return (-standing.win_pct, -standing.run_differential, standing.games_played)


def calculate_standings(
    teams: list[Team],
    games: Iterable[GameRecord],
) -> Optional[list[Standing]]:
    """
    Rank every team from the completed preliminary games.

    A game counts once both teams are assigned and both scores are entered.
    The table is rebuilt from scratch on every call.

    Ordering:
        1. Higher winning percentage
        2. Higher run differential
        3. Fewer games played
        Remaining ties keep team order (stable sort).

    Teams with the same won-loss record share a rank; games behind is
    measured against the first team in the sorted table.

    Args:
        teams: All tournament teams
        games: Preliminary round games

    Returns:
        Sorted standings, or None if any game with both scores entered is
        tied. Callers keep their previous table in that case.
    """
    games = list(games)

    tied = find_tied_game(games)
    if tied is not None:
        logger.info(
            f'Game {tied.id} is tied {tied.score1}-{tied.score2}, keeping previous standings'
        )
        return None

    standings = {team.id: Standing(team_id=team.id, team_name=team.name) for team in teams}

    for game in games:
        if not game.is_complete:
            continue

        standing1 = standings.get(game.team1_id)
        standing2 = standings.get(game.team2_id)
        if standing1 is None or standing2 is None:
            logger.debug(f'Game {game.id} references an unknown team, skipping')
            continue

        standing1.runs_scored += game.score1
        standing1.runs_allowed += game.score2
        standing2.runs_scored += game.score2
        standing2.runs_allowed += game.score1

        if game.score1 > game.score2:
            standing1.wins += 1
            standing2.losses += 1
        else:
            standing2.wins += 1
            standing1.losses += 1

    for standing in standings.values():
        played = standing.games_played
        standing.win_pct = standing.wins / played if played else 0.0
        standing.pct = math.floor(standing.win_pct * 1000 + 0.5) if played else 0

    ranked = sorted(standings.values(), key=_sort_key)
    if not ranked:
        return ranked

    leader = ranked[0]
    rank = 1
    for index, standing in enumerate(ranked):
        if index > 0:
            previous = ranked[index - 1]
            if (standing.wins, standing.losses) != (previous.wins, previous.losses):
                rank = index + 1
        standing.rank = rank

        if standing.games_played == 0:
            standing.games_behind = 0.0
        else:
            standing.games_behind = (
                (leader.wins - standing.wins) + (standing.losses - leader.losses)
            ) / 2

    return ranked


def standings_to_dicts(standings: list[Standing]) -> list[dict]:
    """Flatten standings for JSON export or printing."""
    return [
        {
            'rank': s.rank,
            'team_id': s.team_id,
            'name': s.team_name,
            'wins': s.wins,
            'losses': s.losses,
            'pct': s.pct,
            'runs_scored': s.runs_scored,
            'runs_allowed': s.runs_allowed,
            'run_differential': s.run_differential,
            'games_behind': s.games_behind,
        }
        for s in standings
    ]
