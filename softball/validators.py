"""Validation functions for rosters, games and the loaded tournament."""

from collections import Counter
from typing import Iterable

from .constants import CHAMPIONSHIP_GAME_ID, PRELIMINARY_GAME_IDS
from .game import GameRecord
from .innings import compute_totals, has_entries
from .models import Team


def validate_roster(team: Team) -> list[str]:
    """
    Validate a team's roster.

    Checks:
    - Every player points back at the team
    - No duplicate player ids or jersey numbers
    - Every player has a name

    Args:
        team: Team object to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    for player in team.players:
        if player.team_id != team.id:
            errors.append(
                f'{team.name}: player {player.id} belongs to team {player.team_id}'
            )
        if not player.name or not player.name.strip():
            errors.append(f'{team.name}: player {player.id} has no name')

    duplicate_ids = [pid for pid, n in Counter(p.id for p in team.players).items() if n > 1]
    if duplicate_ids:
        errors.append(
            f'{team.name} has duplicate player ids: {", ".join(map(str, sorted(duplicate_ids)))}'
        )

    duplicate_numbers = [
        num for num, n in Counter(p.number for p in team.players).items() if n > 1
    ]
    if duplicate_numbers:
        errors.append(
            f'{team.name} has duplicate numbers: {", ".join(map(str, sorted(duplicate_numbers)))}'
        )

    return errors


def validate_game(game: GameRecord, team_ids: set[int]) -> list[str]:
    """
    Validate one game record.

    Checks:
    - Team references point at known teams, and not both at the same one
    - Line score totals agree with the innings grid when it has entries
    - No negative counts

    Args:
        game: GameRecord to validate
        team_ids: Ids of every tournament team

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    for team_id in (game.team1_id, game.team2_id):
        if team_id is not None and team_id not in team_ids:
            errors.append(f'Game {game.id} references unknown team {team_id}')

    if game.team1_id is not None and game.team1_id == game.team2_id:
        errors.append(f'Game {game.id} has team {game.team1_id} on both sides')

    if has_entries(game.innings):
        totals = compute_totals(game.innings)
        if (game.score1, game.score2) != totals:
            errors.append(
                f'Game {game.id} score {game.score1}-{game.score2} does not match '
                f'innings total {totals[0]}-{totals[1]}'
            )

    for name in ('score1', 'score2', 'hits1', 'hits2', 'errors1', 'errors2'):
        value = getattr(game, name)
        if value is not None and value < 0:
            errors.append(f'Game {game.id} has negative {name}: {value}')

    return errors


def validate_tournament(teams: list[Team], games: Iterable[GameRecord]) -> list[str]:
    """
    Validate the loaded tournament as a whole.

    Checks every roster and game, that team ids are unique, that no player
    appears on two rosters, that no completed game is tied and that the 15
    preliminary games plus the championship are all present.

    Returns:
        List of validation error messages (empty if valid)
    """
    games = list(games)
    errors = []

    duplicate_teams = sorted(tid for tid, n in Counter(team.id for team in teams).items() if n > 1)
    if duplicate_teams:
        errors.append(f'Duplicate team ids: {", ".join(map(str, duplicate_teams))}')

    for team in teams:
        errors.extend(validate_roster(team))

    player_teams = Counter(player.id for team in teams for player in team.players)
    shared = sorted(pid for pid, n in player_teams.items() if n > 1)
    if shared:
        errors.append(f'Players on more than one roster: {", ".join(map(str, shared))}')

    team_ids = {team.id for team in teams}
    for game in games:
        errors.extend(validate_game(game, team_ids))
        if game.is_tied:
            errors.append(f'Game {game.id} is tied {game.score1}-{game.score2}')

    game_ids = {game.id for game in games}
    missing = [gid for gid in PRELIMINARY_GAME_IDS if gid not in game_ids]
    if missing:
        errors.append(f'Missing preliminary games: {", ".join(map(str, missing))}')
    if CHAMPIONSHIP_GAME_ID not in game_ids:
        errors.append(f'Missing championship game {CHAMPIONSHIP_GAME_ID}')

    return errors
