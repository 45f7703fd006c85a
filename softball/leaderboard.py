"""Batting and pitching leaderboards aggregated from game box scores."""

import math
from dataclasses import dataclass, field
from typing import Iterable

from .constants import (
    BATTING_FIELDS,
    BATTING_PA_PER_GAME,
    LEADERBOARD_LIMIT,
    OUTS_PER_GAME,
    OUTS_PER_INNING,
    PITCHING_FIELDS,
    PITCHING_IP_PER_GAME,
)
from .game import GameRecord
from .models import BattingLeader, PitchingLeader, Player, Team


def ip_to_outs(innings_pitched: float | None) -> int:
    """
    Convert box-score innings pitched to outs.

    The tenths digit counts outs, so 4.2 -> 4 * 3 + 2 = 14 outs.
    """
    ip = innings_pitched or 0.0
    whole = math.floor(ip)
    partial = math.floor((ip % 1) * 10 + 0.5)
    return whole * OUTS_PER_INNING + partial


def outs_to_ip(outs: int) -> float:
    """Convert outs back to box-score notation: 28 outs -> 9.1."""
    return outs // OUTS_PER_INNING + (outs % OUTS_PER_INNING) / 10


def add_innings_pitched(current: float | None, new: float | None) -> float:
    """Add two innings-pitched values through outs (4.2 + 4.2 = 9.1)."""
    return outs_to_ip(ip_to_outs(current) + ip_to_outs(new))


@dataclass
class PlayerTotals:
    """Running totals for one player across every completed game."""
    player: Player
    team_name: str
    batting: dict[str, int] = field(default_factory=lambda: dict.fromkeys(BATTING_FIELDS, 0))
    pitching: dict[str, float] = field(
        default_factory=lambda: dict.fromkeys(PITCHING_FIELDS, 0)
    )
    batting_games: int = 0
    pitching_games: int = 0

    @property
    def outs(self) -> int:
        return ip_to_outs(self.pitching['innings_pitched'])


def aggregate_player_totals(
    games: Iterable[GameRecord],
    teams: list[Team],
) -> tuple[dict[int, PlayerTotals], dict[int, int]]:
    """
    Sum every player's box score lines over the completed games.

    A game is counted once both scores are entered. Stat rows for players not
    on any roster are ignored.

    Args:
        games: Preliminary and championship games
        teams: All teams with rosters

    Returns:
        Tuple of (totals, team_games)
        - totals: player id -> PlayerTotals
        - team_games: team id -> completed games the team took part in
    """
    totals: dict[int, PlayerTotals] = {}
    team_games: dict[int, int] = {team.id: 0 for team in teams}

    for team in teams:
        for player in team.players:
            totals[player.id] = PlayerTotals(player=player, team_name=team.name)

    for game in games:
        if not game.has_scores:
            continue

        for team_id in (game.team1_id, game.team2_id):
            if team_id is not None:
                team_games[team_id] = team_games.get(team_id, 0) + 1

        for stat in game.batting_stats:
            player_totals = totals.get(stat.player_id)
            if player_totals is None:
                continue
            for name in BATTING_FIELDS:
                player_totals.batting[name] += getattr(stat, name) or 0
            player_totals.batting_games += 1

        for stat in game.pitching_stats:
            player_totals = totals.get(stat.player_id)
            if player_totals is None:
                continue
            pitching = player_totals.pitching
            pitching['innings_pitched'] = add_innings_pitched(
                pitching['innings_pitched'], stat.innings_pitched
            )
            for name in PITCHING_FIELDS:
                if name != 'innings_pitched':
                    pitching[name] += getattr(stat, name) or 0
            player_totals.pitching_games += 1

    return totals, team_games


def get_batting_leaders(
    games: Iterable[GameRecord],
    teams: list[Team],
    limit: int = LEADERBOARD_LIMIT,
    pa_per_game: float = BATTING_PA_PER_GAME,
) -> list[BattingLeader]:
    """
    Top hitters by batting average, home runs breaking ties.

    A player qualifies once their team has completed a game and they have at
    least ``pa_per_game`` plate appearances per team game.
    """
    totals, team_games = aggregate_player_totals(games, teams)

    leaders = []
    for player_totals in totals.values():
        player = player_totals.player
        played = team_games.get(player.team_id, 0)
        batting = player_totals.batting
        if played == 0 or batting['plate_appearances'] < played * pa_per_game:
            continue

        at_bats = batting['at_bats']
        leaders.append(
            BattingLeader(
                player_id=player.id,
                name=player.name,
                team_id=player.team_id,
                team_name=player_totals.team_name,
                avg=batting['hits'] / at_bats if at_bats > 0 else 0.0,
                home_runs=batting['home_runs'],
                rbi=batting['rbi'],
                hits=batting['hits'],
                runs=batting['runs'],
                plate_appearances=batting['plate_appearances'],
                games_played=player_totals.batting_games,
            )
        )

    leaders.sort(key=lambda leader: (-leader.avg, -leader.home_runs))
    return leaders[:limit]


def get_pitching_leaders(
    games: Iterable[GameRecord],
    teams: list[Team],
    limit: int = LEADERBOARD_LIMIT,
    ip_per_game: float = PITCHING_IP_PER_GAME,
) -> list[PitchingLeader]:
    """
    Top pitchers by ERA (7-inning scale), strikeouts breaking ties.

    A pitcher qualifies once their team has completed a game and they have
    pitched at least ``ip_per_game`` innings per team game.
    """
    totals, team_games = aggregate_player_totals(games, teams)

    leaders = []
    for player_totals in totals.values():
        player = player_totals.player
        played = team_games.get(player.team_id, 0)
        outs = player_totals.outs
        if played == 0 or outs / OUTS_PER_INNING < played * ip_per_game:
            continue

        pitching = player_totals.pitching
        leaders.append(
            PitchingLeader(
                player_id=player.id,
                name=player.name,
                team_id=player.team_id,
                team_name=player_totals.team_name,
                era=pitching['earned_runs'] * OUTS_PER_GAME / outs if outs > 0 else 0.0,
                strike_outs=pitching['strike_outs'],
                innings_pitched=pitching['innings_pitched'],
                wins=pitching['wins'],
                losses=pitching['losses'],
                games_played=player_totals.pitching_games,
            )
        )

    leaders.sort(key=lambda leader: (leader.era, -leader.strike_outs))
    return leaders[:limit]
