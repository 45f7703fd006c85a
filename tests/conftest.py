"""Shared fixtures: a six-team round robin and an in-memory store."""

from itertools import combinations

import pytest

from softball.constants import CHAMPIONSHIP_GAME_ID
from softball.game import GameRecord
from softball.models import Player, Team
from softball.schemas import TournamentConfig
from softball.store import StoreError


@pytest.fixture
def anyio_backend():
    return 'asyncio'


def make_teams(count: int = 6) -> list[Team]:
    teams = []
    for team_id in range(1, count + 1):
        players = [
            Player(id=team_id * 10 + n, team_id=team_id, number=n, name=f'Player {team_id}-{n}')
            for n in (1, 2)
        ]
        teams.append(Team(id=team_id, name=f'Team {team_id}', players=players))
    return teams


def make_schedule(teams: list[Team]) -> list[GameRecord]:
    """Every pairing once (15 games for six teams) plus an unseeded final."""
    games = [
        GameRecord(id=game_id, team1_id=a.id, team2_id=b.id, day='Day 1', time='10:00')
        for game_id, (a, b) in enumerate(combinations(teams, 2), 1)
    ]
    games.append(GameRecord(id=CHAMPIONSHIP_GAME_ID, day='Day 4', time='21:00'))
    return games


class FakeStore:
    """TournamentStore that records every call and can be told to fail."""

    def __init__(self, teams=None, games=None):
        self.teams = teams or []
        self.games = games or []
        self.fail = False
        self.game_writes = []
        self.batting_writes = []
        self.pitching_writes = []
        self.player_writes = []
        self.resets = 0

    def _check(self):
        if self.fail:
            raise StoreError('store unavailable')

    async def fetch_teams_with_rosters(self):
        self._check()
        return self.teams

    async def fetch_games(self):
        self._check()
        return self.games

    async def upsert_game(self, game_id, fields):
        self._check()
        self.game_writes.append((game_id, dict(fields)))

    async def upsert_batting_stat(self, player_id, game_id, stats):
        self._check()
        self.batting_writes.append((player_id, game_id, dict(stats)))

    async def upsert_pitching_stat(self, player_id, game_id, stats):
        self._check()
        self.pitching_writes.append((player_id, game_id, dict(stats)))

    async def update_player(self, player_id, fields):
        self._check()
        self.player_writes.append((player_id, dict(fields)))

    async def reset_all_scores_and_stats(self):
        self._check()
        self.resets += 1


@pytest.fixture
def teams():
    return make_teams()


@pytest.fixture
def games(teams):
    return make_schedule(teams)


@pytest.fixture
def store(teams, games):
    return FakeStore(teams, games)


@pytest.fixture
def config():
    return TournamentConfig(
        persist_debounce_ms=10,
        championship_day='Day 4: Saturday, March 21',
        championship_time='21:00',
    )
