"""Persistence collaborator contract and a JSON-file implementation.

The engine talks to storage only through ``TournamentStore``. Every method is
a coroutine so the write-back path can await it and catch failures without
blocking the caller.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol

from .constants import CHAMPIONSHIP_GAME_ID
from .game import GameRecord, coerce_batting_update, coerce_pitching_update
from .innings import ensure_innings
from .models import BattingStat, PitchingStat, Player, Team
from .schemas import (
    BattingStatRecord,
    GameRow,
    PitchingStatRecord,
    PlayerRecord,
    TeamRecord,
    TournamentFile,
)
from .utils import load_json, save_json

logger = logging.getLogger('softball.store')

GAME_UPDATE_FIELDS = frozenset(
    {
        'team1_id',
        'team2_id',
        'score1',
        'score2',
        'hits1',
        'hits2',
        'errors1',
        'errors2',
        'day',
        'time',
        'innings',
    }
)

PLAYER_UPDATE_FIELDS = frozenset({'number', 'name', 'role', 'place_of_birth'})


class StoreError(Exception):
    """A persistence call failed."""


class TournamentStore(Protocol):
    async def fetch_teams_with_rosters(self) -> list[Team]: ...

    async def fetch_games(self) -> list[GameRecord]: ...

    async def upsert_game(self, game_id: int, fields: Mapping[str, Any]) -> None: ...

    async def upsert_batting_stat(
        self, player_id: int, game_id: int, stats: Mapping[str, Any]
    ) -> None: ...

    async def upsert_pitching_stat(
        self, player_id: int, game_id: int, stats: Mapping[str, Any]
    ) -> None: ...

    async def update_player(self, player_id: int, fields: Mapping[str, Any]) -> None: ...

    async def reset_all_scores_and_stats(self) -> None: ...


def team_from_record(record: TeamRecord) -> Team:
    return Team(
        id=record.id,
        name=record.name,
        players=[Player(**player.model_dump()) for player in record.players],
    )


def game_from_row(
    row: GameRow,
    batting: list[BattingStatRecord] | None = None,
    pitching: list[PitchingStatRecord] | None = None,
) -> GameRecord:
    """Build an in-memory GameRecord from a stored row and its stat rows."""
    game = GameRecord(
        id=row.id,
        team1_id=row.team1_id,
        team2_id=row.team2_id,
        score1=row.score1,
        score2=row.score2,
        hits1=row.hits1,
        hits2=row.hits2,
        errors1=row.errors1,
        errors2=row.errors2,
        day=row.day,
        time=row.time,
        innings=ensure_innings(row.innings),
    )
    game.batting_stats = [BattingStat(**stat.model_dump()) for stat in batting or []]
    game.pitching_stats = [PitchingStat(**stat.model_dump()) for stat in pitching or []]
    return game


class JsonTournamentStore:
    """
    TournamentStore backed by a single tournament.json file.

    The file is re-read on every call and rewritten after every mutation.
    I/O and validation problems are raised as StoreError.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _load(self) -> TournamentFile:
        try:
            return load_json(self.path, schema=TournamentFile)
        except (FileNotFoundError, json.JSONDecodeError, ValueError) as e:
            raise StoreError(f'Could not read {self.path}: {e}') from e

    def _save(self, data: TournamentFile) -> None:
        try:
            save_json(self.path, data)
        except (OSError, TypeError) as e:
            raise StoreError(f'Could not write {self.path}: {e}') from e

    async def fetch_teams_with_rosters(self) -> list[Team]:
        data = self._load()
        return [team_from_record(team) for team in sorted(data.teams, key=lambda t: t.id)]

    async def fetch_games(self) -> list[GameRecord]:
        data = self._load()
        games = []
        for row in sorted(data.games, key=lambda g: g.id):
            batting = [s for s in data.batting_stats if s.game_id == row.id]
            pitching = [s for s in data.pitching_stats if s.game_id == row.id]
            games.append(game_from_row(row, batting, pitching))
        return games

    async def upsert_game(self, game_id: int, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - GAME_UPDATE_FIELDS
        if unknown:
            raise StoreError(f'Unknown game fields: {", ".join(sorted(unknown))}')

        data = self._load()
        existing = next((g for g in data.games if g.id == game_id), None)
        merged = existing.model_dump(exclude_unset=True) if existing else {'id': game_id}
        merged.update(fields)
        try:
            row = GameRow.model_validate(merged)
        except ValueError as e:
            raise StoreError(f'Invalid game {game_id}: {e}') from e

        data.games = [g for g in data.games if g.id != game_id] + [row]
        self._save(data)
        logger.debug(f'Saved game {game_id}')

    async def upsert_batting_stat(
        self, player_id: int, game_id: int, stats: Mapping[str, Any]
    ) -> None:
        data = self._load()
        update = coerce_batting_update(stats)
        data.batting_stats = self._merge_stat(
            data.batting_stats, BattingStatRecord, player_id, game_id, update
        )
        self._save(data)

    async def upsert_pitching_stat(
        self, player_id: int, game_id: int, stats: Mapping[str, Any]
    ) -> None:
        data = self._load()
        update = coerce_pitching_update(stats)
        data.pitching_stats = self._merge_stat(
            data.pitching_stats, PitchingStatRecord, player_id, game_id, update
        )
        self._save(data)

    @staticmethod
    def _merge_stat(rows, record_type, player_id, game_id, update):
        merged = {'game_id': game_id, 'player_id': player_id}
        kept = []
        for row in rows:
            if row.player_id == player_id and row.game_id == game_id:
                merged = row.model_dump(exclude_unset=True)
            else:
                kept.append(row)
        merged.update(update)
        try:
            kept.append(record_type.model_validate(merged))
        except ValueError as e:
            raise StoreError(f'Invalid stat row for player {player_id}: {e}') from e
        return kept

    async def update_player(self, player_id: int, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - PLAYER_UPDATE_FIELDS
        if unknown:
            raise StoreError(f'Unknown player fields: {", ".join(sorted(unknown))}')

        data = self._load()
        for team in data.teams:
            for index, player in enumerate(team.players):
                if player.id == player_id:
                    try:
                        team.players[index] = PlayerRecord.model_validate(
                            {**player.model_dump(exclude_unset=True), **fields}
                        )
                    except ValueError as e:
                        raise StoreError(f'Invalid player {player_id}: {e}') from e
                    self._save(data)
                    return
        raise StoreError(f'Player {player_id} not found')

    async def reset_all_scores_and_stats(self) -> None:
        """
        Delete every stat row and null every game's line score and innings.

        Only the championship game loses its team references; rosters and
        preliminary pairings are untouched.
        """
        data = self._load()
        data.batting_stats = []
        data.pitching_stats = []

        games = []
        for row in data.games:
            reset = row.model_copy(
                update={
                    'score1': None,
                    'score2': None,
                    'hits1': None,
                    'hits2': None,
                    'errors1': None,
                    'errors2': None,
                    'innings': [],
                }
            )
            if row.id == CHAMPIONSHIP_GAME_ID:
                reset = reset.model_copy(update={'team1_id': None, 'team2_id': None})
            games.append(reset)
        data.games = games

        self._save(data)
        logger.info(f'Reset all scores and stats in {self.path}')
