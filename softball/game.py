"""Game record: line score, innings grid and box score for one game."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from .constants import CHAMPIONSHIP_GAME_ID, REGULATION_INNINGS
from .innings import (
    Innings,
    empty_innings,
    ensure_innings,
    has_entries,
    mirror_innings,
    update_inning,
)
from .models import BattingStat, PitchingStat
from .utils import parse_float, parse_int, parse_optional_int

logger = logging.getLogger('softball.game')


class GameField(str, Enum):
    """Game fields a user may edit directly."""

    SCORE1 = 'score1'
    SCORE2 = 'score2'
    HITS1 = 'hits1'
    HITS2 = 'hits2'
    ERRORS1 = 'errors1'
    ERRORS2 = 'errors2'
    DAY = 'day'
    TIME = 'time'

    @property
    def is_numeric(self) -> bool:
        return self not in (GameField.DAY, GameField.TIME)

    @property
    def is_score(self) -> bool:
        return self in (GameField.SCORE1, GameField.SCORE2)


class BattingField(str, Enum):
    PLATE_APPEARANCES = 'plate_appearances'
    AT_BATS = 'at_bats'
    HITS = 'hits'
    RUNS = 'runs'
    RBI = 'rbi'
    HOME_RUNS = 'home_runs'
    WALKS = 'walks'
    STRIKE_OUTS = 'strike_outs'


class PitchingField(str, Enum):
    INNINGS_PITCHED = 'innings_pitched'
    HITS = 'hits'
    RUNS = 'runs'
    EARNED_RUNS = 'earned_runs'
    WALKS = 'walks'
    STRIKE_OUTS = 'strike_outs'
    WINS = 'wins'
    LOSSES = 'losses'


def coerce_batting_update(stats: Mapping[Any, Any]) -> dict[str, int]:
    """
    Validate a batting update against the fixed counter schema.

    Raises:
        ValueError: If a key is not a batting counter
    """
    return {BattingField(key).value: max(0, parse_int(value)) for key, value in stats.items()}


def coerce_pitching_update(stats: Mapping[Any, Any]) -> dict[str, float | int]:
    """
    Validate a pitching update against the fixed counter schema.

    Innings pitched keeps its tenths digit; every other counter is an integer.

    Raises:
        ValueError: If a key is not a pitching counter
    """
    update: dict[str, float | int] = {}
    for key, value in stats.items():
        stat_field = PitchingField(key)
        if stat_field is PitchingField.INNINGS_PITCHED:
            update[stat_field.value] = max(0.0, parse_float(value))
        else:
            update[stat_field.value] = max(0, parse_int(value))
    return update


def _merge(row, update: Mapping[str, Any]) -> None:
    for name, value in update.items():
        setattr(row, name, value)


@dataclass
class GameRecord:
    """
    Mutable state of one game.

    Scores are None until set. Once the innings grid has entries, score1 and
    score2 are always the grid totals.
    """

    id: int
    team1_id: Optional[int] = None
    team2_id: Optional[int] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    hits1: Optional[int] = None
    hits2: Optional[int] = None
    errors1: Optional[int] = None
    errors2: Optional[int] = None
    day: str = ''
    time: str = ''
    innings: Innings = field(default_factory=empty_innings)
    batting_stats: list[BattingStat] = field(default_factory=list)
    pitching_stats: list[PitchingStat] = field(default_factory=list)

    @property
    def is_championship(self) -> bool:
        return self.id == CHAMPIONSHIP_GAME_ID

    @property
    def has_scores(self) -> bool:
        return self.score1 is not None and self.score2 is not None

    @property
    def is_complete(self) -> bool:
        """Both teams assigned and both scores entered."""
        return self.team1_id is not None and self.team2_id is not None and self.has_scores

    @property
    def is_tied(self) -> bool:
        return self.has_scores and self.score1 == self.score2

    def winner_id(self) -> Optional[int]:
        if not self.has_scores or self.is_tied:
            return None
        return self.team1_id if self.score1 > self.score2 else self.team2_id

    def update_field(self, game_field: GameField | str, value: Any) -> bool:
        """
        Set one editable field from raw user input.

        Numeric fields parse leniently; blank input unsets them. A direct score
        edit is ignored while the innings grid has entries, since the grid owns
        the score then.

        Returns:
            True if the record changed

        Raises:
            ValueError: If ``game_field`` is not an editable field
        """
        game_field = GameField(game_field)

        if game_field.is_score and has_entries(self.innings):
            logger.warning(
                f'Game {self.id}: ignoring direct {game_field.value} edit, '
                f'score is derived from the innings grid'
            )
            return False

        if game_field.is_numeric:
            new_value = parse_optional_int(value)
            if new_value is not None:
                new_value = max(0, new_value)
        else:
            new_value = '' if value is None else str(value)

        if getattr(self, game_field.value) == new_value:
            return False
        setattr(self, game_field.value, new_value)
        return True

    def update_inning(
        self,
        inning_index: int,
        side: int,
        value: Optional[str],
        regulation_innings: int = REGULATION_INNINGS,
    ) -> None:
        """Write one innings cell and overwrite both scores with the grid totals."""
        self.innings, self.score1, self.score2 = update_inning(
            self.innings, inning_index, side, value, regulation_innings
        )

    def upsert_batting_stat(self, player_id: int, stats: Mapping[Any, Any]) -> BattingStat:
        """Merge ``stats`` into the player's batting line, creating it if needed."""
        update = coerce_batting_update(stats)
        for row in self.batting_stats:
            if row.player_id == player_id:
                _merge(row, update)
                return row
        row = BattingStat(game_id=self.id, player_id=player_id, **update)
        self.batting_stats.append(row)
        return row

    def upsert_pitching_stat(self, player_id: int, stats: Mapping[Any, Any]) -> PitchingStat:
        """Merge ``stats`` into the player's pitching line, creating it if needed."""
        update = coerce_pitching_update(stats)
        for row in self.pitching_stats:
            if row.player_id == player_id:
                _merge(row, update)
                return row
        row = PitchingStat(game_id=self.id, player_id=player_id, **update)
        self.pitching_stats.append(row)
        return row

    def find_batting_stat(self, player_id: int) -> Optional[BattingStat]:
        return next((s for s in self.batting_stats if s.player_id == player_id), None)

    def find_pitching_stat(self, player_id: int) -> Optional[PitchingStat]:
        return next((s for s in self.pitching_stats if s.player_id == player_id), None)

    def swap_teams(self) -> None:
        """Exchange sides: teams, scores, hits, errors and every innings pair."""
        self.team1_id, self.team2_id = self.team2_id, self.team1_id
        self.score1, self.score2 = self.score2, self.score1
        self.hits1, self.hits2 = self.hits2, self.hits1
        self.errors1, self.errors2 = self.errors2, self.errors1
        self.innings = mirror_innings(self.innings)

    def set_teams(self, team1_id: Optional[int], team2_id: Optional[int]) -> bool:
        """Rewrite only the team references. Returns True if they changed."""
        if (self.team1_id, self.team2_id) == (team1_id, team2_id):
            return False
        self.team1_id, self.team2_id = team1_id, team2_id
        return True

    def clear_scores(self, regulation_innings: int = REGULATION_INNINGS) -> None:
        """Null the line score, restart the innings grid and drop box score rows."""
        self.score1 = self.score2 = None
        self.hits1 = self.hits2 = None
        self.errors1 = self.errors2 = None
        self.innings = empty_innings(regulation_innings)
        self.batting_stats = []
        self.pitching_stats = []

    def ensure_innings(self, regulation_innings: int = REGULATION_INNINGS) -> 'GameRecord':
        self.innings = ensure_innings(self.innings, regulation_innings)
        return self

    def to_update_fields(self) -> dict[str, Any]:
        """
        Fields sent to the store on write-back.

        Team references are only included once set, so an unseeded record
        never clears teams held by the store.
        """
        update: dict[str, Any] = {
            'score1': self.score1,
            'score2': self.score2,
            'hits1': self.hits1,
            'hits2': self.hits2,
            'errors1': self.errors1,
            'errors2': self.errors2,
            'day': self.day,
            'time': self.time,
            'innings': [list(inning) for inning in self.innings],
        }
        if self.team1_id is not None:
            update['team1_id'] = self.team1_id
        if self.team2_id is not None:
            update['team2_id'] = self.team2_id
        return update

