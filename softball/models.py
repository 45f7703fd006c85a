"""Data models for the softball tournament engine."""

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import UNKNOWN


@dataclass
class Player:
    """A rostered player. ``team_id`` is a back-reference to the owning team."""
    id: int
    team_id: int
    number: int
    name: str
    role: str = UNKNOWN
    place_of_birth: str = UNKNOWN


@dataclass
class Team:
    """A tournament team and its ordered roster."""
    id: int
    name: str
    players: List[Player] = field(default_factory=list)

    def find_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


@dataclass
class BattingStat:
    """One player's batting line for one game. Unset counters are None."""
    game_id: int
    player_id: int
    plate_appearances: Optional[int] = None
    at_bats: Optional[int] = None
    hits: Optional[int] = None
    runs: Optional[int] = None
    rbi: Optional[int] = None
    home_runs: Optional[int] = None
    walks: Optional[int] = None
    strike_outs: Optional[int] = None


@dataclass
class PitchingStat:
    """One player's pitching line for one game.

    ``innings_pitched`` uses the box-score notation where the tenths digit
    counts outs, so 4.2 means four innings and two outs.
    """
    game_id: int
    player_id: int
    innings_pitched: Optional[float] = None
    hits: Optional[int] = None
    runs: Optional[int] = None
    earned_runs: Optional[int] = None
    walks: Optional[int] = None
    strike_outs: Optional[int] = None
    wins: Optional[int] = None
    losses: Optional[int] = None


@dataclass
class Standing:
    """A team's row in the standings table."""
    team_id: int
    team_name: str
    wins: int = 0
    losses: int = 0
    runs_scored: int = 0
    runs_allowed: int = 0
    win_pct: float = 0.0  # unrounded, used for sorting
    pct: int = 0  # per mille, for display
    rank: int = 0
    games_behind: float = 0.0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    @property
    def run_differential(self) -> int:
        return self.runs_scored - self.runs_allowed


@dataclass
class BattingLeader:
    player_id: int
    name: str
    team_id: int
    team_name: str
    avg: float
    home_runs: int
    rbi: int
    hits: int
    runs: int
    plate_appearances: int
    games_played: int


@dataclass
class PitchingLeader:
    player_id: int
    name: str
    team_id: int
    team_name: str
    era: float
    strike_outs: int
    innings_pitched: float
    wins: int
    losses: int
    games_played: int


@dataclass
class Notification:
    """User-facing message emitted by the tournament session."""
    title: str
    description: str
    variant: str = 'default'  # 'default' or 'destructive'

    @property
    def is_error(self) -> bool:
        return self.variant == 'destructive'
