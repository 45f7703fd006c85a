"""Pydantic schemas for JSON data validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    BATTING_PA_PER_GAME,
    LEADERBOARD_LIMIT,
    PITCHING_IP_PER_GAME,
    REGULATION_INNINGS,
    UNKNOWN,
)


class PlayerRecord(BaseModel):
    """Player in a team roster."""

    model_config = ConfigDict(extra='forbid')

    id: int
    team_id: int
    number: int = Field(default=0, ge=0)
    name: str = Field(..., min_length=1)
    role: str = UNKNOWN
    place_of_birth: str = UNKNOWN


class TeamRecord(BaseModel):
    """Team with its roster."""

    model_config = ConfigDict(extra='forbid')

    id: int
    name: str = Field(..., min_length=1)
    players: list[PlayerRecord] = Field(default_factory=list)

    @field_validator('players')
    @classmethod
    def validate_back_references(cls, v, info):
        """Ensure every player points back at this team."""
        team_id = info.data.get('id')
        for player in v:
            if team_id is not None and player.team_id != team_id:
                raise ValueError(
                    f'Player {player.id} has team_id {player.team_id}, expected {team_id}'
                )
        return v


class BattingStatRecord(BaseModel):
    """Stored batting line for one player in one game."""

    model_config = ConfigDict(extra='forbid')

    game_id: int = Field(..., ge=1)
    player_id: int
    plate_appearances: int | None = Field(None, ge=0)
    at_bats: int | None = Field(None, ge=0)
    hits: int | None = Field(None, ge=0)
    runs: int | None = Field(None, ge=0)
    rbi: int | None = Field(None, ge=0)
    home_runs: int | None = Field(None, ge=0)
    walks: int | None = Field(None, ge=0)
    strike_outs: int | None = Field(None, ge=0)


class PitchingStatRecord(BaseModel):
    """Stored pitching line for one player in one game."""

    model_config = ConfigDict(extra='forbid')

    game_id: int = Field(..., ge=1)
    player_id: int
    innings_pitched: float | None = Field(None, ge=0)
    hits: int | None = Field(None, ge=0)
    runs: int | None = Field(None, ge=0)
    earned_runs: int | None = Field(None, ge=0)
    walks: int | None = Field(None, ge=0)
    strike_outs: int | None = Field(None, ge=0)
    wins: int | None = Field(None, ge=0)
    losses: int | None = Field(None, ge=0)


class GameRow(BaseModel):
    """Stored game: teams, line score totals and the innings grid."""

    model_config = ConfigDict(extra='forbid')

    id: int = Field(..., ge=1)
    team1_id: int | None = None
    team2_id: int | None = None
    score1: int | None = Field(None, ge=0)
    score2: int | None = Field(None, ge=0)
    hits1: int | None = Field(None, ge=0)
    hits2: int | None = Field(None, ge=0)
    errors1: int | None = Field(None, ge=0)
    errors2: int | None = Field(None, ge=0)
    day: str = ''
    time: str = ''
    innings: list[list[str]] = Field(default_factory=list)

    @field_validator('innings', mode='before')
    @classmethod
    def normalize_innings(cls, v):
        """Coerce numeric cells to strings and require one pair per inning."""
        if v is None:
            return []
        pairs = []
        for inning in v:
            if len(inning) != 2:
                raise ValueError(f'Inning entry must have 2 sides, got {len(inning)}')
            pairs.append(['' if cell is None else str(cell) for cell in inning])
        return pairs


class TournamentFile(BaseModel):
    """Complete tournament.json file structure."""

    model_config = ConfigDict(extra='forbid')

    teams: list[TeamRecord] = Field(default_factory=list)
    games: list[GameRow] = Field(default_factory=list)
    batting_stats: list[BattingStatRecord] = Field(default_factory=list)
    pitching_stats: list[PitchingStatRecord] = Field(default_factory=list)

    @field_validator('teams')
    @classmethod
    def validate_unique_team_ids(cls, v):
        """Team identifiers must be unique within the tournament."""
        seen = set()
        for team in v:
            if team.id in seen:
                raise ValueError(f'Duplicate team id: {team.id}')
            seen.add(team.id)
        return v

    @field_validator('games')
    @classmethod
    def validate_unique_game_ids(cls, v):
        seen = set()
        for game in v:
            if game.id in seen:
                raise ValueError(f'Duplicate game id: {game.id}')
            seen.add(game.id)
        return v


class TournamentConfig(BaseModel):
    """Tournament configuration settings."""

    model_config = ConfigDict(extra='forbid')

    regulation_innings: int = Field(REGULATION_INNINGS, ge=1, le=9)
    persist_debounce_ms: int = Field(500, ge=0, le=10000)
    batting_pa_per_game: float = Field(BATTING_PA_PER_GAME, ge=0)
    pitching_ip_per_game: float = Field(PITCHING_IP_PER_GAME, ge=0)
    leaderboard_limit: int = Field(LEADERBOARD_LIMIT, ge=1, le=100)
    championship_day: str = ''
    championship_time: str = ''
