from .models import (
    Player,
    Team,
    BattingStat,
    PitchingStat,
    Standing,
    BattingLeader,
    PitchingLeader,
    Notification,
)
from .innings import compute_totals, empty_innings, ensure_innings, update_inning
from .game import GameField, GameRecord
from .standings import calculate_standings, standings_to_dicts
from .seeding import (
    determine_seeds,
    get_championship_matchup,
    seed_championship,
    determine_champion,
)
from .leaderboard import (
    get_batting_leaders,
    get_pitching_leaders,
    add_innings_pitched,
    ip_to_outs,
    outs_to_ip,
)
from .store import JsonTournamentStore, StoreError, TournamentStore
from .sync import WriteBackSynchronizer
from .tournament import Tournament
from .validators import validate_roster, validate_game, validate_tournament

__all__ = [
    # Models
    'Player',
    'Team',
    'BattingStat',
    'PitchingStat',
    'Standing',
    'BattingLeader',
    'PitchingLeader',
    'Notification',
    # Innings ledger
    'compute_totals',
    'empty_innings',
    'ensure_innings',
    'update_inning',
    'GameField',
    'GameRecord',
    # Standings and seeding
    'calculate_standings',
    'standings_to_dicts',
    'determine_seeds',
    'get_championship_matchup',
    'seed_championship',
    'determine_champion',
    # Leaderboards
    'get_batting_leaders',
    'get_pitching_leaders',
    'add_innings_pitched',
    'ip_to_outs',
    'outs_to_ip',
    # Persistence
    'JsonTournamentStore',
    'StoreError',
    'TournamentStore',
    'WriteBackSynchronizer',
    # Session
    'Tournament',
    # Validation
    'validate_roster',
    'validate_game',
    'validate_tournament',
]
