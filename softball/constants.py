"""Constants for the softball tournament engine."""

# Game identifiers
CHAMPIONSHIP_GAME_ID = 16
PRELIMINARY_GAME_COUNT = 15
PRELIMINARY_GAME_IDS = tuple(range(1, PRELIMINARY_GAME_COUNT + 1))

# Innings
REGULATION_INNINGS = 7
OUTS_PER_INNING = 3
OUTS_PER_GAME = OUTS_PER_INNING * REGULATION_INNINGS  # ERA scale (21)

# Inning entry marker for "side did not bat"
NOT_BATTED = 'X'

# Leaderboard qualification (per team game played)
BATTING_PA_PER_GAME = 2.1
PITCHING_IP_PER_GAME = 2.3
LEADERBOARD_LIMIT = 10

# Box score counters, in display order
BATTING_FIELDS = (
    'plate_appearances',
    'at_bats',
    'hits',
    'runs',
    'rbi',
    'home_runs',
    'walks',
    'strike_outs',
)

PITCHING_FIELDS = (
    'innings_pitched',
    'hits',
    'runs',
    'earned_runs',
    'walks',
    'strike_outs',
    'wins',
    'losses',
)

# Placeholder for free-text roster fields
UNKNOWN = 'UNKNOWN'

# Write-back debounce window
PERSIST_DEBOUNCE_SECONDS = 0.5
