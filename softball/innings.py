"""Inning-by-inning line score ledger.

The innings grid is the source of truth for a game's runs. Each inning is a
``[side_0, side_1]`` pair of raw cell values:

- ``''``  not played yet
- ``'X'`` side did not bat (never counts towards the total)
- anything else is a run count, parsed leniently (unparseable -> 0)

Totals are always recomputed from the full grid, never accumulated.
"""

from typing import Optional, Tuple

from .constants import NOT_BATTED, REGULATION_INNINGS
from .utils import parse_int

Innings = list[list[str]]
Totals = Tuple[Optional[int], Optional[int]]


def empty_innings(count: int = REGULATION_INNINGS) -> Innings:
    """Return a fresh grid of ``count`` empty inning pairs."""
    return [['', ''] for _ in range(count)]


def ensure_innings(innings: Optional[Innings], count: int = REGULATION_INNINGS) -> Innings:
    """Copy ``innings`` and pad it with empty pairs up to ``count`` innings."""
    grid = [list(inning) for inning in innings or []]
    while len(grid) < count:
        grid.append(['', ''])
    return grid


def normalize_inning_value(value: Optional[str]) -> str:
    """Store 'x'/'X' as the not-batted marker; keep everything else as typed."""
    if value is None:
        return ''
    value = str(value)
    if value.strip().upper() == NOT_BATTED:
        return NOT_BATTED
    return value


def inning_runs(cell: str) -> int:
    """Runs a single cell contributes to its side's total."""
    if not cell or cell == NOT_BATTED:
        return 0
    return max(0, parse_int(cell))


def has_entries(innings: Innings) -> bool:
    return any(cell != '' for inning in innings for cell in inning)


def compute_totals(innings: Innings) -> Totals:
    """
    Sum both sides of the grid.

    Returns:
        (total_side_0, total_side_1), or (None, None) when nothing has been
        entered anywhere in the grid.
    """
    if not has_entries(innings):
        return None, None
    total_0 = sum(inning_runs(inning[0]) for inning in innings)
    total_1 = sum(inning_runs(inning[1]) for inning in innings)
    return total_0, total_1


def update_inning(
    innings: Innings,
    inning_index: int,
    side: int,
    value: Optional[str],
    regulation_innings: int = REGULATION_INNINGS,
) -> tuple[Innings, Optional[int], Optional[int]]:
    """
    Write one cell of the grid and recompute both totals.

    The grid grows as needed to reach ``inning_index``. When a non-empty value
    lands in the last inning from regulation's final inning onwards and the
    two totals are level, one empty inning is appended for extra innings.

    Args:
        innings: Current grid (not modified)
        inning_index: 0-based inning
        side: 0 for team 1, 1 for team 2
        value: Raw cell input
        regulation_innings: Innings in a regulation game

    Returns:
        (new_grid, total_side_0, total_side_1)

    Raises:
        ValueError: If side is not 0/1 or inning_index is negative
    """
    if side not in (0, 1):
        raise ValueError(f'Side must be 0 or 1, got {side}')
    if inning_index < 0:
        raise ValueError(f'Inning index must be >= 0, got {inning_index}')

    grid = [list(inning) for inning in innings]
    while len(grid) <= inning_index:
        grid.append(['', ''])

    normalized = normalize_inning_value(value)
    grid[inning_index][side] = normalized

    if inning_index == len(grid) - 1 and normalized != '':
        total_0, total_1 = compute_totals(grid)
        if inning_index >= regulation_innings - 1 and total_0 == total_1:
            grid.append(['', ''])

    total_0, total_1 = compute_totals(grid)
    return grid, total_0, total_1


def mirror_innings(innings: Innings) -> Innings:
    """Swap the two sides of every inning."""
    return [[inning[1], inning[0]] for inning in innings]
