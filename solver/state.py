import random
from typing import Optional

from rules.rules import BLOCKED, FIRST_MOVE, MARGIN, UNVISITED

from .types import Grid, Position
from .validation import validate_board_size, validate_start


def build_initial_board(size: int) -> tuple[Grid, int]:
    validate_board_size(size)

    grid: Grid = []
    total = 0
    for r in range(size):
        row: list[int] = []
        for c in range(size):
            if r < MARGIN or r >= size - MARGIN or c < MARGIN or c >= size - MARGIN:
                row.append(BLOCKED)
            else:
                row.append(UNVISITED)
                total += 1
        grid.append(row)

    return grid, total


def choose_start(size: int, rng: Optional[random.Random] = None) -> Position:
    validate_board_size(size)
    rng = rng or random.Random()
    row = rng.randrange(MARGIN, size - MARGIN)
    col = rng.randrange(MARGIN, size - MARGIN)
    return row, col


def mark_start(grid: Grid, start: Position) -> None:
    validate_start(grid, start)
    row, col = start
    grid[row][col] = FIRST_MOVE


def place(grid: Grid, pos: Position, count: int) -> None:
    row, col = pos
    grid[row][col] = count


def unmark(grid: Grid, pos: Position) -> None:
    row, col = pos
    grid[row][col] = UNVISITED


def usable_positions(grid: Grid) -> list[Position]:
    return [(r, c) for r, row in enumerate(grid) for c, value in enumerate(row) if value != BLOCKED]


def count_blocked(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value == BLOCKED)
