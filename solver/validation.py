from typing import Optional

from rules.rules import BLOCKED, KNIGHT_MOVES, MAX_SIZE, MIN_SIZE, UNVISITED

from .types import Grid, Position
from .utils import in_bounds


def validate_board_size(size: int) -> None:
    if not isinstance(size, int) or isinstance(size, bool):
        raise ValueError("size must be an integer")
    if size < MIN_SIZE:
        raise ValueError(f"size must be at least {MIN_SIZE} to leave a usable region inside the margin")
    if size > MAX_SIZE:
        raise ValueError(f"size must be at most {MAX_SIZE}")


def validate_start(grid: Grid, start: Position) -> None:
    if not isinstance(start, (tuple, list)) or len(start) != 2:
        raise ValueError("start must be a (row, col) pair")
    row, col = start
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in (row, col)):
        raise ValueError("start coordinates must be integers")
    if not in_bounds(grid, row, col):
        raise ValueError(f"start ({row}, {col}) is outside the board")
    if grid[row][col] != UNVISITED:
        raise ValueError(f"start ({row}, {col}) is not a usable cell")


def validate_search_options(max_nodes: Optional[int], trace_max_steps: int) -> None:
    if max_nodes is not None and (not isinstance(max_nodes, int) or isinstance(max_nodes, bool)):
        raise ValueError("max_nodes must be an integer")
    if not isinstance(trace_max_steps, int) or isinstance(trace_max_steps, bool):
        raise ValueError("trace_max_steps must be an integer")
    if max_nodes is not None and max_nodes < 1:
        raise ValueError("max_nodes must be >= 1")
    if trace_max_steps < 1:
        raise ValueError("trace_max_steps must be >= 1")


def validate_grid_shape(grid: Grid) -> None:
    if not isinstance(grid, list) or not grid:
        raise ValueError("board must be a non-empty square list")
    size = len(grid)
    for row in grid:
        if not isinstance(row, list) or len(row) != size:
            raise ValueError("board must be a square list of rows")
        for value in row:
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError("board entries must be integers")
            if value < BLOCKED:
                raise ValueError(f"board entries must be at least {BLOCKED}")


def validate_tour(grid: Grid) -> None:
    validate_grid_shape(grid)

    positions: dict[int, Position] = {}
    total = 0
    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            if value == BLOCKED:
                continue
            total += 1
            if value == UNVISITED:
                raise ValueError(f"cell ({r}, {c}) was never visited")
            if value in positions:
                raise ValueError(f"move {value} appears more than once")
            positions[value] = (r, c)

    if total == 0:
        raise ValueError("board has no usable cells")

    for move in range(1, total + 1):
        if move not in positions:
            raise ValueError(f"move {move} is missing")

    knight_offsets = {(dy, dx) for dx, dy in KNIGHT_MOVES}
    for move in range(1, total):
        (r1, c1), (r2, c2) = positions[move], positions[move + 1]
        if (r2 - r1, c2 - c1) not in knight_offsets:
            raise ValueError(f"move {move} to {move + 1} is not a knight move")
