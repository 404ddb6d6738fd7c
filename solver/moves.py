from rules.rules import KNIGHT_MOVES, UNVISITED

from .types import Candidate, Grid, Position
from .utils import in_bounds


def degree(grid: Grid, pos: Position) -> int:
    row, col = pos
    count = 0
    for dx, dy in KNIGHT_MOVES:
        r, c = row + dy, col + dx
        if in_bounds(grid, r, c) and grid[r][c] == UNVISITED:
            count += 1
    return count


def neighbors(grid: Grid, pos: Position) -> list[Candidate]:
    row, col = pos
    candidates: list[Candidate] = []
    for dx, dy in KNIGHT_MOVES:
        r, c = row + dy, col + dx
        if in_bounds(grid, r, c) and grid[r][c] == UNVISITED:
            candidates.append(((r, c), degree(grid, (r, c))))
    return candidates


def order_candidates(candidates: list[Candidate]) -> list[Candidate]:
    # stable: equal degrees keep move-set order
    return sorted(candidates, key=lambda candidate: candidate[1])


def orphan_detected(grid: Grid, pos: Position, count: int, total: int) -> bool:
    """Return True when placing move `count` at `pos` leaves a neighbor with no way out.

    The check only runs while more than one placement remains; near the end of the
    tour a zero-degree neighbor is simply the final cell.
    """
    if count >= total - 1:
        return False
    return any(onward == 0 for _, onward in neighbors(grid, pos))
