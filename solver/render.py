from rules.rules import BLOCKED

from .types import Grid


NO_RESULT = "no result"


def format_board_rows(grid: Grid) -> list[str]:
    # one line per grid row; margin rows come out empty
    return ["".join(f"{value:2d} " for value in row if value != BLOCKED) for row in grid]
