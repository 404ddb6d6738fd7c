DEFAULT_SIZE = 12
MARGIN = 2
MIN_SIZE = 2 * MARGIN + 1
# keeps recursion depth ((MAX_SIZE - 2 * MARGIN) ** 2) under the default recursion limit
MAX_SIZE = 24

BLOCKED = -1
UNVISITED = 0
FIRST_MOVE = 1

# (dx, dy): dx shifts the column, dy shifts the row. Order is the tie-break order.
KNIGHT_MOVES: tuple[tuple[int, int], ...] = (
    (1, -2),
    (2, -1),
    (2, 1),
    (1, 2),
    (-1, 2),
    (-2, 1),
    (-2, -1),
    (-1, -2),
)

# search nodes expanded before giving up; odd interiors started off the corner colour never finish
DEFAULT_MAX_NODES = 200_000
