import logging
import random
from typing import Optional

from rules.rules import DEFAULT_MAX_NODES, DEFAULT_SIZE, FIRST_MOVE

from .render import NO_RESULT
from .search import search_tour
from .state import build_initial_board, choose_start, mark_start
from .types import Grid, Position, ProgressState, TourResult, TraceLog, TraceStep
from .utils import trace as _trace
from .validation import validate_search_options

logger = logging.getLogger(__name__)


def build_board(
    size: int = DEFAULT_SIZE,
    start: Optional[Position] = None,
    seed: Optional[int] = None,
) -> tuple[Grid, int, Position]:
    """Create a board with its margin blocked and the start cell marked as move 1.

    When `start` is omitted a uniformly random interior cell is picked, seeded by
    `seed` when given.
    """
    grid, total = build_initial_board(size)
    if start is None:
        start = choose_start(size, random.Random(seed))
    mark_start(grid, start)
    return grid, total, (start[0], start[1])


def solve_tour(
    size: int = DEFAULT_SIZE,
    start: Optional[Position] = None,
    seed: Optional[int] = None,
    trace: bool = False,
    trace_log: Optional[TraceLog] = None,
    trace_steps: Optional[list[TraceStep]] = None,
    trace_meta: Optional[dict[str, bool]] = None,
    trace_max_steps: int = 1000,
    max_nodes: Optional[int] = DEFAULT_MAX_NODES,
) -> TourResult:
    """Search for a knight's tour over the usable region of a `size` x `size` board.

    Not finding a tour is reported through ``solved=False`` in the result; only bad
    configuration raises ``ValueError``. On failure the returned board holds just the
    start cell. The search stops after `max_nodes` expanded nodes; pass ``None`` to
    search without a budget.
    """
    validate_search_options(max_nodes=max_nodes, trace_max_steps=trace_max_steps)
    grid, total, start = build_board(size=size, start=start, seed=seed)

    _trace(trace, trace_log, f"Initialized search: size={size}, total={total}, start={start}")
    logger.debug("Searching tour on %dx%d board from %s (%d cells)", size, size, start, total)

    progress_state: ProgressState = {"nodes_visited": 0, "budget_exhausted": 0}
    solved = search_tour(
        grid=grid,
        position=start,
        count=FIRST_MOVE + 1,
        total=total,
        trace_enabled=trace,
        trace_log=trace_log,
        trace_steps=trace_steps,
        trace_meta=trace_meta,
        trace_max_steps=trace_max_steps,
        progress_state=progress_state,
        max_nodes=max_nodes,
    )
    budget_exhausted = bool(progress_state["budget_exhausted"])

    if solved:
        message = f"Tour found visiting {total} cells."
    elif budget_exhausted:
        message = f"{NO_RESULT}: search stopped after {max_nodes} nodes"
    else:
        message = NO_RESULT
    logger.info(
        "Search from %s finished: solved=%s nodes_visited=%d",
        start,
        solved,
        progress_state["nodes_visited"],
    )

    return {
        "solved": solved,
        "board": grid,
        "size": size,
        "total": total,
        "start": start,
        "nodes_visited": progress_state["nodes_visited"],
        "budget_exhausted": budget_exhausted,
        "message": message,
    }
