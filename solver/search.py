from typing import Optional

from .moves import neighbors, order_candidates, orphan_detected
from .state import place, unmark
from .types import Grid, Position, ProgressState, TraceLog, TraceStep
from .utils import indent, trace


def search_tour(
    grid: Grid,
    position: Position,
    count: int,
    total: int,
    trace_enabled: bool,
    trace_log: Optional[TraceLog],
    trace_steps: Optional[list[TraceStep]],
    trace_meta: Optional[dict[str, bool]],
    trace_max_steps: int,
    progress_state: ProgressState,
    max_nodes: Optional[int],
) -> bool:
    depth = count - 2

    def record_step(
        event: str,
        message: str,
        row: Optional[int] = None,
        col: Optional[int] = None,
        move: Optional[int] = None,
        candidates: Optional[list[list[int]]] = None,
    ) -> None:
        if trace_steps is None:
            return
        if len(trace_steps) >= trace_max_steps:
            if trace_meta is not None:
                trace_meta["truncated"] = True
            return
        trace_steps.append(
            {
                "event": event,
                "message": message,
                "depth": depth,
                "row": row,
                "col": col,
                "move": move,
                "candidates": candidates,
                "grid": [grid_row[:] for grid_row in grid],
            }
        )

    if count > total:
        message = f"{indent(depth)}Tour complete: all {total} cells visited"
        trace(trace_enabled, trace_log, message)
        record_step("tour_complete", message)
        return True

    progress_state["nodes_visited"] += 1
    if max_nodes is not None and progress_state["nodes_visited"] > max_nodes:
        progress_state["budget_exhausted"] = 1
        return False

    candidates = neighbors(grid, position)
    if not candidates and count != total:
        message = f"{indent(depth)}Dead end at {position} before move {count}"
        trace(trace_enabled, trace_log, message)
        record_step("dead_end", message, row=position[0], col=position[1], move=count)
        return False

    ordered = order_candidates(candidates)
    record_step(
        "expand",
        f"{indent(depth)}Expand {position} with {len(ordered)} candidates",
        row=position[0],
        col=position[1],
        move=count,
        candidates=[[r, c, onward] for (r, c), onward in ordered],
    )

    for (r, c), onward in ordered:
        place(grid, (r, c), count)
        message = f"{indent(depth)}Place move {count} at ({r}, {c}) with {onward} onward moves"
        trace(trace_enabled, trace_log, message)
        record_step("place", message, row=r, col=c, move=count)

        if orphan_detected(grid, (r, c), count, total):
            message = f"{indent(depth)}Prune move {count} at ({r}, {c}): neighbor left without exits"
            trace(trace_enabled, trace_log, message)
            record_step("prune", message, row=r, col=c, move=count)
        elif search_tour(
            grid=grid,
            position=(r, c),
            count=count + 1,
            total=total,
            trace_enabled=trace_enabled,
            trace_log=trace_log,
            trace_steps=trace_steps,
            trace_meta=trace_meta,
            trace_max_steps=trace_max_steps,
            progress_state=progress_state,
            max_nodes=max_nodes,
        ):
            return True
        else:
            message = f"{indent(depth)}Backtrack move {count} at ({r}, {c})"
            trace(trace_enabled, trace_log, message)
            record_step("backtrack", message, row=r, col=c, move=count)

        unmark(grid, (r, c))
        if progress_state.get("budget_exhausted"):
            return False

    return False
