import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from rules.rules import DEFAULT_MAX_NODES, DEFAULT_SIZE, MAX_SIZE, MIN_SIZE
from solver.render import format_board_rows
from solver.solver import solve_tour
from solver.validation import validate_tour

logger = logging.getLogger(__name__)


class SolveRequest(BaseModel):
    size: int = Field(
        default=DEFAULT_SIZE,
        ge=MIN_SIZE,
        le=MAX_SIZE,
        description="Side length of the board, including the two-cell blocked margin",
    )
    start_row: Optional[int] = Field(default=None, description="Start row; random when start_row and start_col are omitted")
    start_col: Optional[int] = Field(default=None, description="Start column; random when start_row and start_col are omitted")
    seed: Optional[int] = Field(default=None, description="Seed for the random start cell")
    max_nodes: int = Field(default=DEFAULT_MAX_NODES, ge=1, description="Stop the search after this many search nodes")
    trace: bool = Field(default=False, description="Include solver trace output in the response")
    trace_steps: bool = Field(default=False, description="Include structured trace steps for walkthrough/debugging.")
    trace_max_steps: int = Field(default=1000, ge=1, le=20000, description="Maximum number of trace steps to return.")


class TraceStepResponse(BaseModel):
    event: str
    message: str
    depth: int
    row: Optional[int] = None
    col: Optional[int] = None
    move: Optional[int] = None
    candidates: Optional[list[list[int]]] = None
    grid: list[list[int]]


class SolveResponse(BaseModel):
    solved: bool
    board: list[list[int]]
    grid_rows: list[str]
    grid_text: str
    start_row: int
    start_col: int
    total: int
    nodes_visited: int
    budget_exhausted: bool
    message: str
    trace: Optional[list[str]] = None
    trace_steps: Optional[list[TraceStepResponse]] = None
    trace_truncated: bool = False


class ValidateRequest(BaseModel):
    board: list[list[int]] = Field(..., description="Square board with -1 for blocked cells and move indexes elsewhere")


class ValidateResponse(BaseModel):
    valid: bool
    message: str


app = FastAPI(
    title="Knight's Tour Solver API",
    description="Find a knight's tour over the interior of a square board using Warnsdorff ordering with backtracking.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://127.0.0.1:5173", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/solve", response_model=SolveResponse)
def solve(request: SolveRequest) -> SolveResponse:
    if (request.start_row is None) != (request.start_col is None):
        raise HTTPException(status_code=400, detail="start_row and start_col must be given together")
    start = None if request.start_row is None else (request.start_row, request.start_col)

    trace_log: list[str] = []
    trace_steps: list[dict[str, object]] = []
    trace_meta = {"truncated": False}
    try:
        result = solve_tour(
            size=request.size,
            start=start,
            seed=request.seed,
            trace=request.trace or request.trace_steps,
            trace_log=trace_log,
            trace_steps=trace_steps if request.trace_steps else None,
            trace_meta=trace_meta,
            trace_max_steps=request.trace_max_steps,
            max_nodes=request.max_nodes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    grid_rows = format_board_rows(result["board"]) if result["solved"] else []
    start_row, start_col = result["start"]
    return SolveResponse(
        solved=result["solved"],
        board=result["board"],
        grid_rows=grid_rows,
        grid_text="\n".join(grid_rows) if grid_rows else result["message"],
        start_row=start_row,
        start_col=start_col,
        total=result["total"],
        nodes_visited=result["nodes_visited"],
        budget_exhausted=result["budget_exhausted"],
        message=result["message"],
        trace=trace_log if request.trace else None,
        trace_steps=trace_steps if request.trace_steps else None,
        trace_truncated=trace_meta["truncated"],
    )


@app.post("/validate", response_model=ValidateResponse)
def validate(request: ValidateRequest) -> ValidateResponse:
    try:
        validate_tour(request.board)
    except ValueError as exc:
        logger.debug("Rejected tour: %s", exc)
        return ValidateResponse(valid=False, message=str(exc))
    return ValidateResponse(valid=True, message="Board holds a complete knight's tour.")
