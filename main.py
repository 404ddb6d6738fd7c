import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rules.rules import DEFAULT_MAX_NODES, DEFAULT_SIZE
from solver.render import NO_RESULT, format_board_rows
from solver.solver import solve_tour
from solver.types import Position, TourResult
from solver.validation import validate_tour

logger = logging.getLogger(__name__)

CONFIG_KEYS = ("size", "start", "seed", "max_nodes")


def _check_run_options(
    size: int,
    start: Optional[Position],
    seed: Optional[int],
    max_nodes: Optional[int],
) -> Optional[Position]:
    # boundary validation
    if not isinstance(size, int) or isinstance(size, bool):
        raise ValueError("size must be an integer")
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ValueError("seed must be an integer")
    if max_nodes is not None and (not isinstance(max_nodes, int) or isinstance(max_nodes, bool)):
        raise ValueError("max_nodes must be an integer")
    if start is None:
        return None
    if not isinstance(start, (list, tuple)) or len(start) != 2:
        raise ValueError("start must be a [row, col] pair")
    return start[0], start[1]


def run(
    size: int = DEFAULT_SIZE,
    start: Optional[Position] = None,
    seed: Optional[int] = None,
    max_nodes: Optional[int] = DEFAULT_MAX_NODES,
) -> TourResult:
    start = _check_run_options(size, start, seed, max_nodes)
    return solve_tour(size=size, start=start, seed=seed, max_nodes=max_nodes)


def run_with_trace(
    size: int = DEFAULT_SIZE,
    start: Optional[Position] = None,
    seed: Optional[int] = None,
    max_nodes: Optional[int] = DEFAULT_MAX_NODES,
) -> tuple[TourResult, list[str]]:
    start = _check_run_options(size, start, seed, max_nodes)

    trace_log: list[str] = []
    result = solve_tour(
        size=size,
        start=start,
        seed=seed,
        max_nodes=max_nodes,
        trace=True,
        trace_log=trace_log,
    )
    return result, trace_log


def load_config_from_file(input_path: str) -> dict[str, Any]:
    path = Path(input_path)
    try:
        payload: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ValueError(f"input file not found: {input_path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"input file is not valid JSON: {input_path}") from exc

    if not isinstance(payload, dict):
        raise ValueError("JSON root must be an object")

    unknown = sorted(set(payload) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"unknown keys in input file: {', '.join(unknown)}")

    config: dict[str, Any] = {
        "size": payload.get("size", DEFAULT_SIZE),
        "start": payload.get("start"),
        "seed": payload.get("seed"),
        "max_nodes": payload.get("max_nodes", DEFAULT_MAX_NODES),
    }
    if config["start"] is not None:
        start = config["start"]
        if not isinstance(start, list) or len(start) != 2:
            raise ValueError("'start' must be a [row, col] pair")
        config["start"] = (start[0], start[1])
    return config


def _merge_config(args: argparse.Namespace) -> dict[str, Any]:
    config: dict[str, Any] = {"size": DEFAULT_SIZE, "start": None, "seed": None, "max_nodes": DEFAULT_MAX_NODES}
    if args.input:
        config.update(load_config_from_file(args.input))
    if args.size is not None:
        config["size"] = args.size
    if args.start is not None:
        config["start"] = (args.start[0], args.start[1])
    if args.seed is not None:
        config["seed"] = args.seed
    if args.max_nodes is not None:
        config["max_nodes"] = args.max_nodes
    if args.unbounded:
        config["max_nodes"] = None
    return config


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find a knight's tour over the interior of a square board")
    parser.add_argument("--size", type=int, help=f"Board side including the blocked margin (default: {DEFAULT_SIZE})")
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), help="Start cell; random when omitted")
    parser.add_argument("--seed", type=int, help="Seed for the random start cell")
    parser.add_argument(
        "--max-nodes",
        type=int,
        help=f"Stop the search after this many search nodes (default: {DEFAULT_MAX_NODES})",
    )
    parser.add_argument("--unbounded", action="store_true", help="Search without a node budget")
    parser.add_argument("--input", help="Path to a JSON file with size, start, seed, and max_nodes")
    parser.add_argument("--trace", action="store_true", help="Include solver trace output")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--check", action="store_true", help="Validate the tour before printing it")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    trace_log: list[str] = []
    try:
        config = _merge_config(args)
        if args.trace:
            result, trace_log = run_with_trace(**config)
        else:
            result = run(**config)
    except ValueError as exc:
        parser.error(str(exc))

    if result["solved"] and args.check:
        try:
            validate_tour(result["board"])
        except ValueError as exc:
            print(f"Error: tour failed validation: {exc}", file=sys.stderr)
            return 1
        logger.debug("Tour passed validation")

    grid_rows = format_board_rows(result["board"]) if result["solved"] else []
    if args.json:
        payload: dict[str, Any] = {
            "solved": result["solved"],
            "start": list(result["start"]),
            "total": result["total"],
            "nodes_visited": result["nodes_visited"],
            "budget_exhausted": result["budget_exhausted"],
            "message": result["message"],
            "grid_rows": grid_rows,
        }
        if args.trace:
            payload["trace"] = trace_log
        print(json.dumps(payload, indent=2))
    else:
        if result["solved"]:
            print("\n".join(grid_rows))
        else:
            print(NO_RESULT)
        if args.trace:
            print("\n".join(trace_log), file=sys.stderr)

    return 0 if result["solved"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
