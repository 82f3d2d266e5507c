from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from soksol_core.config import load_config
from soksol_core.parser import PuzzleError, parse_puzzle_file
from soksol_core.render import get_renderer
from solver.bfs import bfs
from solver.frontier import SearchMemoryError


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Shortest move/push solution of a puzzle by exhaustive BFS")
    p.add_argument("puzzle", nargs="?", default="input.txt", help="path to the puzzle description")
    p.add_argument("--config", type=str, default="configs/solver.yaml", help="YAML with search/output settings")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    search_cfg = cfg["search"]
    try:
        render = get_renderer(cfg["output"]["style"])
    except ValueError as e:
        print(f"[error] config {args.config}: {e}", file=sys.stderr)
        return 1

    try:
        puzzle = parse_puzzle_file(args.puzzle)
    except OSError as e:
        print(f"[error] cannot read {args.puzzle}: {e}", file=sys.stderr)
        return 1
    except PuzzleError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    print(f"Start: ({puzzle.start[0]}, {puzzle.start[1]})")
    print("Initial position:")
    print(render(puzzle.board, puzzle.start))

    try:
        res = bfs(puzzle,
                  bucket_count=int(search_cfg["bucket_count"]),
                  show_progress=bool(search_cfg["show_progress"]),
                  progress_every=int(search_cfg["progress_every"]))
    except SearchMemoryError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    print("Result:", {k: v for k, v in res.items() if k != "trace"})
    if not res["success"]:
        print("No solution.")
        return 0

    print(f"Solution found! {res['solution_len']} steps.")
    for i, step in enumerate(res["trace"]):  # type: ignore
        print(f"======== Step {i:3d} ======== {step.action.label()}")
        print(render(step.board, step.player))
    print("Solved!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
