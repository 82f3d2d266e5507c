from __future__ import annotations
import argparse, csv, os, time
from typing import Dict, List, Optional

from tqdm import tqdm

from soksol_core.config import load_config
from soksol_core.levels.io import read_puzzle_list
from soksol_core.parser import PuzzleError, parse_puzzle_file
from solver.bfs import bfs

FIELDS = ["puzzle", "success", "valid", "nodes", "expanded", "runtime", "solution_len"]


def run_one(path: str, bucket_count: int) -> Dict[str, object]:
    try:
        puzzle = parse_puzzle_file(path)
    except (OSError, PuzzleError) as e:
        tqdm.write(f"[skip] {path}: {e}")
        return {"puzzle": path, "success": False, "valid": False, "nodes": 0,
                "expanded": 0, "runtime": 0.0, "solution_len": -1}
    res = bfs(puzzle, bucket_count=bucket_count)
    return {
        "puzzle": path,
        "success": bool(res["success"]),
        "valid": True,
        "nodes": int(res["nodes"]),  # type: ignore
        "expanded": int(res["expanded"]),  # type: ignore
        "runtime": float(res["runtime"]),  # type: ignore
        "solution_len": int(res.get("solution_len", -1)),  # type: ignore
    }


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(description="Batch BFS runs over a list of puzzle files → CSV")
    p.add_argument("--list", required=True, help="text file with one puzzle path per line")
    p.add_argument("--out", default="results/batch.csv", help="output CSV path")
    p.add_argument("--config", type=str, default="configs/solver.yaml")
    args = p.parse_args(argv)

    cfg = load_config(args.config)
    bucket_count = int(cfg["search"]["bucket_count"])

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    paths = read_puzzle_list(args.list)

    started = time.time()
    rows: List[Dict[str, object]] = []
    for path in tqdm(paths, desc="Solving puzzles", unit="puzzle"):
        rows.append(run_one(path, bucket_count))

    with open(args.out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)

    solved = sum(1 for r in rows if r["success"])
    print(f"done: {len(rows)} puzzles, {solved} solved → {args.out}; total_time={time.time()-started:.2f}s")


if __name__ == "__main__":
    main()
