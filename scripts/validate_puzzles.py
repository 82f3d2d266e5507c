from __future__ import annotations
import argparse
from typing import List, Optional

from soksol_core.config import load_config
from soksol_core.levels.io import iterate_puzzle_files, validate_puzzle


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser()
    p.add_argument("--config", type=str, default="configs/data.yaml")
    args = p.parse_args(argv)

    cfg = load_config(args.config, required=True)

    root = cfg["puzzles"]["root_dir"]
    rels = cfg["puzzles"]["sources"]
    flt = cfg.get("filters") or {}

    ok = 0
    bad = 0
    for path, text in iterate_puzzle_files(root, rels):
        reason = validate_puzzle(text, flt)
        if reason is None:
            ok += 1
        else:
            bad += 1
            print(f"[skip] {path}: {reason}")
    print(f"valid: {ok}, skipped: {bad}")
    return 0


if __name__ == "__main__":
    main()
