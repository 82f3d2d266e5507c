from __future__ import annotations
from typing import Iterator, List, Tuple, Optional
import os

from soksol_core.cells import Puzzle
from soksol_core.parser import parse_puzzle_str


def iterate_puzzle_files(root_dir: str, rel_dirs: List[str]) -> Iterator[Tuple[str, str]]:
    """Iterate over all .txt in the given subfolders and return (path, file content)."""
    for rel in rel_dirs:
        abs_dir = os.path.join(root_dir, rel)
        if not os.path.isdir(abs_dir):
            continue
        for fname in sorted(os.listdir(abs_dir)):
            if not fname.endswith(".txt"):
                continue
            fpath = os.path.join(abs_dir, fname)
            # undecodable bytes become U+FFFD, which the parser rejects as unknown
            with open(fpath, "r", encoding="utf-8", errors="replace") as f:
                yield fpath, f.read()


def read_puzzle_list(path: str) -> List[str]:
    """Lines of a list file, skipping blanks and '#' comments."""
    with open(path, "r", encoding="utf-8") as f:
        return [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith("#")]


def check_filters(puzzle: Puzzle, *, max_rows: Optional[int], max_cols: Optional[int],
                  max_boxes: Optional[int]) -> Optional[str]:
    """Returns the reason the puzzle is filtered out, or None if it passes."""
    if max_rows is not None and puzzle.rows > max_rows:
        return f"rows {puzzle.rows} > {max_rows}"
    if max_cols is not None and puzzle.cols > max_cols:
        return f"cols {puzzle.cols} > {max_cols}"
    b = puzzle.box_count()
    if max_boxes is not None and b > max_boxes:
        return f"boxes {b} > {max_boxes}"
    return None


def validate_puzzle(text: str, filters: dict) -> Optional[str]:
    """Parses the text and applies the filters; None means the puzzle is usable."""
    try:
        puzzle = parse_puzzle_str(text)
    except ValueError as e:
        return str(e)
    return check_filters(puzzle,
                         max_rows=filters.get("max_rows"),
                         max_cols=filters.get("max_cols"),
                         max_boxes=filters.get("max_boxes"))
