from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional
import time

import numpy as np
from tqdm import tqdm

from soksol_core.cells import Coord, Puzzle
from soksol_core.codec import encode, decode, coord_width, encode_player, decode_player
from soksol_core.config import DEFAULT_BUCKET_COUNT
from soksol_core.moves import Action, START, is_solved, successors
from .frontier import FrontierEntry, FrontierStore
from .visited import VisitedSet

Result = Dict[str, object]


class Step(NamedTuple):
    action: Action
    board: np.ndarray  # board right after the action
    player: Coord


@dataclass
class SearchContext:
    """All mutable state of one search run."""
    rows: int
    cols: int
    width: int  # bytes per coordinate axis
    frontier: FrontierStore
    visited: VisitedSet
    expanded: int = 0

    @classmethod
    def create(cls, puzzle: Puzzle, bucket_count: int = DEFAULT_BUCKET_COUNT) -> "SearchContext":
        frontier = FrontierStore()
        return cls(
            rows=puzzle.rows,
            cols=puzzle.cols,
            width=coord_width(puzzle.rows, puzzle.cols),
            frontier=frontier,
            visited=VisitedSet(frontier, bucket_count),
        )

    def decode_entry(self, entry: FrontierEntry) -> Step:
        return Step(entry.action,
                    decode(entry.board, self.rows, self.cols),
                    decode_player(entry.player, self.width))

    def release(self) -> None:
        self.visited.clear()
        self.frontier.release()


def reconstruct(ctx: SearchContext, prev: int, last: Step) -> List[Step]:
    """Chronological trace from the start state to `last`.

    Follows backpointers from `prev` until the root, whose predecessor is
    its own index.
    """
    steps = deque([last])
    idx = prev
    while True:
        entry = ctx.frontier[idx]
        steps.appendleft(ctx.decode_entry(entry))
        if entry.prev == idx:
            break
        idx = entry.prev
    return list(steps)


def bfs(
    puzzle: Puzzle,
    bucket_count: int = DEFAULT_BUCKET_COUNT,
    show_progress: bool = False,
    progress_every: int = 100000,
) -> Result:
    t0 = time.time()
    progress_every = max(1, progress_every)

    if is_solved(puzzle.board):
        # nothing to do; the start already has every goal covered
        trace = [Step(START, puzzle.board, puzzle.start)]
        return {"success": True, "nodes": 1, "expanded": 0, "runtime": time.time() - t0,
                "solution_len": 0, "trace": trace}

    ctx = SearchContext.create(puzzle, bucket_count)
    root = FrontierEntry(encode(puzzle.board), encode_player(puzzle.start, ctx.width), len(ctx.frontier), START)
    found: Optional[List[Step]] = None
    bar = tqdm(desc="BFS", unit="state", disable=not show_progress, leave=False)
    try:
        ctx.visited.insert_if_absent(root)
        while found is None and not ctx.frontier.is_empty():
            idx, entry = ctx.frontier.dequeue()
            board = decode(entry.board, ctx.rows, ctx.cols)
            player = decode_player(entry.player, ctx.width)
            ctx.expanded += 1

            for action, nb, npos in successors(board, player):
                if is_solved(nb):
                    found = reconstruct(ctx, idx, Step(action, nb, npos))
                    break
                # plain moves keep the board, so the parent's bytes are reused
                nbytes = entry.board if nb is board else encode(nb)
                ctx.visited.insert_if_absent(
                    FrontierEntry(nbytes, encode_player(npos, ctx.width), idx, action))

            if ctx.expanded % progress_every == 0:
                bar.update(progress_every)
                bar.set_postfix(frontier=len(ctx.frontier), pending=ctx.frontier.pending())
    finally:
        bar.close()
        nodes = len(ctx.frontier)
        ctx.release()

    runtime = time.time() - t0
    if found is None:
        return {"success": False, "nodes": nodes, "expanded": ctx.expanded, "runtime": runtime}
    return {
        "success": True,
        "nodes": nodes,
        "expanded": ctx.expanded,
        "runtime": runtime,
        "solution_len": len(found) - 1,
        "trace": found,
    }
