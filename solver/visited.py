from __future__ import annotations
from typing import List, Optional, Tuple

from soksol_core.config import DEFAULT_BUCKET_COUNT
from .frontier import FrontierEntry, FrontierStore, SearchMemoryError

HASH_BASE = 31


def state_hash(player: bytes, board: bytes, bucket_count: int) -> int:
    """Polynomial hash over the player bytes, then the board bytes."""
    h = 0
    for b in player:
        h = (h * HASH_BASE + b) % bucket_count
    for b in board:
        h = (h * HASH_BASE + b) % bucket_count
    return h


class VisitedSet:
    """Fixed-size chained hash table of frontier indices.

    Chains hold indices into the frontier only; the entries themselves are
    owned by the FrontierStore. The table never resizes.
    """
    def __init__(self, frontier: FrontierStore, bucket_count: int = DEFAULT_BUCKET_COUNT) -> None:
        if bucket_count <= 0:
            raise ValueError(f"bucket_count must be positive, got {bucket_count}")
        self.frontier = frontier
        self.bucket_count = bucket_count
        self._buckets: List[Optional[List[int]]] = [None] * bucket_count
        self._size = 0

    def _find(self, chain: Optional[List[int]], player: bytes, board: bytes) -> bool:
        if chain is None:
            return False
        # most recent insertion first
        for idx in reversed(chain):
            other = self.frontier[idx]
            if other.player == player and other.board == board:
                return True
        return False

    def insert_if_absent(self, entry: FrontierEntry) -> bool:
        """Appends the entry to the frontier unless its state was seen before.

        Returns True if the entry was inserted, False for a duplicate.
        """
        h = state_hash(entry.player, entry.board, self.bucket_count)
        chain = self._buckets[h]
        if self._find(chain, entry.player, entry.board):
            return False
        idx = self.frontier.append(entry)
        try:
            if chain is None:
                self._buckets[h] = [idx]
            else:
                chain.append(idx)
        except MemoryError as e:
            raise SearchMemoryError(f"visited set exhausted memory at {self._size} states") from e
        self._size += 1
        return True

    def clear(self) -> None:
        self._buckets = [None] * self.bucket_count
        self._size = 0

    def __contains__(self, key: Tuple[bytes, bytes]) -> bool:
        player, board = key
        return self._find(self._buckets[state_hash(player, board, self.bucket_count)], player, board)

    def __len__(self) -> int:
        return self._size
