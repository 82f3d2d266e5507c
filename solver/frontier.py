from __future__ import annotations
from typing import List, NamedTuple, Tuple

from soksol_core.moves import Action


class SearchMemoryError(MemoryError):
    """Ran out of memory while growing the search tables."""


class FrontierEntry(NamedTuple):
    board: bytes  # encoded board
    player: bytes  # encoded player coordinate
    prev: int  # predecessor index, own index for the root
    action: Action


class FrontierStore:
    """Append-only list of every discovered state.

    The cursor splits it into the expanded prefix and the pending suffix,
    so the list is the BFS queue as well as the backpointer arena.
    """

    def __init__(self) -> None:
        self._entries: List[FrontierEntry] = []
        self._cursor = 0

    def append(self, entry: FrontierEntry) -> int:
        idx = len(self._entries)
        try:
            self._entries.append(entry)
        except MemoryError as e:
            raise SearchMemoryError(f"frontier store exhausted memory at {idx} states") from e
        return idx

    def dequeue(self) -> Tuple[int, FrontierEntry]:
        if self.is_empty():
            raise IndexError("dequeue from an exhausted frontier")
        idx = self._cursor
        self._cursor += 1
        return idx, self._entries[idx]

    def is_empty(self) -> bool:
        return self._cursor == len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    def pending(self) -> int:
        return len(self._entries) - self._cursor

    def release(self) -> None:
        """Drops all entries at once; only valid after the search is over."""
        self._entries = []
        self._cursor = 0

    def __getitem__(self, idx: int) -> FrontierEntry:
        return self._entries[idx]

    def __len__(self) -> int:
        return len(self._entries)
