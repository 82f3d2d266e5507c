from dataclasses import dataclass
from typing import Tuple

import numpy as np

# Cell flags
__all__ = [
    "WALL",
    "BOX",
    "GOAL",
    "Coord",
    "Puzzle",
    "new_board",
    "in_bounds",
    "is_wall",
    "has_box",
    "is_goal_cell",
    "count_flag",
]

WALL = 1
BOX = 2
GOAL = 4

Coord = Tuple[int, int]


def new_board(rows: int, cols: int) -> np.ndarray:
    return np.zeros((rows, cols), dtype=np.uint8)


def in_bounds(board: np.ndarray, r: int, c: int) -> bool:
    rows, cols = board.shape
    return 0 <= r < rows and 0 <= c < cols


def is_wall(board: np.ndarray, r: int, c: int) -> bool:
    return bool(board[r, c] & WALL)


def has_box(board: np.ndarray, r: int, c: int) -> bool:
    return bool(board[r, c] & BOX)


def is_goal_cell(board: np.ndarray, r: int, c: int) -> bool:
    return bool(board[r, c] & GOAL)


def count_flag(board: np.ndarray, flag: int) -> int:
    return int(np.count_nonzero(board & flag))


@dataclass(frozen=True, slots=True, eq=False)
class Puzzle:
    """
    A parsed puzzle: the initial board plus where the player starts.

    board holds WALL/BOX/GOAL flags per cell, shape (rows, cols).
    The player is not a board flag; start is its (row, col).
    """

    rows: int
    cols: int
    board: np.ndarray
    start: Coord


    def box_count(self) -> int:
        return count_flag(self.board, BOX)


    def goal_count(self) -> int:
        return count_flag(self.board, GOAL)
