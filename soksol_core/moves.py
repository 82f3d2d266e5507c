from typing import Iterator, NamedTuple, Tuple

import numpy as np

from .cells import BOX, GOAL, Coord, in_bounds, is_wall, has_box


class Action(NamedTuple):
    direction: str  # "start" | "up" | "down" | "left" | "right"
    push: bool = False

    def label(self) -> str:
        if self.direction == "start":
            return "start"
        return f"push {self.direction}" if self.push else self.direction


START = Action("start")

# fixed priority: ties between equally short solutions are broken by this order
DIRECTIONS: Tuple[Tuple[str, int, int], ...] = (
    ("up", -1, 0),
    ("down", 1, 0),
    ("left", 0, -1),
    ("right", 0, 1),
)


def is_solved(board: np.ndarray) -> bool:
    """Every goal cell holds a box. Vacuously true without goals."""
    goals = (board & GOAL) != 0
    return bool(np.all(board[goals] & BOX))


def successors(board: np.ndarray, player: Coord) -> Iterator[Tuple[Action, np.ndarray, Coord]]:
    """Yields (action, new board, new player) for each legal direction.

    A plain move leaves the board untouched, so the very same array is
    yielded back; a push yields a fresh copy with the box relocated.
    Boards are never modified in place.
    """
    r, c = player
    for name, dr, dc in DIRECTIONS:
        nr, nc = r + dr, c + dc
        if not in_bounds(board, nr, nc) or is_wall(board, nr, nc):
            continue
        if not has_box(board, nr, nc):
            yield Action(name), board, (nr, nc)
            continue
        # the cell beyond the box must be free for the push
        br, bc = nr + dr, nc + dc
        if not in_bounds(board, br, bc) or is_wall(board, br, bc) or has_box(board, br, bc):
            continue
        pushed = board.copy()
        pushed[nr, nc] &= ~np.uint8(BOX)
        pushed[br, bc] |= np.uint8(BOX)
        yield Action(name, push=True), pushed, (nr, nc)


def apply_action(board: np.ndarray, player: Coord, direction: str) -> Tuple[Action, np.ndarray, Coord]:
    """Performs a single step in the given direction, raising ValueError if illegal."""
    for action, nb, pos in successors(board, player):
        if action.direction == direction:
            return action, nb, pos
    raise ValueError(f"illegal action {direction!r} from {player}")
