import re
from typing import Optional

from .cells import WALL, BOX, GOAL, Coord, Puzzle, count_flag, new_board

TOK_WALL = "#"
TOK_FLOOR = "."
TOK_BOX = "x"
TOK_BOX_ON_GOAL = "X"
TOK_GOAL = "o"
TOK_PLAYER = "s"
TOK_PLAYER_ON_GOAL = "S"

CELL_FLAGS = {
    TOK_WALL: WALL,
    TOK_FLOOR: 0,
    TOK_BOX: BOX,
    TOK_BOX_ON_GOAL: BOX | GOAL,
    TOK_GOAL: GOAL,
    TOK_PLAYER: 0,
    TOK_PLAYER_ON_GOAL: GOAL,
}

_HEADER = re.compile(r"\s*(\d+)\s+(\d+)")


class PuzzleError(ValueError):
    """Puzzle description violates one of the format rules.

    rule is one of: header, unknown_char, multiple_start, missing_start,
    box_goal_mismatch, incomplete.
    """

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(message)
        self.rule = rule


def parse_puzzle_str(text: str) -> Puzzle:
    """Parses a puzzle description into a Puzzle.

    Format: a header "M N" (rows, columns) followed by M*N cell characters;
    whitespace between characters is ignored, anything after the last cell
    is ignored too.
      '#': wall
      '.': floor
      'x': box
      'X': box on goal
      'o': goal
      's': player start
      'S': player start on goal
    """
    m = _HEADER.match(text)
    if m is None:
        raise PuzzleError("header", "Malformed header: expected '<rows> <columns>'")
    rows, cols = int(m.group(1)), int(m.group(2))
    if rows == 0 or cols == 0:
        raise PuzzleError("header", f"Malformed header: board size {rows}x{cols} is empty")

    cells = (ch for ch in text[m.end():] if not ch.isspace())
    board = new_board(rows, cols)
    start: Optional[Coord] = None

    for r in range(rows):
        for c in range(cols):
            ch = next(cells, None)
            if ch is None:
                raise PuzzleError("incomplete", f"Incomplete input: grid ends before row {r + 1}, column {c + 1}")
            flags = CELL_FLAGS.get(ch)
            if flags is None:
                raise PuzzleError("unknown_char", f"Unknown character {ch!r} at row {r + 1}, column {c + 1}")
            if ch in (TOK_PLAYER, TOK_PLAYER_ON_GOAL):
                if start is not None:
                    raise PuzzleError("multiple_start", f"Multiple start points defined: {start} and {(r, c)}")
                start = (r, c)
            board[r, c] = flags

    boxes, goals = count_flag(board, BOX), count_flag(board, GOAL)
    if boxes != goals:
        raise PuzzleError("box_goal_mismatch",
                          f"Number of boxes ({boxes}) is not equal to number of goals ({goals})")
    if start is None:
        raise PuzzleError("missing_start", "Start point is not defined")
    return Puzzle(rows=rows, cols=cols, board=board, start=start)


def parse_puzzle_file(path: str) -> Puzzle:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise PuzzleError("unknown_char", f"Unknown character: byte {e.object[e.start]:#04x} is not valid text") from e
    return parse_puzzle_str(text)
