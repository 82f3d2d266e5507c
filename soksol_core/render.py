import numpy as np

from .cells import Coord, is_wall, has_box, is_goal_cell
from .parser import (
    TOK_WALL, TOK_FLOOR, TOK_BOX, TOK_BOX_ON_GOAL, TOK_GOAL, TOK_PLAYER, TOK_PLAYER_ON_GOAL,
)


def render_ascii(board: np.ndarray, player: Coord) -> str:
    """ASCII visualization using the puzzle description alphabet."""
    rows, cols = board.shape
    out_lines = []
    for r in range(rows):
        row_chars = []
        for c in range(cols):
            if is_wall(board, r, c):
                row_chars.append(TOK_WALL)
                continue
            has_goal = is_goal_cell(board, r, c)
            if (r, c) == tuple(player):
                row_chars.append(TOK_PLAYER_ON_GOAL if has_goal else TOK_PLAYER)
            elif has_box(board, r, c):
                row_chars.append(TOK_BOX_ON_GOAL if has_goal else TOK_BOX)
            else:
                row_chars.append(TOK_GOAL if has_goal else TOK_FLOOR)
        out_lines.append(''.join(row_chars))
    return "\n".join(out_lines)


def render_grid(board: np.ndarray, player: Coord) -> str:
    """Boxed rendering, three characters per cell.

    '###' wall; inside other cells '@' box, 'o' goal, '%' player.
    """
    rows, cols = board.shape
    sep = "+" + "---+" * cols
    out_lines = [sep]
    for r in range(rows):
        cells = []
        for c in range(cols):
            s = [' ', ' ', ' ']
            if is_wall(board, r, c):
                s = ['#', '#', '#']
            if has_box(board, r, c):
                s[0] = '@'
            if is_goal_cell(board, r, c):
                s[1] = 'o'
            if (r, c) == tuple(player):
                s[2] = '%'
            cells.append(''.join(s))
        out_lines.append("|" + "|".join(cells) + "|")
        out_lines.append(sep)
    return "\n".join(out_lines)


RENDERERS = {
    "ascii": render_ascii,
    "grid": render_grid,
}


def get_renderer(style: str):
    style = style.lower()
    if style not in RENDERERS:
        raise ValueError(f"unknown render style: {style}")
    return RENDERERS[style]


def format_puzzle(board: np.ndarray, player: Coord) -> str:
    """Writes a board back in the puzzle description format."""
    rows, cols = board.shape
    return f"{rows} {cols}\n{render_ascii(board, player)}\n"
