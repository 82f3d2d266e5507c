import numpy as np
import pytest

from soksol_core.cells import BOX, GOAL
from soksol_core.moves import START, Action, successors, is_solved, apply_action
from soksol_core.parser import parse_puzzle_str

LVL = """
5 5
# # # # #
# o x o #
# x s x #
# o x o #
# # # # #
"""


def _succ(text):
    p = parse_puzzle_str(text)
    return p, list(successors(p.board, p.start))


def test_direction_order_up_down_left_right():
    _, succs = _succ("3 3\n. . .\n. s .\n. . .")
    assert [a.direction for a, _, _ in succs] == ["up", "down", "left", "right"]
    assert all(not a.push for a, _, _ in succs)


def test_move_reuses_board():
    p, succs = _succ("1 2\ns .")
    (action, nb, pos), = succs
    assert action == Action("right")
    assert nb is p.board
    assert pos == (0, 1)


def test_push_moves_box_and_player():
    p, succs = _succ("1 3\ns x o")
    (action, nb, pos), = succs
    assert action == Action("right", push=True)
    assert pos == (0, 1)
    assert nb[0, 1] == 0
    assert nb[0, 2] == BOX | GOAL
    # the source board stays untouched
    assert p.board[0, 1] == BOX


def test_all_four_pushes_blocked_by_walls():
    _, succs = _succ(LVL)
    assert succs == []


def test_push_blocked_by_box_and_edge():
    # beyond-cell holds a box
    _, succs = _succ("1 5\ns x x o o")
    assert succs == []
    # beyond-cell outside the board; only the plain move down is left
    _, succs = _succ("2 2\ns x\no .")
    assert [a.label() for a, _, _ in succs] == ["down"]


def test_push_allowed_in_open_room():
    text = """
5 5
. . . . .
. o x o .
. x s x .
. o x o .
. . . . .
"""
    p = parse_puzzle_str(text)
    succs = list(successors(p.board, p.start))
    assert [a.label() for a, _, _ in succs] == ["push up", "push down", "push left", "push right"]
    for _, nb, _ in succs:
        # box count is conserved
        assert int(np.count_nonzero(nb & BOX)) == 4


def test_walls_block_moves():
    _, succs = _succ("3 3\n# # #\n# s #\n# # #")
    assert succs == []


def test_is_solved():
    board = np.array([[GOAL | BOX, GOAL]], dtype=np.uint8)
    assert not is_solved(board)
    board[0, 1] |= BOX
    assert is_solved(board)


def test_is_solved_ignores_boxes_off_goals():
    board = np.array([[GOAL | BOX, BOX, 0]], dtype=np.uint8)
    assert is_solved(board)


def test_is_solved_without_goals():
    assert is_solved(np.zeros((1, 1), dtype=np.uint8))


def test_apply_action_illegal():
    p = parse_puzzle_str("1 2\ns .")
    with pytest.raises(ValueError):
        apply_action(p.board, p.start, "left")


def test_labels():
    assert START.label() == "start"
    assert Action("down").label() == "down"
    assert Action("left", True).label() == "push left"
