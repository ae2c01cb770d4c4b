"""Tests for the board: moves, gravity, undo and terminal detection."""

import random

import numpy as np
import pytest

from connect4ab.game.board import Board
from connect4ab.utils import COLS, ROWS, GameResult, InvalidMoveError, Player


def draw_cells(rows=ROWS, cols=COLS):
    """A full board without any four in a row."""
    return [1 if ((c // 2) + r) % 2 == 0 else 2 for r in range(rows) for c in range(cols)]


def test_new_board():
    board = Board()

    assert board.rows == 6 and board.cols == 7
    assert board.current_player == Player.ONE
    assert board.player_num == 0
    assert not board.is_full()
    assert not board.is_terminal()
    assert board.game_result == GameResult.IN_PROGRESS
    assert board.get_valid_moves() == list(range(7))


def test_small_boards_rejected():
    with pytest.raises(ValueError):
        Board(3, 7)
    with pytest.raises(ValueError):
        Board(6, 3)


def test_make_move_drops_to_lowest_cell_and_toggles_player():
    board = Board()

    assert board.make_move(3) == 0
    assert board.cells[3] == Player.ONE.value
    assert board.current_player == Player.TWO
    assert board.player_num == 1

    assert board.make_move(3) == 1
    assert board.cells[7 + 3] == Player.TWO.value
    assert board.current_player == Player.ONE
    assert board.moves_made == [3, 3]


def test_is_valid_move_range_and_full_column():
    board = Board()
    assert not board.is_valid_move(-1)
    assert not board.is_valid_move(COLS)

    for _ in range(ROWS):
        assert board.is_valid_move(0)
        board.make_move(0)

    assert not board.is_valid_move(0)
    assert board.get_valid_moves() == list(range(1, COLS))


@pytest.mark.parametrize("column", [-1, COLS, 0])
def test_invalid_move_rejected_without_mutation(column):
    board = Board()
    if column == 0:
        for _ in range(ROWS):
            board.make_move(0)
    before = board.cells.copy()
    player = board.current_player
    moves = list(board.moves_made)

    with pytest.raises(InvalidMoveError) as excinfo:
        board.make_move(column)

    assert excinfo.value.column == column
    assert isinstance(excinfo.value, ValueError)
    assert np.array_equal(board.cells, before)
    assert board.current_player == player
    assert board.moves_made == moves


def test_gravity_holds_during_random_play():
    """Occupied cells of every column stay contiguous from the bottom."""
    rng = random.Random(7)
    for _ in range(20):
        board = Board()
        while not board.is_terminal():
            column = rng.choice(board.get_valid_moves())
            assert board.is_valid_move(column)
            board.make_move(column)

            grid = board.get_state()
            for col in range(board.cols):
                filled = grid[:, col] != 0
                height = int(filled.sum())
                assert filled[:height].all()
                assert height == board.heights[col]


def test_undo_restores_position():
    board = Board()
    for column in [3, 2, 3, 4]:
        board.make_move(column)
    before = board.cells.copy()
    player = board.current_player

    board.make_move(5)
    assert board.undo_move()

    assert np.array_equal(board.cells, before)
    assert board.current_player == player
    assert board.moves_made == [3, 2, 3, 4]


def test_undo_on_empty_board():
    assert not Board().undo_move()


def test_copy_is_independent():
    board = Board()
    board.make_move(3)
    clone = board.copy()
    clone.make_move(3)

    assert board.cells[10] == 0
    assert board.moves_made == [3]
    assert clone.cells[10] == Player.TWO.value
    assert board.current_player == Player.TWO


def test_vertical_win():
    board = Board()
    for column in [0, 1, 0, 1, 0, 1]:
        board.make_move(column)
    assert not board.is_terminal()

    board.make_move(0)

    assert board.is_terminal()
    assert board.winner() == Player.ONE
    assert board.winning_line() == (0, 7, 14, 21)
    assert board.game_result == GameResult.PLAYER_ONE_WIN


def test_no_move_after_a_win():
    board = Board()
    for column in [0, 1, 0, 1, 0, 1, 0]:
        board.make_move(column)
    before = board.cells.copy()

    with pytest.raises(InvalidMoveError) as excinfo:
        board.make_move(2)

    assert excinfo.value.column == 2
    assert "game is over" in str(excinfo.value)
    assert np.array_equal(board.cells, before)
    assert board.moves_made == [0, 1, 0, 1, 0, 1, 0]
    assert board.current_player == Player.TWO


def test_horizontal_win_for_second_player():
    board = Board()
    for column in [0, 2, 0, 3, 1, 4, 0, 5]:
        board.make_move(column)

    assert board.winner() == Player.TWO
    assert board.game_result == GameResult.PLAYER_TWO_WIN


def test_diagonal_wins():
    ascending = [0] * 42
    for i in range(4):
        ascending[i * 7 + i] = 1
        for r in range(i):
            ascending[r * 7 + i] = 2
    board = Board.from_cells(ascending, current_player=Player.TWO)
    assert board.winner() == Player.ONE

    descending = [0] * 42
    for i in range(4):
        descending[(3 - i) * 7 + i] = 2
        for r in range(3 - i):
            descending[r * 7 + i] = 1
    board = Board.from_cells(descending, current_player=Player.ONE)
    assert board.winner() == Player.TWO


def test_full_board_without_line_is_draw():
    board = Board.from_cells(draw_cells())

    assert board.is_full()
    assert board.is_terminal()
    assert board.winner() is None
    assert board.game_result == GameResult.DRAW
    assert board.get_valid_moves() == []


def test_immediately_playable():
    board = Board()
    board.make_move(2)

    assert board.immediately_playable(0)           # bottom row, empty
    assert not board.immediately_playable(2)       # occupied
    assert board.immediately_playable(7 + 2)       # on top of a checker
    assert not board.immediately_playable(7 + 3)   # nothing below
    assert np.array_equal(
        board.playable_mask(),
        [board.immediately_playable(i) for i in range(42)])


def test_from_cells_infers_side_to_move():
    cells = [0] * 42
    cells[3] = 1
    assert Board.from_cells(cells).current_player == Player.TWO

    cells[4] = 2
    board = Board.from_cells(cells)
    assert board.current_player == Player.ONE
    assert board.heights[3] == 1 and board.heights[0] == 0


def test_from_cells_rejects_bad_input():
    floating = [0] * 42
    floating[7] = 1
    with pytest.raises(ValueError):
        Board.from_cells(floating)
    with pytest.raises(ValueError):
        Board.from_cells([0] * 41)
    with pytest.raises(ValueError):
        Board.from_cells([3] + [0] * 41)

    lopsided = [0] * 42
    lopsided[0] = lopsided[1] = 1
    with pytest.raises(ValueError):
        Board.from_cells(lopsided)


def test_from_position_string():
    board = Board.from_position_string(",".join(["1"] + ["0"] * 41))
    assert board.cells[0] == 1

    with pytest.raises(ValueError):
        Board.from_position_string("1,x,0")


def test_snapshot_and_render_orientation():
    board = Board()
    board.make_move(0)
    snapshot = board.get_board()

    assert len(snapshot) == 6 and len(snapshot[0]) == 7
    assert snapshot[0][0] == Player.ONE
    assert snapshot[5][0] == Player.EMPTY

    lines = board.render().splitlines()
    assert lines[6] == "|X . . . . . .|"   # bottom row printed last
    assert lines[-1] == "|0 1 2 3 4 5 6|"
