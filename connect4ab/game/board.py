"""
board.py - Board representation and core game mechanics for Connect Four

The Board owns the cells, the side to move and the list of columns played.
Cells live in a flat numpy array indexed ``row * cols + col`` with row 0 at
the bottom; winning lines come from the shared geometry table.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from connect4ab.debug import debug
from connect4ab.game.geometry import Line, line_table
from connect4ab.utils import (ROWS, COLS, CONNECT_N, Player, GameResult,
                              InvalidMoveError, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    This class manages the board state, validates and executes moves,
    undoes them for the search, and detects the end of the game.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        """
        Initialize an empty board with player ONE to move.

        Args:
            rows: Number of rows (at least CONNECT_N)
            cols: Number of columns (at least CONNECT_N)
        """
        if rows < CONNECT_N or cols < CONNECT_N:
            raise ValueError(f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.lines = line_table(rows, cols, CONNECT_N)
        self.reset()

    def reset(self) -> None:
        """Reset the board to an empty state."""
        self.cells = np.zeros(self.rows * self.cols, dtype=np.int8)
        self.heights = [0] * self.cols
        self.moves_made: List[int] = []
        self.current_player = Player.ONE

    @classmethod
    def from_cells(cls, cells: Sequence[int], rows: int = ROWS, cols: int = COLS,
                   current_player: Optional[Player] = None) -> 'Board':
        """
        Build a board from flat cell values (0 empty, 1 player ONE, 2 player TWO).

        Args:
            cells: rows * cols values indexed row * cols + col, row 0 at the bottom
            rows: Number of rows
            cols: Number of columns
            current_player: Side to move; inferred from checker counts when None

        Returns:
            The new board. ``moves_made`` is empty since the move order is unknown.
        """
        values = np.asarray(cells, dtype=np.int64).ravel()
        if values.size != rows * cols:
            raise ValueError(f"Expected {rows * cols} cells, got {values.size}")
        if np.any((values < 0) | (values > 2)):
            raise ValueError("Cell values must be 0, 1 or 2")

        board = cls(rows, cols)
        grid = values.reshape(rows, cols)
        for col in range(cols):
            column = grid[:, col]
            height = int(np.count_nonzero(column))
            if np.any(column[:height] == 0):
                raise ValueError(f"Column {col} has a floating checker")
            board.heights[col] = height
        board.cells = values.astype(np.int8)

        if current_player is None:
            ones = int(np.count_nonzero(values == Player.ONE.value))
            twos = int(np.count_nonzero(values == Player.TWO.value))
            if ones == twos:
                current_player = Player.ONE
            elif ones == twos + 1:
                current_player = Player.TWO
            else:
                raise ValueError(f"Cannot infer side to move from {ones} vs {twos} checkers")
        elif current_player == Player.EMPTY:
            raise ValueError("EMPTY cannot be the side to move")
        board.current_player = current_player
        return board

    @classmethod
    def from_position_string(cls, position: str, rows: int = ROWS, cols: int = COLS) -> 'Board':
        """Parse a comma-separated list of flat cell values."""
        try:
            values = [int(token) for token in position.split(',')]
        except ValueError:
            raise ValueError(f"Position must be comma-separated integers: {position!r}") from None
        return cls.from_cells(values, rows, cols)

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board.__new__(Board)
        new_board.rows = self.rows
        new_board.cols = self.cols
        new_board.lines = self.lines
        new_board.cells = self.cells.copy()
        new_board.heights = self.heights.copy()
        new_board.moves_made = self.moves_made.copy()
        new_board.current_player = self.current_player
        return new_board

    @property
    def player_num(self) -> int:
        """Index (0 or 1) of the player to move."""
        return self.current_player.index

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a checker can be dropped in a column.

        Args:
            column: The column to place a checker (0-indexed)

        Returns:
            True if the column is on the board and its top cell is empty
        """
        if not (0 <= column < self.cols):
            return False
        return bool(self.cells[(self.rows - 1) * self.cols + column] == Player.EMPTY.value)

    def get_valid_moves(self) -> List[int]:
        """Columns that still accept a checker, left to right."""
        return [col for col in range(self.cols) if self.is_valid_move(col)]

    def make_move(self, column: int) -> int:
        """
        Drop the mover's checker in a column and pass the turn.

        Args:
            column: The column to place a checker (0-indexed)

        Returns:
            The row the checker landed in

        Raises:
            InvalidMoveError: If the column is off the board or full, or the
                game is already over; the board is left untouched
        """
        if not (0 <= column < self.cols):
            raise InvalidMoveError(column, "column out of range")
        if not self.is_valid_move(column):
            raise InvalidMoveError(column, "column is full")
        if self.winning_line() is not None:
            raise InvalidMoveError(column, "game is over")

        row = self.heights[column]
        self.cells[row * self.cols + column] = self.current_player.value
        self.heights[column] = row + 1
        self.moves_made.append(column)
        self.current_player = self.current_player.other()
        return row

    def undo_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if a move was undone, False if no moves to undo
        """
        if not self.moves_made:
            debug.debug("No moves to undo", "board")
            return False

        column = self.moves_made.pop()
        row = self.heights[column] - 1
        self.cells[row * self.cols + column] = Player.EMPTY.value
        self.heights[column] = row
        self.current_player = self.current_player.other()
        return True

    def is_full(self) -> bool:
        """True when no column accepts another checker."""
        return not bool(np.any(self.cells[(self.rows - 1) * self.cols:] == Player.EMPTY.value))

    def winning_line(self) -> Optional[Line]:
        """
        Find the first line (in geometry order) filled by a single player.

        Returns:
            Flat indices of the line, or None if nobody has connected four
        """
        windows = self.cells[self.lines]
        same = (windows[:, 0] != Player.EMPTY.value) & np.all(windows == windows[:, :1], axis=1)
        hits = np.flatnonzero(same)
        if hits.size == 0:
            return None
        return tuple(int(i) for i in self.lines[hits[0]])

    def winner(self) -> Optional[Player]:
        line = self.winning_line()
        if line is None:
            return None
        return Player(int(self.cells[line[0]]))

    def is_terminal(self) -> bool:
        """True if the board is full or some line is one player's colour."""
        return self.is_full() or self.winning_line() is not None

    @property
    def game_result(self) -> GameResult:
        winner = self.winner()
        if winner is not None:
            return GameResult.for_winner(winner)
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    def immediately_playable(self, index: int) -> bool:
        """
        Check if a checker dropped now would land exactly at ``index``.

        Args:
            index: Flat cell index

        Returns:
            True if the cell is empty and on the bottom row or supported
        """
        if self.cells[index] != Player.EMPTY.value:
            return False
        if index < self.cols:
            return True
        return bool(self.cells[index - self.cols] != Player.EMPTY.value)

    def playable_mask(self) -> np.ndarray:
        """Boolean array with ``immediately_playable`` for every cell."""
        empty = self.cells == Player.EMPTY.value
        supported = np.ones_like(empty)
        supported[self.cols:] = ~empty[:-self.cols]
        return empty & supported

    def get_board(self) -> Tuple[Tuple[Player, ...], ...]:
        """
        Read-only snapshot for display, rows bottom to top.

        Returns:
            Tuple of rows, each a tuple of Player values left to right
        """
        return tuple(
            tuple(Player(int(v)) for v in self.cells[r * self.cols:(r + 1) * self.cols])
            for r in range(self.rows)
        )

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            2D copy of the cells, shape (rows, cols), row 0 at the bottom
        """
        return self.cells.reshape(self.rows, self.cols).copy()

    def render(self) -> str:
        return render_board_ascii(self.cells, self.rows, self.cols)

    def __str__(self) -> str:
        return self.render()
