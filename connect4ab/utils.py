"""
utils.py - Constants, enumerations and helpers shared by the engine

Board cells are stored as a flat sequence indexed ``row * cols + col`` with
row 0 at the bottom of the board, so most helpers here work on flat indices.
"""

from enum import Enum, auto
from typing import Optional, Sequence

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of checkers in a row to win

# Look-ahead used when a computer player is created without one
DEFAULT_DEPTH = 4


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def index(self) -> int:
        """Side-to-move index (0 for ONE, 1 for TWO)."""
        if self == Player.EMPTY:
            raise ValueError("EMPTY has no side-to-move index")
        return self.value - 1

    @classmethod
    def from_index(cls, index: int) -> 'Player':
        if index not in (0, 1):
            raise ValueError(f"Player index must be 0 or 1, got {index}")
        return cls(index + 1)

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def for_winner(cls, winner: Optional[Player]) -> 'GameResult':
        """Result of a finished game with the given winner (None for a draw)."""
        if winner == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if winner == Player.TWO:
            return cls.PLAYER_TWO_WIN
        return cls.DRAW


class InvalidMoveError(ValueError):
    """A move was requested on a full column, a column off the board or a finished game."""

    def __init__(self, column: int, reason: str):
        super().__init__(f"Invalid move in column {column}: {reason}")
        self.column = column
        self.reason = reason


class SearchPreconditionError(RuntimeError):
    """A search was started on a position where the game is already over."""


def render_board_ascii(cells: Sequence[int], rows: int = ROWS, cols: int = COLS) -> str:
    """
    Render a flat board as ASCII art, top row first.

    Args:
        cells: Flat cell values indexed row * cols + col (row 0 = bottom)
        rows: Number of rows
        cols: Number of columns

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    border = "|" + "-" * (cols * 2 - 1) + "|"
    result = [border]

    for row in range(rows - 1, -1, -1):
        symbols = [str(Player(int(cells[row * cols + col]))) for col in range(cols)]
        result.append("|" + " ".join(symbols) + "|")

    result.append(border)
    result.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")
    return "\n".join(result)
