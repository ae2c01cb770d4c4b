"""
base.py - Interfaces of the collaborators around the game loop

A GamePlayer chooses columns; a GameView shows the board, relays moves and
results, and asks questions. Concrete implementations live in
connect4ab.ai (computer players) and connect4ab.interfaces (text front end).
"""

from connect4ab.game.board import Board


class GamePlayer:
    """Anything that can choose a column for the side to move."""

    def __init__(self, name: str):
        self.name = name

    def get_move(self, board: Board) -> int:
        """
        Choose a move for the player to move on ``board``.

        Returns:
            Column index in the range 0 to board.cols - 1
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class GameView:
    """Display, reporting and prompting side of the game."""

    def display(self, board: Board) -> None:
        raise NotImplementedError

    def report_move(self, column: int, name: str) -> None:
        raise NotImplementedError

    def report_to_user(self, message: str) -> None:
        raise NotImplementedError

    def get_answer(self, question: str) -> str:
        raise NotImplementedError

    def get_int_answer(self, question: str) -> int:
        raise NotImplementedError

    def get_user_move(self, board: Board, name: str) -> int:
        raise NotImplementedError
