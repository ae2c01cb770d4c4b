"""
search.py - Fixed-depth negamax search with alpha-beta pruning

``low`` is a value the player to move can already reach by some other
line of play and ``high`` a value the opponent can hold them to elsewhere.
Each level negates its child's value and swaps the bounds, so a single
routine serves both players.
"""

import math
from typing import Optional

from connect4ab.ai.evaluation import END_MULTIPLIER, score
from connect4ab.game.board import Board
from connect4ab.utils import SearchPreconditionError


class Move:
    """A column together with its game-tree value."""

    __slots__ = ('value', 'column')

    def __init__(self, value: float, column: int):
        self.value = value
        self.column = column

    def __repr__(self) -> str:
        return f"Move(value={self.value}, column={self.column})"


class SearchStats:
    """Counters filled in while a search runs."""

    def __init__(self):
        self.nodes = 0
        self.cutoffs = 0

    def __repr__(self) -> str:
        return f"SearchStats(nodes={self.nodes}, cutoffs={self.cutoffs})"


def pick_move(board: Board, depth: int, low: float, high: float,
              stats: Optional[SearchStats] = None) -> Move:
    """
    Choose the best column for the player to move.

    Columns are tried left to right; an equal value never replaces an
    earlier column. A move that ends the game is worth END_MULTIPLIER times
    the evaluation of the position the move was played from, so a sure
    result outweighs any speculative one. The board is modified while
    searching and restored before returning.

    Args:
        board: Position to search; must not be terminal
        depth: Extra plies to look ahead below this one
        low: Value the mover can already guarantee
        high: Value the opponent can already hold the mover to
        stats: Optional counters to update

    Returns:
        The best move found; its value is -inf when no column was tried
    """
    if stats is not None:
        stats.nodes += 1

    mover = board.current_player
    best = Move(-math.inf, 0)
    before_move = None  # evaluation of this position, computed on demand

    for column in range(board.cols):
        if best.value >= high:
            if stats is not None:
                stats.cutoffs += 1
            break
        if not board.is_valid_move(column):
            continue

        board.make_move(column)
        try:
            finished = board.is_terminal()
            if finished:
                value = None
            elif depth > 0:
                value = -pick_move(board, depth - 1, -high, -low, stats).value
            else:
                value = score(board, mover)
        finally:
            board.undo_move()

        if finished:
            if before_move is None:
                before_move = score(board, mover)
            value = END_MULTIPLIER * before_move

        if value > best.value:
            best = Move(value, column)
            low = max(low, value)

    return best


def best_move(board: Board, depth: int, stats: Optional[SearchStats] = None) -> Move:
    """
    Search ``board`` to ``depth`` with open bounds.

    Raises:
        SearchPreconditionError: If the game on ``board`` is already over
        ValueError: If ``depth`` is negative
    """
    if depth < 0:
        raise ValueError(f"Search depth must be nonnegative, got {depth}")
    if board.is_terminal():
        raise SearchPreconditionError("Cannot search a position where the game is over")
    return pick_move(board, depth, -math.inf, math.inf, stats)
