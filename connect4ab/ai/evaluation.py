"""
evaluation.py - Static position evaluation for Connect Four

A position is scored from one player's point of view by looking at every
four-cell line on the board. Lines that hold an opposing checker are dead
and score nothing; the others are weighted by how many of the player's own
checkers they already hold:

    3 checkers, any gap        THREE_VAL
    2 adjacent checkers        TWO_VAL
    1 checker                  ONE_VAL
    empty line                 ZERO_VAL

When every empty cell of a scoring line (with at least one checker) could be
filled by the very next drop, the line earns an extra
``weight * SPLIT_MULTIPLIER``. Empty lines give the centre of the board its
natural advantage because the centre cells sit on the most lines.
"""

import numpy as np

from connect4ab.game.board import Board
from connect4ab.utils import Player

THREE_VAL = 64
TWO_VAL = 16
ONE_VAL = 4
ZERO_VAL = 1
# Extra weight for lines whose empty cells are immediately playable
SPLIT_MULTIPLIER = 2
# Scales the value of branches that end the game
END_MULTIPLIER = 100


def score_lines(board: Board, player: Player) -> np.ndarray:
    """
    Per-line contributions to ``score``, in geometry order.

    Args:
        board: Position to evaluate
        player: Player whose prospects are measured (ONE or TWO)

    Returns:
        Integer array with one entry per line of ``board.lines``
    """
    if player == Player.EMPTY:
        raise ValueError("Cannot evaluate a position for EMPTY")

    windows = board.cells[board.lines]
    mine = windows == player.value
    theirs = windows == player.other().value
    empty = windows == Player.EMPTY.value
    playable = board.playable_mask()[board.lines]

    live = ~theirs.any(axis=1)
    count = mine.sum(axis=1)
    # every empty cell of the line can be dropped into right now
    ready = ~(empty & ~playable).any(axis=1)
    adjacent_pair = (mine[:, :-1] & mine[:, 1:]).any(axis=1)

    base = np.zeros(len(windows), dtype=np.int64)
    base[count == 3] = THREE_VAL
    base[(count == 2) & adjacent_pair] = TWO_VAL
    base[count == 1] = ONE_VAL
    base[~live] = 0

    values = base + np.where(ready, base * SPLIT_MULTIPLIER, 0)
    values[live & (count == 0)] = ZERO_VAL
    return values


def score(board: Board, player: Player) -> int:
    """
    Heuristic value of ``board`` for ``player``; always nonnegative.

    Args:
        board: Position to evaluate
        player: Player whose prospects are measured (ONE or TWO)

    Returns:
        Sum of the line contributions described in the module docstring
    """
    return int(score_lines(board, player).sum())
