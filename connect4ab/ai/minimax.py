"""
minimax.py - Computer player driven by alpha-beta game tree search

The player looks a fixed number of plies ahead with the negamax search in
connect4ab.ai.search and falls back to the static evaluation in
connect4ab.ai.evaluation at the horizon.
"""

from connect4ab.ai.search import SearchStats, best_move
from connect4ab.debug import debug
from connect4ab.game.base import GamePlayer
from connect4ab.game.board import Board
from connect4ab.utils import DEFAULT_DEPTH


class MinimaxPlayer(GamePlayer):
    """
    A Connect Four player that uses negamax search with alpha-beta pruning.

    The search depth is fixed when the player is created; it is the only
    bound on the work done per move.
    """

    def __init__(self, name: str = "Computer", depth: int = DEFAULT_DEPTH):
        """
        Initialize the minimax player.

        Args:
            name: Display name
            depth: Search horizon (higher = stronger but slower)
        """
        if depth < 0:
            raise ValueError(f"Search depth must be nonnegative, got {depth}")
        super().__init__(name)
        self.depth = depth
        self.last_value = None
        self.nodes_evaluated = 0  # For performance tracking
        self.cutoffs = 0

    def get_move(self, board: Board) -> int:
        """
        Get the best move for the current player.

        Args:
            board: The current game board (left unchanged)

        Returns:
            The column index of the best move
        """
        stats = SearchStats()
        debug.start_timer("search")
        move = best_move(board, self.depth, stats)
        elapsed = debug.end_timer("search", "search")

        self.last_value = move.value
        self.nodes_evaluated = stats.nodes
        self.cutoffs = stats.cutoffs
        debug.debug(
            f"{self.name} (depth {self.depth}) chose column {move.column} "
            f"value={move.value} nodes={stats.nodes} cutoffs={stats.cutoffs} "
            f"time={elapsed:.3f}s", "search")
        return move.column
