"""
connect4ab.ai - Position evaluation and game tree search

score() rates a position for one player, pick_move()/best_move() run the
alpha-beta search, and MinimaxPlayer plugs the search into the game loop.
"""

from connect4ab.ai.evaluation import score
from connect4ab.ai.minimax import MinimaxPlayer
from connect4ab.ai.search import Move, SearchStats, best_move, pick_move

__all__ = ['score', 'Move', 'SearchStats', 'best_move', 'pick_move', 'MinimaxPlayer']
