"""
connect4ab - Connect Four engine with alpha-beta game tree search

This package provides the board representation, winning-line geometry,
a heuristic position evaluator and a negamax search with alpha-beta
pruning, together with a text front end and a Gymnasium environment.
"""

# Version number
__version__ = '0.1.0'
