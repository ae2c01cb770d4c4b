"""
connect4ab.game - Core game mechanics for Connect Four

This package contains the line geometry, the board representation,
the collaborator interfaces, the game loop and the Gymnasium environment.
"""

from connect4ab.game.board import Board
from connect4ab.game.geometry import all_lines, line_table
from connect4ab.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'all_lines', 'line_table', 'ConnectFourGame', 'ConnectFourEnv']
