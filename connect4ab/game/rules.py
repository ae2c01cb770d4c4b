"""
rules.py - Game loop and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, the loop that asks each player for a move until the
   game is over and reports progress through a view
2. ConnectFourEnv, a Gymnasium environment over the same Board
"""

from typing import Any, Dict, Optional, Sequence, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4ab.debug import debug
from connect4ab.game.base import GamePlayer, GameView
from connect4ab.game.board import Board
from connect4ab.utils import ROWS, COLS, GameResult, Player


class ConnectFourGame:
    """
    Plays one game between two players.

    The players take turns in the order given; the view sees the board
    after every move and is told who moved where and how the game ended.
    """

    def __init__(self, players: Sequence[GamePlayer], view: GameView,
                 board: Optional[Board] = None):
        """
        Args:
            players: First and second player
            view: Display and reporting collaborator
            board: Starting position (a new empty board by default)
        """
        if len(players) != 2:
            raise ValueError(f"Connect Four needs two players, got {len(players)}")
        self.players = list(players)
        self.view = view
        self.board = board if board is not None else Board()

    def player_to_move(self) -> GamePlayer:
        return self.players[self.board.player_num]

    def winner_name(self) -> Optional[str]:
        """Name of the winning player, or None if nobody has won."""
        winner = self.board.winner()
        if winner is None:
            return None
        return self.players[winner.index].name

    def play(self) -> GameResult:
        """
        Run the game to completion.

        Returns:
            The final result

        Raises:
            InvalidMoveError: If a player chooses a full or missing column
        """
        self.view.display(self.board)

        while not self.board.is_terminal():
            player = self.player_to_move()
            column = player.get_move(self.board)
            self.board.make_move(column)
            debug.debug(f"{player.name} played column {column}", "game")
            self.view.report_move(column, player.name)
            self.view.display(self.board)

        result = self.board.game_result
        winner = self.winner_name()
        if winner is not None:
            self.view.report_to_user(f"{winner} wins!")
        else:
            self.view.report_to_user("It is a draw")
        debug.info(f"Game over: {result.name} after {len(self.board.moves_made)} moves", "game")
        return result


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent always plays the side to move. With an ``opponent`` the
    environment answers every agent move itself, so each step covers a
    full round; without one the agent plays both sides.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 opponent: Optional[GamePlayer] = None,
                 rows: int = ROWS, cols: int = COLS):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            opponent: Player that answers each agent move
            rows: Board rows
            cols: Board columns
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.board = Board(rows, cols)
        self.opponent = opponent
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.board.cols)
        # Board with 3 possible values (0 empty, 1 and 2 for the players)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.board.rows, self.board.cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        self.board.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Drop a checker for the agent, then let the opponent answer.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if self.board.is_terminal() or not self.board.is_valid_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        agent = self.board.current_player
        self.board.make_move(action)

        if self.opponent is not None and not self.board.is_terminal():
            reply = self.opponent.get_move(self.board)
            self.board.make_move(reply)
            debug.debug(f"Opponent replied in column {reply}", "env")

        reward, terminated = self._reward_for(agent)

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def _reward_for(self, agent: Player) -> Tuple[float, bool]:
        result = self.board.game_result
        if result == GameResult.IN_PROGRESS:
            return self.reward_step, False
        if result == GameResult.DRAW:
            debug.info("Game over: Draw", "env")
            return self.reward_draw, True
        if result == GameResult.for_winner(agent):
            debug.info(f"Game over: {agent.name} (agent) wins", "env")
            return self.reward_win, True
        debug.info(f"Game over: {agent.other().name} wins", "env")
        return self.reward_lose, True

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = [] if self.board.is_terminal() else self.board.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'current_player': self.board.current_player.value,
            'game_result': self.board.game_result.name,
            'moves_made': len(self.board.moves_made),
            'winning_line': self.board.winning_line(),
        }
