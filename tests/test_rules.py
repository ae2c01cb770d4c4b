"""Tests for the game loop and the Gymnasium environment."""

import numpy as np
import pytest

from connect4ab.ai.minimax import MinimaxPlayer
from connect4ab.game.base import GamePlayer, GameView
from connect4ab.game.board import Board
from connect4ab.game.rules import ConnectFourEnv, ConnectFourGame
from connect4ab.utils import GameResult, InvalidMoveError, Player


class ScriptedPlayer(GamePlayer):
    def __init__(self, name, columns):
        super().__init__(name)
        self.columns = list(columns)

    def get_move(self, board):
        return self.columns.pop(0)


class RecordingView(GameView):
    def __init__(self):
        self.displays = 0
        self.moves = []
        self.messages = []

    def display(self, board):
        self.displays += 1

    def report_move(self, column, name):
        self.moves.append((column, name))

    def report_to_user(self, message):
        self.messages.append(message)


def draw_board():
    return Board.from_cells(
        [1 if ((c // 2) + r) % 2 == 0 else 2 for r in range(6) for c in range(7)])


def test_game_reports_moves_and_winner():
    view = RecordingView()
    players = [ScriptedPlayer("Alice", [0, 0, 0, 0]), ScriptedPlayer("Bob", [1, 1, 1])]
    game = ConnectFourGame(players, view)

    result = game.play()

    assert result == GameResult.PLAYER_ONE_WIN
    assert view.moves == [(0, "Alice"), (1, "Bob")] * 3 + [(0, "Alice")]
    assert view.messages == ["Alice wins!"]
    assert view.displays == 8
    assert game.winner_name() == "Alice"


def test_second_player_can_win():
    view = RecordingView()
    players = [ScriptedPlayer("Alice", [0, 0, 6, 0]), ScriptedPlayer("Bob", [1, 1, 1, 1])]

    result = ConnectFourGame(players, view).play()

    assert result == GameResult.PLAYER_TWO_WIN
    assert view.messages == ["Bob wins!"]


def test_full_board_is_reported_as_draw():
    view = RecordingView()
    players = [ScriptedPlayer("Alice", []), ScriptedPlayer("Bob", [])]
    game = ConnectFourGame(players, view, board=draw_board())

    result = game.play()

    assert result == GameResult.DRAW
    assert view.moves == []
    assert view.messages == ["It is a draw"]
    assert game.winner_name() is None


def test_invalid_choice_is_not_replaced():
    board = Board()
    for _ in range(6):
        board.make_move(2)
    players = [ScriptedPlayer("Alice", [2]), ScriptedPlayer("Bob", [])]

    with pytest.raises(InvalidMoveError):
        ConnectFourGame(players, RecordingView(), board=board).play()


def test_game_needs_two_players():
    with pytest.raises(ValueError):
        ConnectFourGame([ScriptedPlayer("Solo", [])], RecordingView())


def test_computer_players_finish_a_game():
    view = RecordingView()
    players = [MinimaxPlayer("Computer 1", depth=1), MinimaxPlayer("Computer 2", depth=0)]
    game = ConnectFourGame(players, view)

    result = game.play()

    assert result.is_game_over()
    assert game.board.is_terminal()
    assert len(view.moves) == len(game.board.moves_made)
    assert view.messages[-1] in ("Computer 1 wins!", "Computer 2 wins!", "It is a draw")


def test_env_reset_and_spaces():
    env = ConnectFourEnv()
    observation, info = env.reset(seed=1)

    assert observation.shape == (6, 7)
    assert observation.dtype == np.int8
    assert not observation.any()
    assert env.observation_space.contains(observation)
    assert env.action_space.n == 7
    assert info['valid_moves'] == list(range(7))
    assert info['game_result'] == "IN_PROGRESS"


def test_env_step_and_win_without_opponent():
    env = ConnectFourEnv()
    env.reset()

    for action in [0, 1, 0, 1, 0, 1]:
        observation, reward, terminated, truncated, info = env.step(action)
        assert reward == env.reward_step
        assert not terminated and not truncated

    observation, reward, terminated, truncated, info = env.step(0)

    assert reward == env.reward_win
    assert terminated
    assert info['game_result'] == "PLAYER_ONE_WIN"
    assert info['winning_line'] == (0, 7, 14, 21)
    assert observation[0, 0] == Player.ONE.value


def test_env_invalid_action_truncates():
    env = ConnectFourEnv()
    env.reset()

    observation, reward, terminated, truncated, info = env.step(9)

    assert reward == env.reward_invalid_move
    assert truncated and not terminated
    assert info['invalid_move']
    assert info['moves_made'] == 0


def test_env_opponent_answers_each_move():
    env = ConnectFourEnv(opponent=MinimaxPlayer("Computer", depth=0))
    env.reset()

    observation, reward, terminated, truncated, info = env.step(3)

    assert info['moves_made'] == 2
    assert info['current_player'] == Player.ONE.value
    assert np.count_nonzero(observation == Player.TWO.value) == 1


def test_env_loss_against_opponent():
    """Stacking in one column lets the opponent win first on the bottom row."""
    env = ConnectFourEnv(opponent=ScriptedPlayer("Bot", [1, 2, 3, 4]))
    env.reset()

    for action in [6, 6, 6]:
        _, reward, terminated, _, _ = env.step(action)
        assert not terminated

    _, reward, terminated, _, info = env.step(0)

    assert terminated
    assert reward == env.reward_lose
    assert info['game_result'] == "PLAYER_TWO_WIN"


def test_env_ascii_render():
    env = ConnectFourEnv(render_mode="ascii")
    env.reset()
    env.step(3)

    assert "X" in env.render()
    with pytest.raises(ValueError):
        ConnectFourEnv(render_mode="rgb_array")
