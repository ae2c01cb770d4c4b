"""
cli.py - Command-line interface for Connect Four

This module provides the text view, the human player and the commands
behind run.py: playing a game, analysing a board position and timing
the search.
"""

import argparse
import random
import sys
from typing import List, Optional, Sequence, TextIO

from connect4ab.ai.evaluation import score
from connect4ab.ai.minimax import MinimaxPlayer
from connect4ab.ai.search import SearchStats, best_move
from connect4ab.debug import debug, DebugLevel
from connect4ab.game.base import GamePlayer, GameView
from connect4ab.game.board import Board
from connect4ab.game.rules import ConnectFourGame
from connect4ab.utils import DEFAULT_DEPTH, Player


class TextView(GameView):
    """Console view: prints the board and reads answers line by line."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _read_line(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise EOFError("No more input")
        return line.rstrip("\n")

    def display(self, board: Board) -> None:
        self._write(board.render() + "\n")

    def report_move(self, column: int, name: str) -> None:
        self._write(f"\n{name} places a checker in column {column}.\n\n")

    def report_to_user(self, message: str) -> None:
        self._write(message + "\n")

    def get_answer(self, question: str) -> str:
        self._write(question)
        return self._read_line()

    def get_int_answer(self, question: str) -> int:
        """Ask until the answer parses as an integer."""
        while True:
            answer = self.get_answer(question + " ").strip()
            try:
                return int(answer)
            except ValueError:
                self.report_to_user("That was not a valid number.")

    def get_user_move(self, board: Board, name: str) -> int:
        """Ask until the answer is a column that accepts a checker."""
        column = self.get_int_answer(f"\nColumn to drop in (indexed from 0), {name}?")
        while not board.is_valid_move(column):
            self.report_to_user("Illegal move. Try again.")
            column = self.get_int_answer("Column to drop in?")
        return column


class HumanPlayer(GamePlayer):
    """A player whose moves are typed in through the view."""

    def __init__(self, name: str, view: GameView):
        super().__init__(name)
        self.view = view

    def get_move(self, board: Board) -> int:
        return self.view.get_user_move(board, self.name)


def make_player(view: GameView, label: str, depth: Optional[int] = None) -> GamePlayer:
    """
    Ask for a player's name and build the matching player.

    Names containing "Computer" give a MinimaxPlayer; the look-ahead is
    asked for unless ``depth`` is given.

    Args:
        view: View used to ask the questions
        label: Which player is being created ("first" or "second")
        depth: Search depth for computer players

    Returns:
        The new player
    """
    name = view.get_answer(f"Enter the name of the {label} player.\n"
                           "(Include 'Computer' in the name of a computer player) ").strip()
    if "Computer" not in name:
        return HumanPlayer(name, view)

    while depth is None or depth < 0:
        depth = view.get_int_answer("How far should I look ahead?")
        if depth < 0:
            view.report_to_user("The look-ahead cannot be negative.")
    return MinimaxPlayer(name, depth)


def random_opening(moves: int, rng: random.Random, attempts: int = 100) -> Board:
    """
    Board after ``moves`` random legal moves that do not end the game.

    When every legal column would end the game the opening is started
    again from an empty board, at most ``attempts`` times.

    Raises:
        ValueError: If ``moves`` cannot leave a move to search, or no
            opening was found within ``attempts`` tries
    """
    board = Board()
    if not 0 <= moves < board.rows * board.cols - 1:
        raise ValueError(f"Opening length must be between 0 and "
                         f"{board.rows * board.cols - 2}, got {moves}")

    for _ in range(attempts):
        board.reset()
        while len(board.moves_made) < moves:
            columns = board.get_valid_moves()
            rng.shuffle(columns)
            for column in columns:
                board.make_move(column)
                if not board.is_terminal():
                    break
                board.undo_move()
            else:
                debug.debug(f"Dead end after {len(board.moves_made)} moves, restarting", "cli")
                break
        if len(board.moves_made) == moves:
            return board
    raise ValueError(f"No {moves}-move opening found in {attempts} attempts")


class SimpleCLI:
    """Command-line interface for playing and analysing Connect Four."""

    def __init__(self, view: Optional[TextView] = None):
        self.view = view if view is not None else TextView()
        self.args = None

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four with alpha-beta search')
        parser.add_argument('--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (ignored with --debug)')
        parser.add_argument('--log-file', help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--depth', type=int,
                                 help='Look-ahead for computer players (asked if omitted)')

        analyze_parser = subparsers.add_parser('analyze', help='Evaluate a board position')
        analyze_parser.add_argument('--position', required=True,
                                    help='Comma-separated cells, row 0 (bottom) first')
        analyze_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                                    help='Search depth for the suggested move')

        benchmark_parser = subparsers.add_parser('benchmark', help='Time the search')
        benchmark_parser.add_argument('--depth', type=int, default=DEFAULT_DEPTH,
                                      help='Search depth')
        benchmark_parser.add_argument('--iterations', type=int, default=5,
                                      help='Number of positions to search')
        benchmark_parser.add_argument('--opening', type=int, default=4,
                                      help='Random moves played before each search')
        benchmark_parser.add_argument('--seed', type=int, default=None,
                                      help='Random seed for the openings')
        return parser

    def parse_args(self, argv: Optional[Sequence[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run the command given on the command line; returns an exit status."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            return self.benchmark()
        else:
            self.view.report_to_user("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Ask for the two players and play one game."""
        depth = self.args.depth
        players = [make_player(self.view, "first", depth),
                   make_player(self.view, "second", depth)]
        ConnectFourGame(players, self.view).play()

    def analyze_position(self) -> int:
        """Show scores, game status and the suggested move for a position."""
        try:
            board = Board.from_position_string(self.args.position)
        except ValueError as e:
            self.view.report_to_user(f"Error parsing position: {e}")
            return 1

        self.view.display(board)
        for player in (Player.ONE, Player.TWO):
            self.view.report_to_user(f"Score for {player.name} ({player}): {score(board, player)}")

        result = board.game_result
        if result.is_game_over():
            self.view.report_to_user(f"Game over: {result.name}")
            return 0

        stats = SearchStats()
        move = best_move(board, self.args.depth, stats)
        self.view.report_to_user(
            f"{board.current_player.name} to move. Best column at depth {self.args.depth}: "
            f"{move.column} (value {move.value}, {stats.nodes} nodes, {stats.cutoffs} cutoffs)")
        return 0

    def benchmark(self) -> int:
        """Search random positions and report the time per search."""
        rng = random.Random(self.args.seed)
        iterations = max(1, self.args.iterations)
        total_time = 0.0
        total_nodes = 0

        for _ in range(iterations):
            try:
                board = random_opening(self.args.opening, rng)
            except ValueError as e:
                self.view.report_to_user(f"Error building opening: {e}")
                return 1
            stats = SearchStats()
            debug.start_timer("benchmark")
            best_move(board, self.args.depth, stats)
            total_time += debug.end_timer("benchmark", "cli")
            total_nodes += stats.nodes

        self.view.report_to_user(
            f"Searched {iterations} positions at depth {self.args.depth}: "
            f"{total_time / iterations * 1000:.2f} ms and "
            f"{total_nodes / iterations:.0f} nodes per search")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
