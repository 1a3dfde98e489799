"""
cli.py - Command-line interface for the Connect Four engine

This module provides a hot-seat terminal game for two players, a replay
command that applies a list of columns and reports the result, and a
small benchmark of the engine.
"""

import argparse
import random
import sys
from typing import List, Optional

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.exceptions import MoveError
from connect4_engine.game.board import Board
from connect4_engine.game.rules import ConnectFourGame
from connect4_engine.utils import COLS, GameResult

QUIT = "q"
RESET = "r"


def parse_moves(moves_str: str) -> List[int]:
    """Parse a comma-separated list of column numbers."""
    if not moves_str.strip():
        return []
    return [int(part) for part in moves_str.split(',')]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four CLI')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--debug_level', type=str, default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (ignored when --debug is set)')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Also write log messages to this file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('play', help='Play a two-player game on this terminal')

    replay_parser = subparsers.add_parser('replay', help='Apply a sequence of moves and show the result')
    replay_parser.add_argument('--moves', type=str, required=True,
                               help='Comma-separated columns, e.g. 3,3,4,4,5')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                  help='Number of random games to play')
    benchmark_parser.add_argument('--seed', type=int, default=None,
                                  help='Random seed for reproducible runs')

    return parser


class SimpleCLI:
    """Simple command-line interface for Connect Four."""

    def __init__(self):
        """Initialize the CLI."""
        self.game = ConnectFourGame()
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the logging options."""
        self.args = build_parser().parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'replay':
            return self.replay()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def print_status(self) -> None:
        print(self.game.render())
        print(self.game.get_snapshot().status)

    def play_game(self) -> None:
        """Play a Connect Four game interactively."""
        print("Starting a new Connect Four game!")
        print(f"Enter column number (0-{COLS - 1}) to drop a token.")
        print(f"Other commands: '{QUIT}' to quit, '{RESET}' to restart.")

        self.game.reset()
        self.print_status()

        while not self.game.is_game_over():
            command = self.get_human_move()

            if command is None:
                continue
            elif command == QUIT:
                print("Quitting game.")
                return
            elif command == RESET:
                self.game.reset()
                print("Game restarted.")
                self.print_status()
                continue

            try:
                self.game.make_move(command)
            except MoveError as e:
                print(f"Invalid move: {e}")
                continue

            self.print_status()

        print("Game over!")

    def get_human_move(self):
        """
        Get a move from the player to move.

        Returns:
            Column index, a command letter, or None if the input was invalid
        """
        player = self.game.get_current_player()
        try:
            user_input = input(f"{player.label} ({player.symbol}), your move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, RESET):
            return user_input

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

    def replay(self) -> int:
        """Apply the moves given on the command line and report the result."""
        try:
            moves = parse_moves(self.args.moves)
        except ValueError as e:
            print(f"Error parsing moves: {e}")
            return 2

        self.game.reset()
        for index, column in enumerate(moves):
            try:
                self.game.make_move(column)
            except MoveError as e:
                print(self.game.render())
                print(f"Move {index + 1} (column {column}) rejected: {e}")
                return 1

        snapshot = self.game.get_snapshot()
        print(self.game.render())
        print(snapshot.status)
        if snapshot.outcome.result == GameResult.WIN:
            print(f"Winning line: {list(snapshot.outcome.winning_line)}")
        return 0

    def benchmark(self) -> None:
        """Benchmark random play on the engine."""
        iterations = self.args.iterations
        rng = random.Random(self.args.seed)
        print(f"Running benchmark with {iterations} games...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board()
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / max(iterations, 1) * 1000:.6f} ms per board")

        results = {result: 0 for result in GameResult}
        total_moves = 0
        board = Board()
        debug.start_timer("game_simulation")
        for _ in range(iterations):
            board.reset()
            while not board.outcome.is_game_over():
                board.drop_token(rng.choice(board.legal_columns()))
                total_moves += 1
            results[board.outcome.result] += 1
        simulation_time = debug.end_timer("game_simulation")

        print(f"Played {iterations} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / max(total_moves, 1) * 1000:.6f} ms per move")
        print(f"Wins: {results[GameResult.WIN]}, draws: {results[GameResult.DRAW]}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
