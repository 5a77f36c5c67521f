"""
cli.py - Command-line interface for Connect Four

Two players share one terminal and take turns typing column numbers. There
are also commands to replay a list of moves, analyze a position and time the
engine.
"""

import argparse
import random
import sys
import time
from typing import List, Optional

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.errors import ConnectFourError, InvalidStateError
from connect_four.game.rules import TurnController, status_message
from connect_four.game.state import GameState
from connect_four.game.win_detector import find_winning_run
from connect_four.interfaces.input_gate import DEFAULT_LOCK_SECONDS, InputGate
from connect_four.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, GameStatus, Player,
                                PlayerProfile)

DEBUG_LEVEL_CHOICES = [level.name.lower() for level in DebugLevel]


def parse_columns(text: str) -> List[int]:
    """Parse a comma-separated column list such as "3,3,4"."""
    try:
        return [int(part) for part in text.split(',') if part.strip()]
    except ValueError:
        raise ValueError(f"Moves must be comma-separated integers, got {text!r}")


class SimpleCLI:
    """Command-line interface for playing and inspecting Connect Four games."""

    def __init__(self):
        self.args = None
        self.controller: Optional[TurnController] = None

    def build_parser(self) -> argparse.ArgumentParser:
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true', help='Enable debug logging')
        common.add_argument('--debug-level', choices=DEBUG_LEVEL_CHOICES, default='warning',
                            help='Logging level (ignored with --debug)')
        common.add_argument('--log-file', type=str, default=None, help='Also log to this file')

        board_opts = argparse.ArgumentParser(add_help=False)
        board_opts.add_argument('--height', type=int, default=DEFAULT_HEIGHT, help='Number of rows')
        board_opts.add_argument('--width', type=int, default=DEFAULT_WIDTH, help='Number of columns')

        parser = argparse.ArgumentParser(description='Connect Four')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', parents=[common, board_opts],
                                            help='Play a two-player game in this terminal')
        play_parser.add_argument('--p1-color', default='red', help='Color for player 1')
        play_parser.add_argument('--p2-color', default='yellow', help='Color for player 2')
        play_parser.add_argument('--lock-ms', type=int, default=int(DEFAULT_LOCK_SECONDS * 1000),
                                 help='Ignore input for this long after each move')
        play_parser.add_argument('--no-color', action='store_true', help='Draw pieces without color')

        replay_parser = subparsers.add_parser('replay', parents=[common, board_opts],
                                              help='Play a fixed sequence of columns')
        replay_parser.add_argument('--moves', required=True, help='Comma-separated columns, e.g. 3,3,4')
        replay_parser.add_argument('--delay', type=float, default=0.0,
                                   help='Seconds to pause between moves')

        test_parser = subparsers.add_parser('test', parents=[common],
                                            help='Analyze a board position')
        test_parser.add_argument('--position', type=str,
                                 help='Comma-separated rows, top first, using . X O')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common, board_opts],
                                                 help='Benchmark engine performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI; returns a process exit code."""
        if not self.args:
            self.parse_args(argv)

        commands = {
            'play': self.play_game,
            'replay': self.replay_moves,
            'test': self.test_position,
            'benchmark': self.benchmark,
        }
        command = commands.get(self.args.command)
        if command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            return command()
        except ValueError as e:
            # Bad option values (board size, move lists, positions)
            print(f"Error: {e}")
            return 2

    def _new_controller(self, profiles=None) -> TurnController:
        self.controller = TurnController(self.args.height, self.args.width, profiles)
        return self.controller

    def play_game(self) -> int:
        """Play a game with two humans taking turns at the keyboard."""
        profiles = (PlayerProfile(Player.ONE, self.args.p1_color),
                    PlayerProfile(Player.TWO, self.args.p2_color))
        controller = self._new_controller(profiles)
        use_color = not self.args.no_color and sys.stdout.isatty()
        gate = InputGate(max(self.args.lock_ms, 0) / 1000.0)

        def show(state: GameState):
            print(controller.render(color=use_color))

        controller.subscribe(show)

        last_col = controller.board.width - 1
        print("Starting a new Connect Four game!")
        print(f"Enter a column number (0-{last_col}) to drop a piece, 'q' to quit.")
        show(controller.state)

        while not controller.is_game_over():
            player = controller.get_active_player()
            profile = controller.profile_for(player)
            try:
                user_input = input(f"Player {player.value} ({profile.color}), column: ").strip().lower()
            except EOFError:
                user_input = 'q'

            if user_input == 'q':
                print("Quitting game.")
                return 0

            try:
                column = int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or 'q'.")
                continue

            if not gate.try_acquire():
                print("Too fast, move ignored.")
                continue

            try:
                if controller.drop_piece(column) is None:
                    print(f"Column {column} is full. Pick another one.")
            except ConnectFourError as e:
                print(e)

        gate.lock()
        print("Game over!")
        print(status_message(controller.get_status()))
        return 0

    def replay_moves(self) -> int:
        """Feed a fixed list of columns through a fresh game."""
        moves = parse_columns(self.args.moves)
        controller = self._new_controller()
        print(controller.render())

        for i, column in enumerate(moves):
            player = controller.get_active_player()
            try:
                landed = controller.drop_piece(column)
            except InvalidStateError:
                print(f"Game already over, ignoring {len(moves) - i} remaining move(s).")
                break
            except ConnectFourError as e:
                print(f"Move {i + 1}: {e}")
                return 1

            if landed is None:
                print(f"\nMove {i + 1}: column {column} is full, skipped")
                continue

            print(f"\nMove {i + 1}: Player {player.value} plays column {column}")
            print(controller.render())
            if self.args.delay > 0:
                time.sleep(self.args.delay)

        status = controller.get_status()
        message = status_message(status)
        if message:
            print(f"\n{message}")
            run = controller.get_winning_run()
            if run:
                print(f"Winning run: {list(run)}")
        else:
            print(f"\nGame still in progress, Player {controller.get_active_player().value} to move.")
        return 0

    def test_position(self) -> int:
        """Report wins, fullness and legal columns for a given position."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        board = Board.from_rows([row.strip() for row in self.args.position.split(',')])
        print("Loaded position:")
        print(board.render())

        print("\nTesting win conditions:")
        winners = []
        for player in (Player.ONE, Player.TWO):
            run = find_winning_run(board, player)
            if run is not None:
                winners.append(player)
                print(f"Win for Player {player.value} ({player}) at {list(run)}")
        if not winners:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            empty_count = board.height * board.width - board.count(Player.ONE) - board.count(Player.TWO)
            print(f"Empty spaces: {empty_count}")

        print(f"Valid moves: {board.valid_columns()}")
        if not board.satisfies_gravity():
            print("Warning: position has floating pieces")
        return 0

    def benchmark(self) -> int:
        """Benchmark board setup, random games, win checks and rendering."""
        iterations = self.args.iterations
        if iterations < 1:
            raise ValueError("--iterations must be at least 1")
        height, width = self.args.height, self.args.width
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board(height, width)
        board_init_time = debug.end_timer("board_init")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        debug.start_timer("game_simulation")
        games_played = 0
        total_moves = 0
        outcomes = {status: 0 for status in GameStatus if status.is_game_over()}
        for _ in range(max(iterations // 10, 1)):
            controller = TurnController(height, width)
            while not controller.is_game_over():
                controller.drop_piece(random.choice(controller.valid_columns()))
                total_moves += 1
            games_played += 1
            outcomes[controller.get_status()] += 1
        simulation_time = debug.end_timer("game_simulation")
        print(f"Played {games_played} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games_played * 1000:.6f} ms per game, "
              f"{simulation_time / total_moves * 1000:.6f} ms per move")
        print("Outcomes: " + ", ".join(f"{s.name}={n}" for s, n in outcomes.items()))

        board = Board(height, width)
        for _ in range(min(10, height * width)):
            col = random.choice(board.valid_columns())
            board.place(board.landing_row(col), col, random.choice((Player.ONE, Player.TWO)))

        debug.start_timer("win_check")
        for _ in range(iterations):
            find_winning_run(board, Player.ONE)
        win_check_time = debug.end_timer("win_check")
        print(f"Performing {iterations} full-board win checks: {win_check_time:.6f} seconds total, "
              f"{win_check_time / iterations * 1000:.6f} ms per check")

        debug.start_timer("rendering")
        for _ in range(iterations):
            board.render()
        rendering_time = debug.end_timer("rendering")
        print(f"Rendering board {iterations} times: {rendering_time:.6f} seconds total, "
              f"{rendering_time / iterations * 1000:.6f} ms per render")
        return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    sys.exit(cli.run(argv))


if __name__ == "__main__":
    main()
