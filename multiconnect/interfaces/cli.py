"""
cli.py - Command-line front end for multiconnect

Registers players, runs a game in the terminal and renders each move. Also
offers a small benchmark that plays random games against the engine.
"""

import argparse
import random
import sys
from typing import List, Optional

from multiconnect.debug import DebugLevel, debug
from multiconnect.game.players import PlayerRegistry
from multiconnect.game.rules import GameEngine, MoveOutcome, MoveResult
from multiconnect.utils import DEFAULT_COLORS, DEFAULT_HEIGHT, DEFAULT_WIDTH, symbol_for

QUIT = -1


class SimpleCLI:
    """Simple command-line interface for multi-player Connect Four."""

    def __init__(self):
        self.registry = PlayerRegistry()
        self.engine: Optional[GameEngine] = None
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        parser = argparse.ArgumentParser(description='Multi-player Connect Four')
        parser.add_argument('--debug', action='store_true', help='Enable debug output')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH,
                                 help='Number of columns')
        play_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT,
                                 help='Number of rows')
        play_parser.add_argument('--player', dest='players', action='append', metavar='COLOR',
                                 help='Register a player with this color (repeat for more players)')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark random games')
        benchmark_parser.add_argument('--iterations', type=int, default=100,
                                      help='Number of games to play')
        benchmark_parser.add_argument('--players', type=int, default=2,
                                      help='Number of players per game')
        benchmark_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH)
        benchmark_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT)
        benchmark_parser.add_argument('--seed', type=int, default=None)

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command selected on the command line."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        if self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def register_players(self, colors: List[str]) -> None:
        for color in colors:
            player = self.registry.register(color)
            print(f"Registered {player.identifier}: {player.color}")

    def play_game(self) -> int:
        """Play one game in the terminal."""
        self.register_players(self.args.players or list(DEFAULT_COLORS))

        try:
            self.engine = GameEngine(self.args.width, self.args.height, self.registry)
        except ValueError as e:
            print(f"Cannot start game: {e}")
            return 1

        print("Starting a new Connect Four game!")
        for player in self.engine.players:
            symbol = symbol_for(self.engine.token_for(player))
            print(f"  {symbol} = {player.color} ({player.identifier})")
        print(self.engine.render())

        while not self.engine.game_over:
            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return 0

            result = self.engine.apply_move(move)
            self.show_result(result)

        return 0

    def get_human_move(self) -> Optional[int]:
        """
        Read a column from the current player.

        Returns:
            Column index, QUIT, or None if the input was not understood
        """
        player = self.engine.current_player
        prompt = f"{player.color} to move (columns 0-{self.engine.width - 1}, q to quit): "
        try:
            user_input = input(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            return QUIT

        if user_input == 'q':
            return QUIT

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or 'q'.")
            return None

    def show_result(self, result: MoveResult) -> None:
        if result.outcome == MoveOutcome.REJECTED:
            print("That column cannot take a piece. Try another one.")
            return

        print(self.engine.render())
        if result.is_terminal:
            print(result.message)

    def benchmark(self) -> int:
        """Play random games and report how long they took."""
        if self.args.iterations < 1 or self.args.players < 1:
            print("Iterations and players must be at least 1")
            return 1
        if self.args.width < 1 or self.args.height < 1:
            print("Board width and height must be at least 1")
            return 1

        rng = random.Random(self.args.seed)
        registry = PlayerRegistry()
        for n in range(self.args.players):
            registry.register(f"color{n + 1}")

        print(f"Running benchmark with {self.args.iterations} games...")
        outcomes = {MoveOutcome.WIN: 0, MoveOutcome.TIE: 0}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(self.args.iterations):
            engine = GameEngine(self.args.width, self.args.height, registry)
            result = None
            while not engine.game_over:
                result = engine.apply_move(rng.choice(engine.valid_moves()))
                total_moves += 1
            outcomes[result.outcome] += 1
        elapsed = debug.end_timer("benchmark", "cli")

        print(f"Played {self.args.iterations} games with {total_moves} total moves: "
              f"{elapsed:.6f} seconds total, "
              f"{elapsed / self.args.iterations * 1000:.6f} ms per game")
        print(f"Wins: {outcomes[MoveOutcome.WIN]}, ties: {outcomes[MoveOutcome.TIE]}")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
