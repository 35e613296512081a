"""
cli.py - Command-line interface for The Fourth Protocol

This module provides a CLI for playing the game in a terminal (player vs
player, player vs AI, AI vs AI), analysing a position with the search engine
and benchmarking the core routines.
"""

import argparse
import random
import sys
from typing import Dict, List, Optional, Union

from fourth_protocol.ai.minimax import MinimaxPlayer
from fourth_protocol.ai.random_player import RandomPlayer
from fourth_protocol.config import Config, Difficulty, load_config
from fourth_protocol.debug import DebugLevel, debug
from fourth_protocol.game.board import Board
from fourth_protocol.game.moves import Move, generate_moves
from fourth_protocol.game.pieces import Piece
from fourth_protocol.game.rules import FourthProtocolGame
from fourth_protocol.utils import Kind, Phase, Player, has_won, parse_grid

AIPlayer = Union[MinimaxPlayer, RandomPlayer]

HELP_TEXT = """Commands:
  placement:  <piece> <row> <col>        e.g. "F 2 2" or "0 2 2"
  movement:   <row> <col> <row> <col>    e.g. "2 2 3 2"
              <piece> <row> <col>        moves that piece to (row, col)
  h           show this help
  q           quit
Pieces are named by roster index or kind letter (F=Frog, S=Snake,
D=Donkey, A=Antelope, L=Lion). Your pieces are upper case for X and
lower case for O."""


def _resolve_piece(token: str, board: Board, player: Player, phase: Phase) -> Piece:
    """Find the piece a user means by an index or a kind letter."""
    if token.isdigit():
        return board.get_piece(player, int(token))

    kind = Kind.parse(token)
    want_placed = phase == Phase.MOVEMENT
    for piece in board.pieces[player]:
        if piece.kind == kind and piece.is_placed == want_placed:
            return piece
    raise ValueError(f"No {'placed' if want_placed else 'unplaced'} {kind.name.lower()} available")


def parse_move_text(text: str, board: Board, player: Player, phase: Phase) -> Move:
    """
    Turn a line of user input into a Move.

    Raises:
        ValueError: if the text does not describe a move
    """
    parts = text.replace(",", " ").split()

    if len(parts) == 3:
        piece = _resolve_piece(parts[0], board, player, phase)
        to_row, to_col = int(parts[1]), int(parts[2])
        if phase == Phase.PLACEMENT:
            return Move.placement(piece.index, to_row, to_col)
        return Move(piece.index, piece.row, piece.col, to_row, to_col)

    if len(parts) == 4 and phase == Phase.MOVEMENT:
        from_row, from_col, to_row, to_col = (int(p) for p in parts)
        if not board.in_bounds(from_row, from_col):
            raise ValueError(f"({from_row}, {from_col}) is off the board")
        piece = board.piece_at(from_row, from_col)
        if piece is None or piece.player != player:
            raise ValueError(f"You have no piece on ({from_row}, {from_col})")
        return Move(piece.index, from_row, from_col, to_row, to_col)

    raise ValueError(f"Could not understand {text!r} (type 'h' for help)")


def positive_int(text: str) -> int:
    """argparse type for counts that must be at least 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_ai(kind: str, config: Config, seed: Optional[int] = None) -> AIPlayer:
    if kind == 'random':
        return RandomPlayer(seed)
    return MinimaxPlayer(config=config.search, eval_config=config.eval)


class SimpleCLI:
    """Simple command-line interface for The Fourth Protocol."""

    def __init__(self):
        """Initialize the CLI."""
        self.args = None
        self.config: Optional[Config] = None
        self.game: Optional[FourthProtocolGame] = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='The Fourth Protocol CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        parser.add_argument('--debug-level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level')
        parser.add_argument('--config', default=None, help='Path to a TOML config file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--mode', choices=['pvp', 'pvai', 'aivai'], default='pvai',
                                 help='Who plays: human/human, human/AI or AI/AI')
        play_parser.add_argument('--difficulty', choices=[d.value for d in Difficulty],
                                 default=None, help='Depth and board size preset')
        play_parser.add_argument('--ai', choices=['minimax', 'random'], default='minimax',
                                 help='AI opponent type')
        play_parser.add_argument('--depth', type=int, default=None, help='Search depth override')
        play_parser.add_argument('--seed', type=int, default=None, help='Seed for the random AI')

        analyze_parser = subparsers.add_parser('analyze', help='Analyse a board position')
        # Space-separated tokens let argparse accept a leading negative value
        analyze_parser.add_argument('--position', nargs='+', required=True,
                                    help='Grid tokens in row-major order, separated by spaces '
                                         'or commas (use --position=-1,... for a comma list '
                                         'starting with a negative token)')
        analyze_parser.add_argument('--player', choices=['one', 'two'], default='one',
                                    help='Player to move')
        analyze_parser.add_argument('--phase', choices=['placement', 'movement'], default=None,
                                    help='Phase (inferred from the pool when omitted)')
        analyze_parser.add_argument('--depth', type=int, default=None, help='Search depth override')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=200,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--depth', type=positive_int, default=2, help='Search depth')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        elif self.args.debug_level:
            debug.set_from_string(self.args.debug_level)

    def _load_config(self) -> Config:
        difficulty = getattr(self.args, 'difficulty', None)
        config = load_config(self.args.config, Difficulty(difficulty) if difficulty else None)
        if getattr(self.args, 'depth', None) is not None:
            config.search.depth = self.args.depth
        if not (self.args.debug or self.args.debug_level):
            debug.set_from_string(config.log_level)
        return config.validate()

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command is None:
            print("Please specify a command. Use --help for options.")
            return 1

        try:
            self.config = self._load_config()
        except ValueError as e:
            print(f"Configuration error: {e}")
            return 1

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        return 0

    def play_game(self) -> None:
        """Play a game in the terminal."""
        self.game = FourthProtocolGame(self.config.game)
        players: Dict[Player, Optional[AIPlayer]] = {Player.ONE: None, Player.TWO: None}
        if self.args.mode in ('pvai', 'aivai'):
            players[Player.TWO] = build_ai(self.args.ai, self.config, self.args.seed)
        if self.args.mode == 'aivai':
            players[Player.ONE] = build_ai(self.args.ai, self.config,
                                           None if self.args.seed is None else self.args.seed + 1)

        print("Starting a new game of The Fourth Protocol!")
        print(f"Get {self.game.board.win_length} in a row on a "
              f"{self.game.board.size}x{self.game.board.size} board. Type 'h' for help.")
        print(self.game.render())

        while not self.game.is_game_over():
            player = self.game.get_current_player()
            ai = players[player]

            if ai is None:
                move = self.get_human_move()
                if move is None:
                    print("Quitting game.")
                    return
            else:
                print(f"AI ({player}) is thinking...")
                move = ai.get_move(self.game.board, player, self.game.phase)
                if isinstance(ai, MinimaxPlayer) and ai.last_result:
                    result = ai.last_result
                    print(f"AI plays {move} (score {result.score}, "
                          f"{result.moves_considered} moves considered, {result.elapsed:.2f}s)")
                else:
                    print(f"AI plays {move}")

            if move is None or not self.game.make_move(move):
                print(f"Invalid move: {move}")
                continue
            print(self.game.render())

        winner = self.game.get_winner()
        if winner is None:
            print("It's a draw!")
        else:
            print(f"Player {winner} wins with {self.game.get_winning_line()}!")

    def get_human_move(self) -> Optional[Move]:
        """
        Read a move from the human player.

        Returns:
            The move, or None if the player quits
        """
        player = self.game.get_current_player()
        while True:
            try:
                user_input = input(f"Player {player} ({self.game.phase.name.lower()}): ").strip()
            except EOFError:
                return None

            if user_input.lower() == 'q':
                return None
            if user_input.lower() == 'h':
                print(HELP_TEXT)
                continue

            try:
                return parse_move_text(user_input, self.game.board, player, self.game.phase)
            except (ValueError, IndexError) as e:
                print(e)

    def analyze_position(self) -> int:
        """Load a position and report wins and the engine's choice."""
        try:
            grid = parse_grid(",".join(self.args.position))
            board = Board.from_grid(grid, self.config.game.roster, self.config.game.win_length)
        except (ValueError, IndexError) as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        for player in (Player.ONE, Player.TWO):
            if has_won(board.grid, player, board.win_length):
                print(f"Player {player} has a winning line: {board.get_winning_line(player)}")
                return 0

        player = Player.ONE if self.args.player == 'one' else Player.TWO
        if self.args.phase:
            phase = Phase[self.args.phase.upper()]
        else:
            phase = Phase.MOVEMENT if board.all_placed() else Phase.PLACEMENT

        engine = MinimaxPlayer(config=self.config.search, eval_config=self.config.eval)
        result = engine.find_best_move(board, player, phase)
        if not result.found:
            print(f"Player {player} has no legal move")
            return 0

        print(f"Best move for player {player}: {result.move}")
        print(f"Score: {result.score}")
        print(f"Moves considered: {result.moves_considered}, nodes evaluated: "
              f"{result.nodes_evaluated}, time: {result.elapsed:.3f}s")
        return 0

    def benchmark(self) -> None:
        """Benchmark move generation, win checks and search."""
        iterations = self.args.iterations
        rng = random.Random(0)
        game_config = self.config.game
        print(f"Running benchmark with {iterations} iterations...")

        boards = []
        for _ in range(iterations):
            board = Board(game_config.grid_size, game_config.roster, game_config.win_length)
            for player in (Player.ONE, Player.TWO):
                for piece in board.pieces[player]:
                    row, col = rng.choice(board.empty_cells())
                    board.place(player, piece.index, row, col)
            boards.append(board)

        debug.start_timer("movegen")
        total_moves = 0
        for board in boards:
            total_moves += len(generate_moves(board, Player.ONE, Phase.MOVEMENT))
        elapsed = debug.end_timer("movegen")
        print(f"Generated {total_moves} moves: {elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per position")

        debug.start_timer("win_check")
        for board in boards:
            board.has_won(Player.ONE)
            board.has_won(Player.TWO)
        elapsed = debug.end_timer("win_check")
        print(f"Performed {2 * iterations} win checks: {elapsed:.6f} seconds total, "
              f"{elapsed / (2 * iterations) * 1000:.6f} ms per check")

        engine = MinimaxPlayer(depth=self.args.depth, eval_config=self.config.eval)
        searches = max(1, iterations // 20)
        debug.start_timer("search")
        nodes = 0
        for board in boards[:searches]:
            nodes += engine.find_best_move(board, Player.ONE, Phase.MOVEMENT).nodes_evaluated
        elapsed = debug.end_timer("search")
        print(f"Ran {searches} depth-{self.args.depth} searches over {nodes} nodes: "
              f"{elapsed:.6f} seconds total, {elapsed / searches * 1000:.3f} ms per search")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
