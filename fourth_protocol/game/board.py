"""
board.py - Board representation and core game mechanics for The Fourth Protocol

This module implements the Board class, which owns the grid and both
players' piece rosters. The grid stores signed roster tokens rather than
piece objects, so a cell and the piece standing on it can always be checked
against each other.

Two families of mutators exist:

- place / move_piece / make_move validate their input and return False
  without touching the board when the request is illegal.
- apply_move / undo_move are the unchecked primitives the search engine uses
  on moves it generated itself; applied() pairs them so the undo always runs.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence

import numpy as np

from fourth_protocol.config import DEFAULT_ROSTER
from fourth_protocol.debug import debug
from fourth_protocol.game.moves import Move
from fourth_protocol.game.pieces import Piece, can_move
from fourth_protocol.utils import (DEFAULT_GRID_SIZE, EMPTY_CELL, UNPLACED, WIN_LENGTH,
                                   Coord, Kind, Player, find_winning_line,
                                   render_board_ascii)


class Board:
    """
    Represents a Fourth Protocol game board.

    This class manages the grid, the two piece rosters, move validation and
    win detection.
    """

    def __init__(self, size: int = DEFAULT_GRID_SIZE,
                 roster: Optional[Sequence[Kind]] = None,
                 win_length: int = WIN_LENGTH):
        """
        Initialize an empty board.

        Args:
            size: Side length of the square grid
            roster: Piece kinds each player owns, in roster order
            win_length: Number of pieces in a row needed to win
        """
        if roster is None:
            roster = DEFAULT_ROSTER
        if size < win_length:
            raise ValueError(f"Grid size {size} is smaller than win length {win_length}")
        if 2 * len(roster) > size * size:
            raise ValueError(f"{len(roster)} pieces per player do not fit on a {size}x{size} grid")

        self.size = size
        self.win_length = win_length
        self.roster: List[Kind] = list(roster)
        debug.debug(f"Initializing {size}x{size} board with roster "
                    f"{[k.name for k in self.roster]}", "board")
        self.reset()

    def reset(self):
        """Empty the grid and return every piece to its owner's pool."""
        self.grid = np.zeros((self.size, self.size), dtype=int)
        self.pieces: Dict[Player, List[Piece]] = {
            player: [Piece(player, kind, index) for index, kind in enumerate(self.roster)]
            for player in (Player.ONE, Player.TWO)
        }

    @classmethod
    def from_grid(cls, grid: np.ndarray, roster: Optional[Sequence[Kind]] = None,
                  win_length: int = WIN_LENGTH) -> 'Board':
        """
        Build a board from a grid of tokens.

        Pieces whose token appears in the grid are placed there; the rest stay
        in the pool.
        """
        grid = np.asarray(grid, dtype=int)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Grid must be square, got shape {grid.shape}")

        board = cls(size=grid.shape[0], roster=roster, win_length=win_length)
        for row in range(board.size):
            for col in range(board.size):
                token = int(grid[row, col])
                if token == EMPTY_CELL:
                    continue
                piece = board.get_piece(Player.owner(token), abs(token) - 1)
                if piece.is_placed:
                    raise ValueError(f"Token {token} appears more than once")
                board.grid[row, col] = token
                piece.set_position(row, col)
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board(self.size, self.roster, self.win_length)
        new_board.grid = self.grid.copy()
        for player, pieces in self.pieces.items():
            for piece, twin in zip(pieces, new_board.pieces[player]):
                twin.set_position(piece.row, piece.col)
        return new_board

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == EMPTY_CELL

    def get_piece(self, player: Player, index: int) -> Piece:
        """
        Look up a piece by roster index.

        Raises:
            IndexError: if the index is outside the player's roster
        """
        pieces = self.pieces[player]
        if not 0 <= index < len(pieces):
            raise IndexError(f"Piece index {index} out of range for player {player.name} "
                             f"(roster has {len(pieces)} pieces)")
        return pieces[index]

    def piece_at(self, row: int, col: int) -> Optional[Piece]:
        """Piece standing on a cell, or None if the cell is empty."""
        token = int(self.grid[row, col])
        if token == EMPTY_CELL:
            return None
        return self.pieces[Player.owner(token)][abs(token) - 1]

    def empty_cells(self) -> List[Coord]:
        """Empty cells in row-major order."""
        return [(row, col)
                for row in range(self.size)
                for col in range(self.size)
                if self.grid[row, col] == EMPTY_CELL]

    def unplaced_pieces(self, player: Player) -> List[Piece]:
        return [piece for piece in self.pieces[player] if not piece.is_placed]

    def placed_pieces(self, player: Player) -> List[Piece]:
        return [piece for piece in self.pieces[player] if piece.is_placed]

    def all_placed(self) -> bool:
        """True once every piece of both players is on the board."""
        return all(piece.is_placed for pieces in self.pieces.values() for piece in pieces)

    def positions(self, player: Player) -> List[Coord]:
        """Coordinates of a player's pieces in roster order (UNPLACED for the pool)."""
        return [piece.position for piece in self.pieces[player]]

    # ------------------------------------------------------------------
    # Validated mutators
    # ------------------------------------------------------------------

    def is_valid_move(self, player: Player, move: Move) -> bool:
        """
        Check if a move is legal for a player on the current board.

        Placements need an unplaced piece and an empty in-bounds target;
        relocations must match the piece's position and its movement rule.

        Raises:
            IndexError: if the move names a piece outside the roster
        """
        piece = self.get_piece(player, move.piece_index)

        if move.is_placement:
            if piece.is_placed:
                debug.debug(f"Invalid placement: {piece} is already on the board", "board")
                return False
            if not self.in_bounds(move.to_row, move.to_col):
                debug.debug(f"Invalid placement: {move.target} out of bounds", "board")
                return False
            if not self.is_empty(move.to_row, move.to_col):
                debug.debug(f"Invalid placement: {move.target} is occupied", "board")
                return False
            return True

        if piece.position != move.source:
            debug.debug(f"Invalid move: {piece} is not at {move.source}", "board")
            return False
        if not can_move(piece, self, move.to_row, move.to_col):
            debug.debug(f"Invalid move: {piece.kind.name} cannot reach {move.target}", "board")
            return False
        return True

    def make_move(self, player: Player, move: Move) -> bool:
        """
        Validate and apply a move.

        Returns:
            True if the move was applied, False if it was rejected
        """
        if not self.is_valid_move(player, move):
            return False
        self.apply_move(player, move)
        debug.debug(f"Player {player.name}: {move}", "board")
        return True

    def place(self, player: Player, index: int, row: int, col: int) -> bool:
        """Put an unplaced piece on an empty cell."""
        return self.make_move(player, Move.placement(index, row, col))

    def move_piece(self, player: Player, index: int, to_row: int, to_col: int) -> bool:
        """Relocate a placed piece according to its movement rule."""
        piece = self.get_piece(player, index)
        if not piece.is_placed:
            debug.debug(f"Invalid move: {piece} has not been placed", "board")
            return False
        return self.make_move(player, Move(index, piece.row, piece.col, to_row, to_col))

    # ------------------------------------------------------------------
    # Search primitives
    # ------------------------------------------------------------------

    def apply_move(self, player: Player, move: Move) -> None:
        """Apply a move without validation."""
        piece = self.pieces[player][move.piece_index]
        if not move.is_placement:
            self.grid[move.from_row, move.from_col] = EMPTY_CELL
        self.grid[move.to_row, move.to_col] = piece.token
        piece.set_position(move.to_row, move.to_col)

    def undo_move(self, player: Player, move: Move) -> None:
        """Exact inverse of apply_move for the same arguments."""
        piece = self.pieces[player][move.piece_index]
        self.grid[move.to_row, move.to_col] = EMPTY_CELL
        if move.is_placement:
            piece.set_position(UNPLACED, UNPLACED)
        else:
            self.grid[move.from_row, move.from_col] = piece.token
            piece.set_position(move.from_row, move.from_col)

    @contextmanager
    def applied(self, player: Player, move: Move) -> Iterator['Board']:
        """Apply a move for the duration of a with-block, undoing it on exit."""
        self.apply_move(player, move)
        try:
            yield self
        finally:
            self.undo_move(player, move)

    # ------------------------------------------------------------------
    # Win detection and display
    # ------------------------------------------------------------------

    def has_won(self, player: Player) -> bool:
        """Check whether a player has win_length pieces in a row."""
        return bool(find_winning_line(self.grid, player, self.win_length))

    def get_winning_line(self, player: Player) -> List[Coord]:
        """
        Get the positions of a player's winning line.

        Returns:
            List of (row, col) positions forming the line, or empty list if no win
        """
        return find_winning_line(self.grid, player, self.win_length)

    def get_state(self) -> np.ndarray:
        """Get a copy of the grid."""
        return self.grid.copy()

    def symbols(self) -> Dict[int, str]:
        """Grid token -> display letter for every piece."""
        return {piece.token: piece.symbol
                for pieces in self.pieces.values()
                for piece in pieces}

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid, self.symbols())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.size == other.size
                and self.roster == other.roster
                and np.array_equal(self.grid, other.grid)
                and all(self.positions(p) == other.positions(p) for p in (Player.ONE, Player.TWO)))

    __hash__ = None

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
