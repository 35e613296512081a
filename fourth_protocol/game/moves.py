"""
moves.py - Move values and legal move generation for The Fourth Protocol

A Move describes one ply: which piece of the acting player moves, where it
comes from (UNPLACED during placement) and where it goes. generate_moves
produces the full legal list for one player in a fixed order: roster order
first, then row-major target order. The search relies on that order for
reproducible tie-breaking.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from fourth_protocol.debug import DebugLevel, debug
from fourth_protocol.game.pieces import get_valid_moves
from fourth_protocol.utils import UNPLACED, Coord, Phase, Player

if TYPE_CHECKING:
    from fourth_protocol.game.board import Board


@dataclass(frozen=True)
class Move:
    """One ply: roster index of the moving piece, source and target cells."""

    piece_index: int
    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @classmethod
    def placement(cls, piece_index: int, to_row: int, to_col: int) -> 'Move':
        return cls(piece_index, UNPLACED, UNPLACED, to_row, to_col)

    @property
    def is_placement(self) -> bool:
        return self.from_row < 0 or self.from_col < 0

    @property
    def source(self) -> Coord:
        return self.from_row, self.from_col

    @property
    def target(self) -> Coord:
        return self.to_row, self.to_col

    def __str__(self) -> str:
        if self.is_placement:
            return f"place #{self.piece_index} at ({self.to_row}, {self.to_col})"
        return (f"move #{self.piece_index} ({self.from_row}, {self.from_col}) -> "
                f"({self.to_row}, {self.to_col})")


def generate_placements(board: 'Board', player: Player) -> List[Move]:
    """Every unplaced piece of ``player`` paired with every empty cell."""
    empty_cells = board.empty_cells()
    return [Move.placement(piece.index, row, col)
            for piece in board.pieces[player]
            if not piece.is_placed
            for row, col in empty_cells]


def generate_relocations(board: 'Board', player: Player) -> List[Move]:
    """Every placed piece of ``player`` paired with each of its legal targets."""
    moves = []
    for piece in board.pieces[player]:
        if not piece.is_placed:
            continue
        for row, col in get_valid_moves(piece, board):
            moves.append(Move(piece.index, piece.row, piece.col, row, col))
    return moves


def generate_moves(board: 'Board', player: Player, phase: Phase) -> List[Move]:
    """
    Get every legal move for a player.

    Args:
        board: The current board
        player: The player to act
        phase: PLACEMENT, MOVEMENT or GAME_OVER

    Returns:
        Moves in roster order, then row-major target order
    """
    if phase == Phase.PLACEMENT:
        moves = generate_placements(board, player)
    elif phase == Phase.MOVEMENT:
        moves = generate_relocations(board, player)
    else:
        moves = []

    if debug.is_enabled_for(DebugLevel.TRACE, "moves"):
        debug.trace(f"{len(moves)} {phase.name.lower()} moves for player {player.name}", "moves")
    return moves
