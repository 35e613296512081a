"""
pieces.py - Pieces and per-kind movement rules for The Fourth Protocol

Every piece has a kind chosen when it is created. The kind selects one entry
of MOVEMENT_RULES, a predicate over the offset between the piece and a target
cell. All rules share the same outer checks: the piece must be on the board,
the target must be in bounds, empty and different from the current cell.

Canonical rule table:

    DONKEY    one step orthogonally
    SNAKE     one step in any of the eight directions
    FROG      one step in any direction, or a hop over a contiguous run of
              pieces onto the first empty cell right behind it
    ANTELOPE  knight pattern (2, 1) / (1, 2)
    LION      exactly two cells along any of the eight directions (the middle
              cell may be occupied), or the knight pattern
"""

from typing import TYPE_CHECKING, Callable, Dict, List

from fourth_protocol.utils import UNPLACED, Coord, Kind, Player

if TYPE_CHECKING:
    from fourth_protocol.game.board import Board


class Piece:
    """
    A single playing piece.

    The piece's kind never changes. Its coordinates are (UNPLACED, UNPLACED)
    while it waits in its owner's pool.
    """

    __slots__ = ('player', 'index', '_kind', 'row', 'col')

    def __init__(self, player: Player, kind: Kind, index: int):
        if player == Player.EMPTY:
            raise ValueError("A piece must belong to player ONE or TWO")
        self.player = player
        self.index = index
        self._kind = kind
        self.row = UNPLACED
        self.col = UNPLACED

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def is_placed(self) -> bool:
        return self.row >= 0 and self.col >= 0

    @property
    def position(self) -> Coord:
        return self.row, self.col

    @property
    def token(self) -> int:
        """Value stored in the grid cell this piece occupies."""
        return self.player.token(self.index)

    @property
    def symbol(self) -> str:
        """Kind letter, upper case for player ONE and lower case for player TWO."""
        letter = self._kind.symbol
        return letter if self.player == Player.ONE else letter.lower()

    def set_position(self, row: int, col: int) -> None:
        self.row = row
        self.col = col

    def __repr__(self) -> str:
        return (f"Piece({self.player.name}, {self._kind.name}, index={self.index}, "
                f"at=({self.row}, {self.col}))")


def _is_line(dr: int, dc: int) -> bool:
    return dr == 0 or dc == 0 or abs(dr) == abs(dc)


def _is_knight(dr: int, dc: int) -> bool:
    return {abs(dr), abs(dc)} == {1, 2}


def _donkey_rule(board: 'Board', piece: Piece, dr: int, dc: int) -> bool:
    return abs(dr) + abs(dc) == 1


def _snake_rule(board: 'Board', piece: Piece, dr: int, dc: int) -> bool:
    return max(abs(dr), abs(dc)) == 1


def _frog_rule(board: 'Board', piece: Piece, dr: int, dc: int) -> bool:
    distance = max(abs(dr), abs(dc))
    if distance == 1:
        return True
    if not _is_line(dr, dc):
        return False

    # Hop: every cell between source and target must be occupied
    step_r = (dr > 0) - (dr < 0)
    step_c = (dc > 0) - (dc < 0)
    for i in range(1, distance):
        if board.is_empty(piece.row + i * step_r, piece.col + i * step_c):
            return False
    return True


def _antelope_rule(board: 'Board', piece: Piece, dr: int, dc: int) -> bool:
    return _is_knight(dr, dc)


def _lion_rule(board: 'Board', piece: Piece, dr: int, dc: int) -> bool:
    if max(abs(dr), abs(dc)) == 2 and _is_line(dr, dc):
        return True
    return _is_knight(dr, dc)


MovementRule = Callable[['Board', Piece, int, int], bool]

MOVEMENT_RULES: Dict[Kind, MovementRule] = {
    Kind.DONKEY: _donkey_rule,
    Kind.SNAKE: _snake_rule,
    Kind.FROG: _frog_rule,
    Kind.ANTELOPE: _antelope_rule,
    Kind.LION: _lion_rule,
}


def can_move(piece: Piece, board: 'Board', to_row: int, to_col: int) -> bool:
    """
    Check whether a placed piece may move to a target cell.

    Args:
        piece: The piece to move
        board: The board the piece stands on
        to_row: Target row
        to_col: Target column

    Returns:
        True if the move obeys the piece's rule and the target is free
    """
    if not piece.is_placed:
        return False
    if not board.in_bounds(to_row, to_col):
        return False
    dr = to_row - piece.row
    dc = to_col - piece.col
    if dr == 0 and dc == 0:
        return False
    if not board.is_empty(to_row, to_col):
        return False
    return MOVEMENT_RULES[piece.kind](board, piece, dr, dc)


def get_valid_moves(piece: Piece, board: 'Board') -> List[Coord]:
    """
    Every legal destination for a piece, in row-major order.

    All cells are tested rather than just neighbours because hops can reach
    distant cells.
    """
    if not piece.is_placed:
        return []

    return [(row, col)
            for row in range(board.size)
            for col in range(board.size)
            if can_move(piece, board, row, col)]
