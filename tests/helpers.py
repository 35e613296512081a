"""Position builders shared by the test modules."""

from typing import Iterable, Optional, Sequence, Tuple

from fourth_protocol.game.board import Board
from fourth_protocol.utils import Kind, Player

DONKEYS = [Kind.DONKEY, Kind.DONKEY, Kind.DONKEY]
SNAKES = [Kind.SNAKE, Kind.SNAKE, Kind.SNAKE]


def build_board(one: Iterable[Tuple[int, int]] = (),
                two: Iterable[Tuple[int, int]] = (),
                size: int = 5,
                roster: Optional[Sequence[Kind]] = None,
                win_length: int = 4) -> Board:
    """Place player ONE's and TWO's pieces, in roster order, on the given cells."""
    board = Board(size=size, roster=roster, win_length=win_length)
    for player, cells in ((Player.ONE, one), (Player.TWO, two)):
        for index, (row, col) in enumerate(cells):
            assert board.place(player, index, row, col), f"could not place {player} #{index}"
    return board
