"""
evaluator.py - Static evaluation of Fourth Protocol positions

The heuristic rewards long runs: for every occupied cell and each of the four
axes, the length of the same-side run through that cell is squared and
weighted. Every piece of a run counts the run, so a run of length n adds
n * n**2 * weight to its owner. An optional centre bonus favours pieces near
the middle of the board.

Scores are always from the point of view of the player passed in: positive
values favour that player.
"""

from typing import Optional

from fourth_protocol.config import EvalConfig
from fourth_protocol.game.board import Board
from fourth_protocol.utils import DIRECTION_VECTORS, Player, count_in_line


def center_bonus(row: int, col: int, size: int, mode: str) -> int:
    """
    Positional bonus of a cell.

    "distance" grows by one per step toward the centre on each axis.
    "legacy" is size % (coord + 1) summed over both coordinates, which is not
    monotonic in the distance to the centre. "none" disables the term.
    """
    if mode == "distance":
        half = (size - 1) // 2
        return (half - abs(row - half)) + (half - abs(col - half))
    if mode == "legacy":
        return size % (row + 1) + size % (col + 1)
    return 0


class BoardEvaluator:
    """Scores non-terminal positions for the search engine."""

    def __init__(self, config: Optional[EvalConfig] = None):
        self.config = config or EvalConfig()
        self.config.validate()

    def piece_score(self, board: Board, row: int, col: int) -> int:
        """Contribution of the piece on (row, col) to its owner's total."""
        grid = board.grid
        score = 0
        for dr, dc in DIRECTION_VECTORS.values():
            run = count_in_line(grid, row, col, dr, dc)
            score += run * run * self.config.line_weight
        score += center_bonus(row, col, board.size, self.config.center_bonus)
        return score

    def player_total(self, board: Board, player: Player) -> int:
        """Sum of piece scores for all of a player's pieces on the board."""
        return sum(self.piece_score(board, piece.row, piece.col)
                   for piece in board.pieces[player]
                   if piece.is_placed)

    def evaluate(self, board: Board, player: Player) -> int:
        """
        Heuristic evaluation of a board position.

        Args:
            board: The board to evaluate
            player: The player we're evaluating for

        Returns:
            The player's total minus the opponent's total
        """
        return self.player_total(board, player) - self.player_total(board, player.other())
