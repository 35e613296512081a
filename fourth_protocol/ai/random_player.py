"""
random_player.py - Uniformly random opponent for The Fourth Protocol

Useful as a weak opponent and for benchmarking. Seeding the player makes a
whole game reproducible.
"""

import random
from typing import Optional

from fourth_protocol.game.board import Board
from fourth_protocol.game.moves import Move, generate_moves
from fourth_protocol.utils import Phase, Player


class RandomPlayer:
    """Picks any legal move with equal probability."""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def get_move(self, board: Board, player: Player, phase: Phase) -> Optional[Move]:
        moves = generate_moves(board, player, phase)
        if not moves:
            return None
        return self.rng.choice(moves)
