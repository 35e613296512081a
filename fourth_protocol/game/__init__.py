"""
fourth_protocol.game - Core game mechanics for The Fourth Protocol

This package contains the pieces and their movement rules, move generation,
the board representation and game state management.
"""

from fourth_protocol.game.pieces import Piece, can_move, get_valid_moves
from fourth_protocol.game.moves import Move, generate_moves
from fourth_protocol.game.board import Board
from fourth_protocol.game.rules import FourthProtocolGame, FourthProtocolEnv

__all__ = ['Board', 'FourthProtocolEnv', 'FourthProtocolGame', 'Move', 'Piece',
           'can_move', 'generate_moves', 'get_valid_moves']
