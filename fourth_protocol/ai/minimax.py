"""
minimax.py - Minimax algorithm with alpha-beta pruning for The Fourth Protocol

This module provides a MinimaxPlayer class that searches the move tree to a
fixed depth on the caller's own board. Moves are applied and undone in place
rather than copying the board at every node; Board.applied() guarantees the
undo even when a branch exits early.

Scoring:
1. Remaining depth 0: static heuristic from BoardEvaluator
2. Searching player has won: win_score + remaining depth (faster wins score higher)
3. Opponent has won: -(win_score + remaining depth) (slower losses score higher)
"""

import math
import time
from dataclasses import dataclass, replace
from typing import Optional

from fourth_protocol.ai.evaluator import BoardEvaluator
from fourth_protocol.config import EvalConfig, SearchConfig
from fourth_protocol.debug import debug
from fourth_protocol.game.board import Board
from fourth_protocol.game.moves import Move, generate_moves
from fourth_protocol.utils import Phase, Player


@dataclass
class SearchResult:
    """Outcome of one top-level search."""

    move: Optional[Move]
    score: float
    moves_considered: int = 0
    nodes_evaluated: int = 0
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return self.move is not None


class MinimaxPlayer:
    """
    A Fourth Protocol player that uses the minimax algorithm with alpha-beta pruning.

    This player evaluates positions by searching the game tree up to a specified
    depth, assuming both players play optimally. Given the same board, pieces,
    phase and depth it always returns the same move: the first move, in
    generation order, that reaches the best score.
    """

    def __init__(self, depth: Optional[int] = None,
                 config: Optional[SearchConfig] = None,
                 eval_config: Optional[EvalConfig] = None,
                 use_pruning: Optional[bool] = None):
        """
        Initialize the minimax player.

        Args:
            depth: Maximum search depth in plies (overrides config.depth)
            config: Search settings
            eval_config: Heuristic settings
            use_pruning: Override config.use_pruning (False runs plain minimax)
        """
        config = config or SearchConfig()
        if depth is not None:
            config = replace(config, depth=depth)
        if use_pruning is not None:
            config = replace(config, use_pruning=use_pruning)
        config.validate()

        self.config = config
        self.evaluator = BoardEvaluator(eval_config)
        self.nodes_evaluated = 0  # For performance tracking
        self.last_result: Optional[SearchResult] = None

    @property
    def depth(self) -> int:
        return self.config.depth

    def get_move(self, board: Board, player: Player, phase: Phase) -> Optional[Move]:
        """
        Get the best move for a player.

        Returns:
            The chosen move, or None if the player has no legal move
        """
        return self.find_best_move(board, player, phase).move

    def find_best_move(self, board: Board, player: Player, phase: Phase,
                       depth: Optional[int] = None) -> SearchResult:
        """
        Search for the best move for a player.

        The board is mutated during the search and restored before returning.

        Args:
            board: The current game board
            player: The player to move (the maximizing side)
            phase: Current game phase
            depth: Search depth for this call (defaults to the configured depth)

        Returns:
            The best move with its score and search telemetry
        """
        depth = self.config.depth if depth is None else depth
        if depth < 1:
            raise ValueError(f"search depth must be at least 1, got {depth}")

        start = time.perf_counter()
        self.nodes_evaluated = 0
        win_score = self.config.win_score

        possible_moves = generate_moves(board, player, phase)

        if not possible_moves:
            score = self.evaluator.evaluate(board, player)
            debug.info(f"Player {player.name} has no legal move in {phase.name}", "search")
            self.last_result = SearchResult(None, score, 0, 0, time.perf_counter() - start)
            return self.last_result

        best_score = -math.inf
        best_move = None
        alpha = -math.inf
        beta = math.inf

        for move in possible_moves:
            with board.applied(player, move):
                # An immediate win cannot be improved on by searching deeper
                if board.has_won(player):
                    best_move = move
                    best_score = win_score + depth
                    break

                score = self._minimax(board, depth - 1, alpha, beta, False, player,
                                      self._phase_after(board, phase))

            if score > best_score:
                best_score = score
                best_move = move

            if self.config.use_pruning:
                alpha = max(alpha, score)

        self.last_result = SearchResult(
            move=best_move,
            score=best_score,
            moves_considered=len(possible_moves),
            nodes_evaluated=self.nodes_evaluated,
            elapsed=time.perf_counter() - start,
        )
        debug.info(f"Player {player.name} depth {depth}: {best_move} score {best_score} "
                   f"({len(possible_moves)} moves, {self.nodes_evaluated} nodes, "
                   f"{self.last_result.elapsed:.3f}s)", "search")
        return self.last_result

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 is_maximizing: bool, maximizing_player: Player, phase: Phase) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Current board state
            depth: Remaining search depth
            alpha: Alpha value for pruning (best score maximizer can guarantee)
            beta: Beta value for pruning (best score minimizer can guarantee)
            is_maximizing: True if this is a maximizing node
            maximizing_player: The player we're trying to maximize score for
            phase: Phase in effect at this node

        Returns:
            The evaluation score for this position
        """
        self.nodes_evaluated += 1
        opponent = maximizing_player.other()

        # Terminal conditions
        if depth == 0:
            return self.evaluator.evaluate(board, maximizing_player)

        if board.has_won(maximizing_player):
            return self.config.win_score + depth  # Prefer faster wins

        if board.has_won(opponent):
            return -(self.config.win_score + depth)  # Prefer slower losses

        side = maximizing_player if is_maximizing else opponent
        moves = generate_moves(board, side, phase)
        if not moves:
            return self.evaluator.evaluate(board, maximizing_player)

        if is_maximizing:
            max_score = -math.inf

            for move in moves:
                with board.applied(side, move):
                    score = self._minimax(board, depth - 1, alpha, beta, False,
                                          maximizing_player, self._phase_after(board, phase))

                max_score = max(max_score, score)
                if self.config.use_pruning:
                    alpha = max(alpha, score)
                    # Beta cutoff
                    if beta <= alpha:
                        break

            return max_score

        else:  # Minimizing
            min_score = math.inf

            for move in moves:
                with board.applied(side, move):
                    score = self._minimax(board, depth - 1, alpha, beta, True,
                                          maximizing_player, self._phase_after(board, phase))

                min_score = min(min_score, score)
                if self.config.use_pruning:
                    beta = min(beta, score)
                    # Alpha cutoff
                    if beta <= alpha:
                        break

            return min_score

    @staticmethod
    def _phase_after(board: Board, phase: Phase) -> Phase:
        """Phase for the next ply: placement ends once every piece is on the board."""
        if phase == Phase.PLACEMENT and board.all_placed():
            return Phase.MOVEMENT
        return phase
