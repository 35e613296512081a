"""
rules.py - Game state management and Gymnasium environment for The Fourth Protocol

This module provides:
1. FourthProtocolGame, which tracks turns and phases around a Board
2. A gymnasium-compatible environment for agents

Turn and phase rules:
- Player ONE acts first and players alternate.
- The game is in PLACEMENT while any piece of either player is still in the
  pool, and in MOVEMENT once every piece is on the board.
- A player with no legal move passes. Two passes in a row, or reaching the
  configured move cap, draws the game.
"""

from typing import Any, Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from fourth_protocol.config import GameConfig
from fourth_protocol.debug import debug
from fourth_protocol.game.board import Board
from fourth_protocol.game.moves import Move, generate_moves
from fourth_protocol.utils import Coord, GameResult, Phase, Player


class FourthProtocolGame:
    """
    High-level Fourth Protocol game manager.

    This class owns the board and applies the turn order, the phase change
    after the last placement and the end-of-game conditions.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """Initialize a new game."""
        self.config = config or GameConfig()
        self.config.validate()
        debug.debug("Initializing FourthProtocolGame", "game")
        self.board = Board(self.config.grid_size, self.config.roster, self.config.win_length)
        self.reset()

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.current_player = Player.ONE
        self.phase = Phase.PLACEMENT
        self.game_result = GameResult.IN_PROGRESS
        self.history: List[Tuple[Player, Move]] = []
        self.consecutive_passes = 0

    def make_move(self, move: Move) -> bool:
        """
        Make a move for the current player.

        Args:
            move: The move to play

        Returns:
            True if the move was applied, False if it was rejected
        """
        if self.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result})", "game")
            return False

        if move.is_placement != (self.phase == Phase.PLACEMENT):
            debug.debug(f"Invalid move: {move} does not fit the {self.phase.name} phase", "game")
            return False

        player = self.current_player
        if not self.board.make_move(player, move):
            return False

        self.history.append((player, move))
        self.consecutive_passes = 0
        self._advance(player)
        return True

    def _advance(self, mover: Player) -> None:
        """Update result, phase and turn after ``mover`` played."""
        if self.board.has_won(mover):
            self.game_result = GameResult.win_for(mover)
            self.phase = Phase.GAME_OVER
            debug.info(f"Player {mover.name} wins with {self.board.get_winning_line(mover)}", "game")
            return

        if len(self.history) >= self.config.max_moves:
            self._end_in_draw(f"move limit of {self.config.max_moves} reached")
            return

        if self.phase == Phase.PLACEMENT and self.board.all_placed():
            self.phase = Phase.MOVEMENT
            debug.info("All pieces placed, entering movement phase", "game")

        self.current_player = mover.other()
        self._skip_blocked_players()

    def _skip_blocked_players(self) -> None:
        """Pass the turn while the player to act has no legal move."""
        while not self.is_game_over() and not self.get_valid_moves():
            self.consecutive_passes += 1
            debug.info(f"Player {self.current_player.name} has no legal move and passes", "game")
            if self.consecutive_passes >= 2:
                self._end_in_draw("neither player can move")
                return
            self.current_player = self.current_player.other()

    def _end_in_draw(self, reason: str) -> None:
        self.game_result = GameResult.DRAW
        self.phase = Phase.GAME_OVER
        debug.info(f"Game ends in a draw: {reason}", "game")

    def get_state(self) -> Board:
        """
        Get the current game state.

        Returns:
            The current board object
        """
        return self.board

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        else:
            return None

    def get_winning_line(self) -> List[Coord]:
        winner = self.get_winner()
        return self.board.get_winning_line(winner) if winner else []

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[Move]:
        """
        Get every legal move for the current player.

        Returns:
            List of moves, empty once the game is over
        """
        return generate_moves(self.board, self.current_player, self.phase)

    def render(self) -> str:
        """
        Render the game as a string.

        Returns:
            Board drawing followed by a status line
        """
        if self.is_game_over():
            status = f"Game over: {self.game_result.name}"
        else:
            status = f"{self.phase.name.title()} phase, player {self.current_player.name} ({self.current_player}) to act"
        return f"{self.board.render()}\n{status}"


class FourthProtocolEnv(gym.Env):
    """
    Fourth Protocol environment following the Gymnasium interface.

    An action encodes (piece_index, to_row, to_col) as
    piece_index * N * N + to_row * N + to_col for the player to act; the
    source of a relocation is the piece's current cell. Rewards are given to
    the player who just acted.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, config: Optional[GameConfig] = None):
        """
        Initialize the environment.

        Args:
            render_mode: Mode for rendering the environment
            config: Board size, win length and roster
        """
        debug.debug("Initializing FourthProtocolEnv", "env")

        self.game = FourthProtocolGame(config)
        size = self.game.board.size
        pieces = len(self.game.board.roster)

        self.action_space = spaces.Discrete(pieces * size * size)
        self.observation_space = spaces.Box(
            low=-pieces, high=pieces, shape=(size, size), dtype=np.int8
        )
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def action_to_move(self, action: int) -> Move:
        """Decode an action for the player to act."""
        size = self.game.board.size
        piece_index, cell = divmod(int(action), size * size)
        row, col = divmod(cell, size)
        piece = self.game.board.get_piece(self.game.current_player, piece_index)
        if piece.is_placed:
            return Move(piece_index, piece.row, piece.col, row, col)
        return Move.placement(piece_index, row, col)

    def move_to_action(self, move: Move) -> int:
        size = self.game.board.size
        return move.piece_index * size * size + move.to_row * size + move.to_col

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by making a move.

        Args:
            action: Encoded (piece_index, to_row, to_col)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")
        mover = self.game.current_player

        if not self.action_space.contains(action) or not self.game.make_move(self.action_to_move(action)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if terminated:
            winner = self.game.get_winner()
            if winner is None:
                reward = self.reward_draw
            elif winner == mover:
                reward = self.reward_win
            else:
                reward = self.reward_lose
            debug.info(f"Game over: {self.game.game_result.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current state of the environment.

        Returns:
            The drawing in "ascii" mode, None otherwise
        """
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        valid_actions = [self.move_to_action(move) for move in self.game.get_valid_moves()]
        return {
            'valid_actions': valid_actions,
            'num_valid_actions': len(valid_actions),
            'current_player': self.game.current_player.value,
            'phase': self.game.phase.name,
            'game_result': self.game.game_result.name,
            'moves_made': len(self.game.history),
            'winning_line': self.game.get_winning_line(),
        }

    def close(self):
        """Clean up resources."""
        pass
