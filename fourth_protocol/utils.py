"""
utils.py - Constants, enumerations and grid helpers for The Fourth Protocol

The board grid is a square numpy array of signed piece tokens: 0 is an empty
cell, +(i+1) is piece i of player ONE and -(i+1) is piece i of player TWO.
The helpers here only look at the grid, so the search can call them without
touching piece objects.
"""

from enum import Enum, auto
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

# Game constants
DEFAULT_GRID_SIZE = 5
WIN_LENGTH = 4  # Number of pieces in a row to win
UNPLACED = -1  # Row/col sentinel for a piece still in its owner's pool
EMPTY_CELL = 0

Coord = Tuple[int, int]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player (moves first, positive tokens)
    TWO = 2    # Second player (negative tokens)

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def sign(self) -> int:
        """Sign of this player's grid tokens."""
        if self == Player.ONE:
            return 1
        elif self == Player.TWO:
            return -1
        return 0

    def token(self, index: int) -> int:
        """Grid token for this player's piece at roster index ``index``."""
        return self.sign * (index + 1)

    @staticmethod
    def owner(token: int) -> 'Player':
        """Player owning a grid token."""
        if token > 0:
            return Player.ONE
        if token < 0:
            return Player.TWO
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class Kind(Enum):
    """Movement-rule category of a piece, fixed when the piece is created."""
    FROG = "F"
    SNAKE = "S"
    DONKEY = "D"
    ANTELOPE = "A"
    LION = "L"

    @property
    def symbol(self) -> str:
        return self.value

    @staticmethod
    def parse(text: str) -> 'Kind':
        """Look up a kind by name or symbol, case-insensitively."""
        key = text.strip().upper()
        for kind in Kind:
            if key in (kind.name, kind.value):
                return kind
        raise ValueError(f"Unknown piece kind: {text!r}")


class Phase(Enum):
    """Game phase."""
    PLACEMENT = auto()  # Pieces enter the board from the pool
    MOVEMENT = auto()   # Pieces already on the board relocate
    GAME_OVER = auto()


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @staticmethod
    def win_for(player: Player) -> 'GameResult':
        return GameResult.PLAYER_ONE_WIN if player == Player.ONE else GameResult.PLAYER_TWO_WIN


class Direction(Enum):
    """Enumeration representing the four line axes."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right
    DIAGONAL_UP = auto()  # Bottom-left to top-right


# Direction vectors (row, col) for each axis
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
}


def is_valid_position(row: int, col: int, size: int = DEFAULT_GRID_SIZE) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        size: Side length of the square grid

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < size and 0 <= col < size


def count_in_line(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> int:
    """
    Length of the contiguous same-side run through (row, col) along one axis.

    The run is counted outward from the cell in both the (dr, dc) and the
    (-dr, -dc) direction.

    Args:
        grid: The game grid
        row: Row index of an occupied cell
        col: Column index of an occupied cell
        dr: Row step of the axis
        dc: Column step of the axis

    Returns:
        Run length including the cell itself, or 0 for an empty cell
    """
    sign = Player.owner(int(grid[row, col])).sign
    if sign == 0:
        return 0

    size = grid.shape[0]
    count = 1

    r, c = row + dr, col + dc
    while 0 <= r < size and 0 <= c < size and grid[r, c] * sign > 0:
        count += 1
        r += dr
        c += dc

    r, c = row - dr, col - dc
    while 0 <= r < size and 0 <= c < size and grid[r, c] * sign > 0:
        count += 1
        r -= dr
        c -= dc

    return count


def find_winning_line(grid: np.ndarray, player: Player,
                      win_length: int = WIN_LENGTH) -> List[Coord]:
    """
    Find the first run of ``win_length`` same-side pieces for a player.

    Start cells are scanned in row-major order and, for each, the four axes in
    DIRECTION_VECTORS order. Only runs that fit entirely on the board count.

    Args:
        grid: The game grid
        player: The player to check for
        win_length: Number of pieces in a row needed to win

    Returns:
        The winning cells, or an empty list if there is no winning run
    """
    sign = player.sign
    size = grid.shape[0]

    for row in range(size):
        for col in range(size):
            if grid[row, col] * sign <= 0:
                continue
            for dr, dc in DIRECTION_VECTORS.values():
                end_row = row + (win_length - 1) * dr
                end_col = col + (win_length - 1) * dc
                if not is_valid_position(end_row, end_col, size):
                    continue
                line = [(row + i * dr, col + i * dc) for i in range(win_length)]
                if all(grid[r, c] * sign > 0 for r, c in line):
                    return line

    return []


def has_won(grid: np.ndarray, player: Player, win_length: int = WIN_LENGTH) -> bool:
    """
    Check whether a player has ``win_length`` pieces in a row anywhere.

    Args:
        grid: The game grid
        player: The player to check for
        win_length: Number of pieces in a row needed to win

    Returns:
        True if the player has a winning run, False otherwise
    """
    return bool(find_winning_line(grid, player, win_length))


def render_board_ascii(grid: np.ndarray,
                       symbols: Optional[Dict[int, str]] = None) -> str:
    """
    Render the grid as ASCII art.

    Args:
        grid: The game grid
        symbols: Optional token -> character map (defaults to X/O)

    Returns:
        ASCII representation of the board with row and column numbers
    """
    size = grid.shape[0]
    result = ["   " + " ".join(str(col) for col in range(size))]
    result.append("  +" + "-" * (size * 2 - 1) + "+")

    for row in range(size):
        cells = []
        for col in range(size):
            token = int(grid[row, col])
            if token == EMPTY_CELL:
                cells.append(".")
            elif symbols and token in symbols:
                cells.append(symbols[token])
            else:
                cells.append(str(Player.owner(token)))
        result.append(f"{row:>2}|" + " ".join(cells) + "|")

    result.append("  +" + "-" * (size * 2 - 1) + "+")
    return "\n".join(result)


def parse_grid(text: str, size: Optional[int] = None) -> np.ndarray:
    """
    Parse a comma-separated list of tokens into a square grid.

    Args:
        text: Row-major tokens, e.g. "1,0,-2,..."
        size: Expected side length (inferred from the token count if omitted)

    Returns:
        The grid as a numpy integer array
    """
    values: Sequence[int] = [int(v) for v in text.replace(" ", "").split(",") if v]
    if size is None:
        size = int(round(len(values) ** 0.5))
    if len(values) != size * size:
        raise ValueError(f"Position must have {size * size} values, got {len(values)}")
    return np.array(values, dtype=int).reshape(size, size)
