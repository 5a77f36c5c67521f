"""
utils.py - Constants, enumerations and rendering helpers for Connect Four

Row 0 is the top of the board; pieces fall toward the highest row index.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple

import numpy as np

# Game constants
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 7
CONNECT_N = 4  # Number of pieces in a row to win


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    @property
    def symbol(self) -> str:
        return PLAYER_SYMBOLS[self]

    def __str__(self):
        return self.symbol


PLAYER_SYMBOLS = {
    Player.EMPTY: ".",
    Player.ONE: "X",
    Player.TWO: "O",
}


class GameStatus(Enum):
    """Enumeration representing where a game stands."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameStatus.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameStatus.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameStatus.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def won_by(cls, player: Player) -> 'GameStatus':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"No win status for {player!r}")


class Direction(Enum):
    """Directions a run can extend from its anchor cell."""
    HORIZONTAL = auto()           # rightward
    VERTICAL = auto()             # downward
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# Direction vectors (row, col), in scan order
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


# ANSI codes for the colors a player can pick
ANSI_COLORS = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}
ANSI_RESET = "\033[0m"


@dataclass(frozen=True)
class PlayerProfile:
    """A player identifier plus the color it is drawn in. Color is display-only."""
    player: Player
    color: str

    def __post_init__(self):
        if self.player == Player.EMPTY:
            raise ValueError("A profile needs Player.ONE or Player.TWO")

    def paint(self, text: str) -> str:
        code = ANSI_COLORS.get(self.color.lower())
        if code is None:
            return text
        return f"{code}{text}{ANSI_RESET}"


DEFAULT_PROFILES = (
    PlayerProfile(Player.ONE, "red"),
    PlayerProfile(Player.TWO, "yellow"),
)


def is_valid_position(row: int, col: int, height: int = DEFAULT_HEIGHT,
                      width: int = DEFAULT_WIDTH) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < height and 0 <= col < width


def render_board_ascii(grid: np.ndarray,
                       profiles: Optional[Tuple[PlayerProfile, PlayerProfile]] = None) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: 2D array of player values (0 empty, 1, 2)
        profiles: Optional player profiles used to color the pieces

    Returns:
        ASCII representation of the board, with column numbers underneath
    """
    height, width = grid.shape
    painters = {p.player.value: p.paint for p in profiles} if profiles else {}

    border = "|" + "-" * (width * 2 - 1) + "|"
    result = [border]

    for row in range(height):
        cells = []
        for col in range(width):
            value = int(grid[row, col])
            symbol = Player(value).symbol
            paint = painters.get(value)
            cells.append(paint(symbol) if paint else symbol)
        result.append("|" + " ".join(cells) + "|")

    result.append(border)
    # Column numbers wrap after 9 so wide boards stay aligned
    result.append("|" + " ".join(str(i % 10) for i in range(width)) + "|")

    return "\n".join(result)
