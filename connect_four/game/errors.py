"""
errors.py - Exceptions raised by the Connect Four engine

None of these are fatal: the game state is untouched when one is raised and
the caller can keep playing (or start a new game).
"""


class ConnectFourError(Exception):
    """Base class for engine errors."""


class InvalidColumnError(ConnectFourError, ValueError):
    """Raised when a column index is not an integer in [0, width)."""

    def __init__(self, column, width: int):
        self.column = column
        self.width = width
        super().__init__(f"Column {column!r} is out of range (0-{width - 1})")


class InvalidStateError(ConnectFourError, RuntimeError):
    """Raised when a move is requested after the game has ended."""

    def __init__(self, status):
        self.status = status
        super().__init__(f"Game is over ({status.name}); no further moves accepted")


class InvalidPositionError(ConnectFourError, IndexError):
    """Raised when a (row, column) pair lies outside the board."""

    def __init__(self, row, column, height: int, width: int):
        self.row = row
        self.column = column
        super().__init__(f"Cell ({row!r}, {column!r}) is outside the {height}x{width} board")
