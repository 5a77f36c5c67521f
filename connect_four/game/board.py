"""
board.py - Board representation for Connect Four

The Board owns the grid and nothing else: it knows where a piece would land
and whether the grid is full, but turn order and win handling belong to the
TurnController in rules.py.
"""

import numbers
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from connect_four.debug import debug
from connect_four.game.errors import InvalidColumnError, InvalidPositionError
from connect_four.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, Player,
                                PlayerProfile, is_valid_position, render_board_ascii)

# Characters accepted by Board.from_rows
CELL_CHARS = {
    ".": Player.EMPTY, "0": Player.EMPTY, " ": Player.EMPTY,
    "X": Player.ONE, "x": Player.ONE, "1": Player.ONE,
    "O": Player.TWO, "o": Player.TWO, "2": Player.TWO,
}


class Board:
    """
    A HEIGHT x WIDTH Connect Four grid.

    Cells hold Player.EMPTY (0), Player.ONE (1) or Player.TWO (2). Row 0 is the
    top, so a dropped piece settles in the highest empty row index.
    """

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH):
        """
        Initialize an empty board.

        Args:
            height: Number of rows
            width: Number of columns

        Raises:
            ValueError: If either dimension is not a positive integer
        """
        for name, value in (("height", height), ("width", width)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
                raise ValueError(f"Board {name} must be a positive integer, got {value!r}")

        self.height = int(height)
        self.width = int(width)
        self.grid = np.zeros((self.height, self.width), dtype=int)
        debug.debug(f"Initialized {self.height}x{self.width} board", "board")

    @classmethod
    def from_rows(cls, rows: Sequence[Union[str, Sequence[int]]]) -> 'Board':
        """
        Build a board from rows listed top to bottom.

        Each row is either a string ("..XO...") or a sequence of 0/1/2 values.
        The result is not checked for gravity, so arbitrary positions can be
        loaded for analysis.
        """
        if not rows:
            raise ValueError("At least one row is required")

        parsed: List[List[int]] = []
        for row in rows:
            values = []
            for cell in row:
                if isinstance(cell, str):
                    if cell not in CELL_CHARS:
                        raise ValueError(f"Unknown cell character {cell!r}")
                    values.append(CELL_CHARS[cell].value)
                else:
                    values.append(Player(int(cell)).value)
            parsed.append(values)

        widths = {len(values) for values in parsed}
        if len(widths) != 1:
            raise ValueError(f"Rows have different lengths: {sorted(widths)}")

        board = cls(height=len(parsed), width=widths.pop())
        board.grid = np.array(parsed, dtype=int)
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of this board."""
        new_board = Board(self.height, self.width)
        new_board.grid = self.grid.copy()
        return new_board

    def _check_column(self, column) -> int:
        if isinstance(column, bool) or not isinstance(column, numbers.Integral):
            raise InvalidColumnError(column, self.width)
        if not 0 <= column < self.width:
            raise InvalidColumnError(column, self.width)
        return int(column)

    def is_valid_column(self, column) -> bool:
        """True if the column is in range and still has an empty cell."""
        try:
            return self.landing_row(column) is not None
        except InvalidColumnError:
            return False

    def valid_columns(self) -> List[int]:
        """Columns a piece can currently be dropped into."""
        return [col for col in range(self.width) if self.grid[0, col] == Player.EMPTY.value]

    def landing_row(self, column) -> Optional[int]:
        """
        Find where a piece dropped into a column would land.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The lowest empty row index, or None if the column is full

        Raises:
            InvalidColumnError: If column is not an integer in [0, width)
        """
        column = self._check_column(column)
        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                return row
        return None

    def place(self, row: int, column: int, player: Player) -> None:
        """
        Put a piece on the board.

        The cell must be empty and be the column's landing row; callers get
        that from landing_row(). It is not checked again here.
        """
        debug.trace(f"Placing {player.name} at ({row}, {column})", "board")
        self.grid[row, column] = player.value

    def is_full(self) -> bool:
        """True iff every cell is occupied."""
        return bool(np.all(self.grid != Player.EMPTY.value))

    def get_cell(self, row: int, column: int) -> Optional[Player]:
        """
        Return the player occupying a cell, or None if it is empty.

        Raises:
            InvalidPositionError: If (row, column) is not on the board
        """
        for index in (row, column):
            if isinstance(index, bool) or not isinstance(index, numbers.Integral):
                raise InvalidPositionError(row, column, self.height, self.width)
        if not is_valid_position(row, column, self.height, self.width):
            raise InvalidPositionError(row, column, self.height, self.width)
        value = int(self.grid[row, column])
        if value == Player.EMPTY.value:
            return None
        return Player(value)

    def column_height(self, column) -> int:
        """Number of pieces stacked in a column."""
        column = self._check_column(column)
        return int(np.count_nonzero(self.grid[:, column]))

    def satisfies_gravity(self) -> bool:
        """True if no occupied cell sits above an empty one in its column."""
        occupied = self.grid != Player.EMPTY.value
        # Below each occupied cell (rows 0..h-2), the next row down must be occupied
        return not bool(np.any(occupied[:-1] & ~occupied[1:]))

    def count(self, player: Player) -> int:
        return int(np.count_nonzero(self.grid == player.value))

    def get_state(self) -> np.ndarray:
        """Return a copy of the grid as a numpy array."""
        return self.grid.copy()

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def render(self, profiles: Optional[Tuple[PlayerProfile, PlayerProfile]] = None) -> str:
        """Render the board as a string, coloring pieces if profiles are given."""
        return render_board_ascii(self.grid, profiles)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self.grid, other.grid))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(height={self.height}, width={self.width}, pieces={self.count(Player.ONE) + self.count(Player.TWO)})"
