"""
win_detector.py - Four-in-a-row detection

Every run is anchored at the cell it starts from and extends right, down,
down-right or down-left. Scanning every anchor in row-major order therefore
covers each possible line exactly once without looking backwards.
"""

from typing import Optional, Tuple

from connect_four.debug import debug
from connect_four.game.board import Board
from connect_four.utils import CONNECT_N, DIRECTION_VECTORS, Direction, Player, is_valid_position

Cell = Tuple[int, int]
Run = Tuple[Cell, ...]


def run_cells(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> Run:
    """The cells of a run anchored at (row, col). Cells may fall off the board."""
    dr, dc = DIRECTION_VECTORS[direction]
    return tuple((row + dr * i, col + dc * i) for i in range(length))


def _run_matches(board: Board, run: Run, player_value: int, height: int, width: int) -> bool:
    for r, c in run:
        if not is_valid_position(r, c, height, width):
            return False
        if board.grid[r, c] != player_value:
            return False
    return True


def find_winning_run(board: Board, player: Player,
                     height: Optional[int] = None,
                     width: Optional[int] = None) -> Optional[Run]:
    """
    Find the first run of four cells all held by player.

    Args:
        board: The board to scan
        player: The player to look for
        height: Rows to consider (defaults to, and is capped at, the board's height)
        width: Columns to consider (defaults to, and is capped at, the board's width)

    Returns:
        The winning run as (row, col) pairs, or None
    """
    # Explicit bounds can narrow the scan but never reach past the grid
    height = board.height if height is None else min(height, board.height)
    width = board.width if width is None else min(width, board.width)
    player_value = player.value

    for row in range(height):
        for col in range(width):
            for direction in DIRECTION_VECTORS:
                run = run_cells(row, col, direction)
                if _run_matches(board, run, player_value, height, width):
                    debug.trace(f"{player.name} wins with {direction.name} run {run}", "win")
                    return run
    return None


def has_win(board: Board, player: Player,
            height: Optional[int] = None,
            width: Optional[int] = None) -> bool:
    """True if player holds four in a row anywhere on the board."""
    return find_winning_run(board, player, height, width) is not None
