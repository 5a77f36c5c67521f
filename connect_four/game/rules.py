"""
rules.py - Turn sequencing for Connect Four

The TurnController is the only writer of a GameState. Each accepted drop runs
the same sequence: find the landing row, place the piece, check for a win,
then for a tie, and otherwise hand the turn to the other player. A win is
checked before a tie, so a board-filling winning move counts as a win.
"""

from typing import Callable, List, Optional, Tuple

from connect_four.debug import debug
from connect_four.game.errors import InvalidStateError
from connect_four.game.state import GameState
from connect_four.game.win_detector import find_winning_run
from connect_four.utils import (DEFAULT_HEIGHT, DEFAULT_PROFILES, DEFAULT_WIDTH,
                                GameStatus, Player, PlayerProfile)

Listener = Callable[[GameState], None]


def status_message(status: GameStatus) -> Optional[str]:
    """The end-of-game announcement for a status, or None while in progress."""
    if status == GameStatus.TIED:
        return "It's a tie!"
    if status.winner is not None:
        return f"Player {status.winner.value} wins!"
    return None


class TurnController:
    """
    Runs one game of Connect Four.

    drop_piece() is the only way to change the game. Everything else is a
    read-only query for whatever is drawing the board.
    """

    def __init__(self, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH,
                 profiles: Optional[Tuple[PlayerProfile, PlayerProfile]] = None):
        """
        Start a new game with an empty board and player one to move.

        Args:
            height: Number of rows
            width: Number of columns
            profiles: Display colors for player one and player two
        """
        self.profiles = tuple(profiles) if profiles else DEFAULT_PROFILES
        if [p.player for p in self.profiles] != [Player.ONE, Player.TWO]:
            raise ValueError("profiles must be (Player.ONE profile, Player.TWO profile)")

        self._state = GameState.new(height, width)
        self._listeners: List[Listener] = []
        debug.info(f"New {height}x{width} game", "game")

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self):
        return self._state.board

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener(state) after every applied move.

        The move is already applied when listeners run. If one raises, the
        rest are still called and the first exception then propagates out
        of drop_piece().

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def drop_piece(self, column: int) -> Optional[Tuple[int, int]]:
        """
        Drop the active player's piece into a column.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            (row, column) where the piece landed, or None if the column was
            full and the move was ignored

        Raises:
            InvalidStateError: If the game has already been won or tied
            InvalidColumnError: If column is outside the board
        """
        state = self._state
        if state.status.is_game_over():
            debug.warning(f"Rejected move in column {column}: game is over", "game")
            raise InvalidStateError(state.status)

        player = state.active_player
        row = state.board.landing_row(column)
        if row is None:
            debug.debug(f"Column {column} is full, ignoring move by {player.name}", "game")
            return None

        state.board.place(row, column, player)
        state.moves.append((row, column, player))
        debug.debug(f"Move {len(state.moves)}: {player.name} -> ({row}, {column})", "game")

        debug.start_timer("win_check")
        run = find_winning_run(state.board, player)
        debug.end_timer("win_check", "win")

        if run is not None:
            state.status = GameStatus.won_by(player)
            state.winning_run = run
            debug.info(f"{player.name} wins after {len(state.moves)} moves", "game")
        elif state.board.is_full():
            state.status = GameStatus.TIED
            debug.info("Board is full, game tied", "game")
        else:
            state.active_player = player.other()

        self._notify()
        return row, column

    def _notify(self):
        failure = None
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                debug.error(f"Listener {listener!r} failed: {e}", "game")
                if failure is None:
                    failure = e
        if failure is not None:
            raise failure

    def get_cell(self, row: int, column: int) -> Optional[Player]:
        return self._state.board.get_cell(row, column)

    def get_active_player(self) -> Player:
        return self._state.active_player

    def get_status(self) -> GameStatus:
        return self._state.status

    def is_game_over(self) -> bool:
        return self._state.status.is_game_over()

    def get_winner(self) -> Optional[Player]:
        return self._state.status.winner

    def get_winning_run(self):
        return self._state.winning_run

    def valid_columns(self) -> List[int]:
        """Columns that accept a piece, empty once the game is over."""
        if self.is_game_over():
            return []
        return self._state.board.valid_columns()

    def profile_for(self, player: Player) -> PlayerProfile:
        return self.profiles[0] if player == Player.ONE else self.profiles[1]

    def render(self, color: bool = False) -> str:
        return self._state.board.render(self.profiles if color else None)
