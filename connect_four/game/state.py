"""
state.py - The GameState value shared between the controller and renderers

A GameState is created once per game and only the TurnController changes it;
everything else reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from connect_four.game.board import Board
from connect_four.utils import GameStatus, Player

Move = Tuple[int, int, Player]  # (row, column, player)


@dataclass
class GameState:
    """Everything a renderer needs to draw a game. Written only by the TurnController."""
    board: Board
    active_player: Player = Player.ONE
    status: GameStatus = GameStatus.IN_PROGRESS
    moves: List[Move] = field(default_factory=list)
    winning_run: Optional[Tuple[Tuple[int, int], ...]] = None

    @classmethod
    def new(cls, height: int, width: int) -> GameState:
        return cls(board=Board(height, width))

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    def is_game_over(self) -> bool:
        return self.status.is_game_over()
