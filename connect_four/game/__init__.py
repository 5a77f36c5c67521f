"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board representation, win detection and the
turn controller that sequences a game.
"""

from connect_four.game.board import Board
from connect_four.game.errors import (ConnectFourError, InvalidColumnError,
                                     InvalidPositionError, InvalidStateError)
from connect_four.game.rules import TurnController, status_message
from connect_four.game.state import GameState
from connect_four.game.win_detector import find_winning_run, has_win

__all__ = ['Board', 'GameState', 'TurnController', 'status_message',
           'has_win', 'find_winning_run',
           'ConnectFourError', 'InvalidColumnError', 'InvalidPositionError', 'InvalidStateError']
