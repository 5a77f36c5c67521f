"""
connect_four - Two-player Connect Four game engine

This package provides the board, win detection and turn sequencing for a
game of Connect Four, plus a terminal interface for playing it.
"""

# Version number
__version__ = '0.1.0'
