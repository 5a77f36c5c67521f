"""
connect_four.interfaces - User interfaces for Connect Four

This package holds the terminal adapter around the game engine: input
debouncing, rendering and the command-line entry point.
"""

# Don't import anything here to avoid circular imports
__all__ = []
