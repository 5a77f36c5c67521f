"""
input_gate.py - Short lock that drops repeated input while a move is shown

An interface opens the gate for one request, then keeps it shut for a short
window so a double click (or a repeated key) can't deliver the same move
twice. The engine knows nothing about this.
"""

import time
from typing import Callable, Optional

from connect_four.debug import debug

DEFAULT_LOCK_SECONDS = 0.25


class InputGate:
    """Time-boxed input lock."""

    def __init__(self, lock_seconds: float = DEFAULT_LOCK_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        if lock_seconds < 0:
            raise ValueError("lock_seconds must not be negative")
        self.lock_seconds = lock_seconds
        self._clock = clock
        self._locked_until: Optional[float] = None
        self._closed = False

    def is_open(self) -> bool:
        if self._closed:
            return False
        return self._locked_until is None or self._clock() >= self._locked_until

    def try_acquire(self) -> bool:
        """
        Let one input through if the gate is open.

        Returns:
            True if the caller may act on the input, False if it should be
            dropped
        """
        if not self.is_open():
            debug.debug("Input ignored, gate is locked", "gate")
            return False
        self._locked_until = self._clock() + self.lock_seconds
        return True

    def lock(self):
        """Shut the gate until release() is called (e.g. once the game ends)."""
        self._closed = True

    def release(self):
        self._closed = False
        self._locked_until = None
