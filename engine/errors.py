"""
Errors raised by the TicTacToe engine.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for engine errors."""


class InvalidMoveError(EngineError):
    """
    A move that cannot be played.

    Raised for an index outside 0-8, an occupied cell, or a move submitted
    while the controller is not waiting for a human move.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class InvalidConfigurationError(EngineError):
    """Unknown difficulty or game mode."""
