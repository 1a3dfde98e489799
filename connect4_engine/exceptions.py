"""
exceptions.py - Errors raised when a drop is rejected

Every error here leaves the board exactly as it was before the call, so
callers can catch ``MoveError`` and carry on with the same game.
"""

from typing import Optional

from connect4_engine.utils import COLS, Outcome


class MoveError(ValueError):
    """Base class for rejected drops."""

    def __init__(self, message: str, column=None):
        super().__init__(message)
        self.column = column


class InvalidColumnError(MoveError):
    """Raised when the column index is not an integer in [0, COLS)."""

    def __init__(self, column):
        super().__init__(
            f"Column {column!r} outside valid range 0-{COLS - 1}", column)


class ColumnFullError(MoveError):
    """Raised when the chosen column has no empty cell left."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full", column)


class GameAlreadyOverError(MoveError):
    """Raised when a drop is attempted after the game has ended."""

    def __init__(self, column, outcome: Optional[Outcome] = None):
        result = outcome.result.name if outcome is not None else "over"
        super().__init__(f"Game is already over ({result})", column)
        self.outcome = outcome
