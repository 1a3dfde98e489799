"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables shared by the engine, session and CLI tests.
"""

from typing import Callable, Generator, Iterable

import numpy as np
import pytest

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.game.board import Board
from connect4_engine.utils import ROWS, COLS, Player

# 42 drops ending in a draw. Column 2 gets A at the bottom, then columns 0, 1, 4, 5, 6 are
# filled bottom-up starting with B, then 2 and 3 are completed. No four in a row anywhere.
DRAW_SEQUENCE = [2] + [0] * 6 + [1] * 6 + [4] * 6 + [5] * 6 + [6] * 6 + [2] * 5 + [3] * 6


@pytest.fixture(autouse=True)
def restore_debug_settings() -> Generator[None, None, None]:
    """The CLI reconfigures the shared debug manager. Put it back after every test."""
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def play() -> Callable[[Iterable[int]], Board]:
    """Call the inner function with a column sequence to get a board with those drops applied"""

    def _play(columns: Iterable[int], start: Board = None) -> Board:
        target = start if start is not None else Board()
        for column in columns:
            target.drop_token(column)
        return target

    return _play


def _brute_force_line_through(grid: np.ndarray, row: int, col: int) -> bool:
    """Check every window of four cells on the board that contains (row, col)."""
    value = grid[row, col]
    if value == Player.EMPTY.value:
        return False
    for dr, dc in [(0, 1), (1, 0), (1, 1), (1, -1)]:
        for offset in range(4):
            start_r, start_c = row - dr * offset, col - dc * offset
            cells = [(start_r + dr * k, start_c + dc * k) for k in range(4)]
            if all(0 <= r < ROWS and 0 <= c < COLS and grid[r, c] == value for r, c in cells):
                return True
    return False


@pytest.fixture
def has_line_through() -> Callable[[np.ndarray, int, int], bool]:
    """Independent full-window check used as an oracle for the rooted win detection"""
    return _brute_force_line_through


@pytest.fixture
def draw_sequence() -> list:
    return list(DRAW_SEQUENCE)
