"""
utils.py - Constants, value types and grid helpers for the Connect Four engine

This module provides the fixed board dimensions, the player and outcome
enumerations, the immutable move/outcome records handed to presentation
layers, and the pure grid functions (gravity lookup, rooted win detection,
ASCII rendering) the engine is built on.
"""

from enum import Enum, auto
from typing import Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

Position = Tuple[int, int]


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    A = 1    # First player
    B = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.A:
            return Player.B
        elif self == Player.B:
            return Player.A
        return Player.EMPTY

    @property
    def symbol(self) -> str:
        """Single-character glyph used by the ASCII renderer."""
        if self == Player.A:
            return "X"
        elif self == Player.B:
            return "O"
        return " "

    @property
    def label(self) -> str:
        if self == Player.EMPTY:
            return "Nobody"
        return f"Player {self.name}"

    def __str__(self):
        return self.symbol


STARTING_PLAYER = Player.A


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL = auto()  # Top-left to bottom-right
    ANTI_DIAGONAL = auto()  # Top-right to bottom-left


# Direction vectors (row, col), in the order they are checked
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL: (1, 1),
    Direction.ANTI_DIAGONAL: (1, -1)
}


class Move(NamedTuple):
    """A placed token."""
    row: int
    column: int
    player: Player


class Outcome(NamedTuple):
    """
    Classification of a game: in progress, won by a player along a line,
    or drawn.

    ``winner`` is only set for a win, and ``winning_line`` is empty unless
    the game was won.
    """
    result: GameResult
    winner: Optional[Player] = None
    winning_line: Tuple[Position, ...] = ()

    @classmethod
    def in_progress(cls) -> 'Outcome':
        return cls(GameResult.IN_PROGRESS)

    @classmethod
    def win(cls, player: Player, line: Iterable[Position]) -> 'Outcome':
        return cls(GameResult.WIN, player, tuple(line))

    @classmethod
    def draw(cls) -> 'Outcome':
        return cls(GameResult.DRAW)

    def is_game_over(self) -> bool:
        return self.result.is_game_over()


class DropResult(NamedTuple):
    """What an accepted drop produced: the new outcome and where the token landed."""
    outcome: Outcome
    row: int
    column: int


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def is_valid_column(column) -> bool:
    """Check that ``column`` is an integer index into the board's columns."""
    if isinstance(column, (bool, np.bool_)):
        return False
    if not isinstance(column, (int, np.integer)):
        return False
    return 0 <= column < COLS


def find_landing_row(board: np.ndarray, column: int) -> Optional[int]:
    """
    Find the row a token dropped into ``column`` would land in.

    Scans from the bottom row upward and returns the first empty cell.

    Args:
        board: The game board
        column: The column to drop into

    Returns:
        The landing row, or None if the column is full
    """
    for row in range(ROWS - 1, -1, -1):
        if board[row, column] == Player.EMPTY.value:
            return row
    return None


def is_board_full(board: np.ndarray) -> bool:
    """Check whether every cell of the board holds a token."""
    return bool(np.all(board[0, :] != Player.EMPTY.value))


def _collect_run(board: np.ndarray, row: int, col: int,
                 dr: int, dc: int, player_value: int) -> List[Position]:
    """Walk from (row, col) in steps of (dr, dc), excluding the start, while cells match."""
    positions = []
    r, c = row + dr, col + dc
    while is_valid_position(r, c) and board[r, c] == player_value:
        positions.append((r, c))
        r += dr
        c += dc
    return positions


def find_winning_line(board: np.ndarray, row: int, col: int) -> List[Position]:
    """
    Find the line of connected pieces through (row, col) that wins the game.

    Only lines through the given cell are examined, so the cost is bounded
    by the board dimensions no matter how full the board is. Directions are
    tried in ``DIRECTION_VECTORS`` order and the first qualifying one is
    returned.

    Args:
        board: The game board
        row: Row index of the piece just placed
        col: Column index of the piece just placed

    Returns:
        The full connected run (CONNECT_N or more positions), ordered from the
        bottom-most row upward and left to right within a row, or an empty
        list if there is no win through this cell
    """
    player_value = board[row, col]
    if player_value == Player.EMPTY.value:
        return []

    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        forward = _collect_run(board, row, col, dr, dc, player_value)
        backward = _collect_run(board, row, col, -dr, -dc, player_value)

        if 1 + len(forward) + len(backward) >= CONNECT_N:
            line = [(row, col)] + forward + backward
            return sorted(line, key=lambda pos: (-pos[0], pos[1]))

    return []


def render_board_ascii(board: np.ndarray,
                       highlight: Iterable[Position] = (),
                       last_move: Optional[Position] = None) -> str:
    """
    Render the board as ASCII art.

    Winning cells are drawn in lower case and the last move is wrapped in
    brackets when it is given.

    Args:
        board: The game board
        highlight: Positions to draw in lower case (the winning line)
        last_move: Position of the most recent token

    Returns:
        ASCII representation of the board
    """
    highlighted = set(highlight)
    result = []
    result.append("|" + "-" * (COLS * 3) + "|")

    for row in range(ROWS):
        line = "|"
        for col in range(COLS):
            glyph = Player(int(board[row, col])).symbol
            if (row, col) in highlighted:
                glyph = glyph.lower()
            if last_move == (row, col):
                line += f"[{glyph}]"
            else:
                line += f" {glyph} "
        line += "|"
        result.append(line)

    result.append("|" + "-" * (COLS * 3) + "|")
    result.append("|" + "".join(f" {i} " for i in range(COLS)) + "|")

    return "\n".join(result)
