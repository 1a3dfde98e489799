"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, the game engine that owns the grid,
the player to move, the outcome and the move history. ``drop_token`` is its
only mutating operation besides ``reset``; everything else is a pure query
or a read-only snapshot for presentation layers.
"""

from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.exceptions import (ColumnFullError, GameAlreadyOverError,
                                        InvalidColumnError)
from connect4_engine.utils import (ROWS, COLS, STARTING_PLAYER, DropResult,
                                   GameResult, Move, Outcome, Player, Position,
                                   find_landing_row, find_winning_line,
                                   is_board_full, is_valid_column,
                                   is_valid_position, render_board_ascii)


class GameSnapshot(NamedTuple):
    """
    Read-only view of a game, enough to render it without touching the Board.

    The grid is a tuple of row tuples holding ``Player`` values, so snapshots
    compare by value.
    """
    grid: Tuple[Tuple[int, ...], ...]
    current_player: Player
    outcome: Outcome
    last_move: Optional[Move]
    moves: Tuple[Move, ...]
    legal_columns: Tuple[int, ...]
    status: str


class Board:
    """
    Represents a Connect Four game board.

    This class manages the board state, validates and executes drops,
    and detects wins and draws. A rejected drop raises a ``MoveError``
    subclass and leaves every part of the state untouched.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        debug.debug("Initializing new Board", "board")
        self.reset()

    def reset(self) -> None:
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self._grid = np.zeros((ROWS, COLS), dtype=np.int8)
        self._moves: List[Move] = []
        self._current_player = STARTING_PLAYER
        self._outcome = Outcome.in_progress()

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board()
        new_board._grid = self._grid.copy()
        new_board._moves = list(self._moves)
        new_board._current_player = self._current_player
        new_board._outcome = self._outcome
        return new_board

    # --- State accessors ---

    @property
    def grid(self) -> np.ndarray:
        """Copy of the grid; cell values are ``Player`` values."""
        return self._grid.copy()

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    @property
    def game_result(self) -> GameResult:
        return self._outcome.result

    @property
    def last_move(self) -> Optional[Move]:
        return self._moves[-1] if self._moves else None

    @property
    def moves(self) -> Tuple[Move, ...]:
        return tuple(self._moves)

    # --- Queries ---

    def legal_columns(self) -> List[int]:
        """
        Get the columns whose top cell is still empty.

        Returns:
            Ascending list of column indices
        """
        return [col for col in range(COLS) if self._grid[0, col] == Player.EMPTY.value]

    def is_valid_move(self, column) -> bool:
        """
        Check if a drop into ``column`` would be accepted.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move is valid, False otherwise
        """
        if self._outcome.is_game_over() or not is_valid_column(column):
            return False
        return self._grid[0, column] == Player.EMPTY.value

    def landing_row(self, column: int) -> Optional[int]:
        """
        Row a token dropped into ``column`` would occupy, or None if the column is full.

        Raises:
            InvalidColumnError: if ``column`` is outside the board
        """
        if not is_valid_column(column):
            raise InvalidColumnError(column)
        return find_landing_row(self._grid, column)

    def get_cell(self, row: int, col: int) -> Player:
        if not is_valid_position(row, col):
            raise IndexError(f"Position ({row}, {col}) is off the board")
        return Player(int(self._grid[row, col]))

    def is_full(self) -> bool:
        return is_board_full(self._grid)

    def token_count(self) -> int:
        return len(self._moves)

    def is_winning_cell(self, row: int, col: int) -> bool:
        return (row, col) in self._outcome.winning_line

    def is_last_move(self, row: int, col: int) -> bool:
        last = self.last_move
        return last is not None and (last.row, last.column) == (row, col)

    def status_message(self) -> str:
        """Human readable status line for the current outcome."""
        if self._outcome.result == GameResult.WIN:
            return f"{self._outcome.winner.label} wins!"
        if self._outcome.result == GameResult.DRAW:
            return "Draw! Reset to play again."
        return f"{self._current_player.label} to move"

    def snapshot(self) -> GameSnapshot:
        """Capture the current state for a presentation layer."""
        return GameSnapshot(
            grid=tuple(map(tuple, self._grid.tolist())),
            current_player=self._current_player,
            outcome=self._outcome,
            last_move=self.last_move,
            moves=self.moves,
            legal_columns=tuple(self.legal_columns()),
            status=self.status_message(),
        )

    # --- Mutation ---

    def drop_token(self, column: int) -> DropResult:
        """
        Drop the current player's token into ``column``.

        The token lands in the lowest empty cell of the column. If it
        completes a line the game is won by the mover; otherwise a full
        board is a draw; otherwise the turn passes to the other player.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            The new outcome and the landing coordinates

        Raises:
            InvalidColumnError: ``column`` is not an index in [0, COLS)
            GameAlreadyOverError: the game has already been won or drawn
            ColumnFullError: ``column`` has no empty cell
        """
        debug.debug(f"Attempting drop in column {column} for {self._current_player.label}", "board")

        if not is_valid_column(column):
            debug.debug(f"Rejected drop: column {column!r} out of bounds", "board")
            raise InvalidColumnError(column)

        if self._outcome.is_game_over():
            debug.debug(f"Rejected drop: game is over (result: {self._outcome.result.name})", "board")
            raise GameAlreadyOverError(column, self._outcome)

        row = find_landing_row(self._grid, column)
        if row is None:
            debug.debug(f"Rejected drop: column {column} is full", "board")
            raise ColumnFullError(column)

        column = int(column)
        player = self._current_player
        debug.trace(f"Placing piece at position ({row}, {column})", "board")
        self._grid[row, column] = player.value
        self._moves.append(Move(row, column, player))

        debug.start_timer("win_check")
        winning_line = find_winning_line(self._grid, row, column)
        debug.end_timer("win_check", "board")

        if winning_line:
            self._outcome = Outcome.win(player, winning_line)
            debug.info(f"{player.label} wins after move at ({row}, {column})", "board")
        elif is_board_full(self._grid):
            self._outcome = Outcome.draw()
            debug.info("Game ends in a draw", "board")
        else:
            self._current_player = player.other()
            debug.debug(f"Switching to {self._current_player.label}", "board")

        return DropResult(self._outcome, row, column)

    # --- Rendering ---

    def winning_line(self) -> List[Position]:
        """Positions of the winning line, or an empty list if nobody has won."""
        return list(self._outcome.winning_line)

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        last = self.last_move
        return render_board_ascii(
            self._grid,
            highlight=self._outcome.winning_line,
            last_move=(last.row, last.column) if last else None,
        )

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()

    def __repr__(self) -> str:
        return (f"Board(current_player={self._current_player.name}, "
                f"result={self._outcome.result.name}, moves={len(self._moves)})")


if __name__ == "__main__":
    debug.configure(level=DebugLevel.DEBUG)

    board = Board()
    for col in [3, 2, 4, 2, 5, 2, 6]:
        board.drop_token(col)
        print(board)
        print(board.status_message())
    print(f"Winning line: {board.winning_line()}")
