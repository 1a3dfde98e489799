"""Unit tests for /connect4_engine/utils.py"""

import numpy as np
import pytest

from connect4_engine.utils import (
    COLS,
    CONNECT_N,
    DIRECTION_VECTORS,
    ROWS,
    Direction,
    GameResult,
    Outcome,
    Player,
    find_landing_row,
    find_winning_line,
    is_board_full,
    is_valid_column,
    render_board_ascii,
)


def empty_grid() -> np.ndarray:
    return np.zeros((ROWS, COLS), dtype=np.int8)


# -- CONSTANTS AND ENUMS --
def test_board_dimensions_are_fixed() -> None:
    assert (ROWS, COLS, CONNECT_N) == (6, 7, 4)


def test_player_other_swaps_markers() -> None:
    assert Player.A.other() == Player.B
    assert Player.B.other() == Player.A
    assert Player.EMPTY.other() == Player.EMPTY


def test_player_display_values() -> None:
    assert (Player.A.symbol, Player.B.symbol, Player.EMPTY.symbol) == ("X", "O", " ")
    assert Player.A.label == "Player A"
    assert str(Player.B) == "O"


def test_directions_are_checked_in_fixed_order() -> None:
    assert list(DIRECTION_VECTORS.items()) == [
        (Direction.HORIZONTAL, (0, 1)),
        (Direction.VERTICAL, (1, 0)),
        (Direction.DIAGONAL, (1, 1)),
        (Direction.ANTI_DIAGONAL, (1, -1)),
    ]


def test_outcome_constructors() -> None:
    assert Outcome.in_progress() == Outcome(GameResult.IN_PROGRESS, None, ())
    assert not Outcome.in_progress().is_game_over()
    assert Outcome.draw().is_game_over()

    win = Outcome.win(Player.A, [(5, 0), (5, 1), (5, 2), (5, 3)])
    assert win.is_game_over()
    assert win.winner == Player.A
    assert win.winning_line == ((5, 0), (5, 1), (5, 2), (5, 3))


# -- COLUMN HELPERS --
@pytest.mark.parametrize(
    "column, expected",
    [(0, True), (6, True), (-1, False), (7, False), (True, False), (2.0, False), ("3", False), (None, False)],
)
def test_is_valid_column(column, expected) -> None:
    assert is_valid_column(column) is expected


def test_is_valid_column_accepts_numpy_integers() -> None:
    assert is_valid_column(np.int64(3))


def test_find_landing_row_uses_gravity() -> None:
    grid = empty_grid()
    assert find_landing_row(grid, 3) == ROWS - 1

    grid[ROWS - 1, 3] = Player.A.value
    grid[ROWS - 2, 3] = Player.B.value
    assert find_landing_row(grid, 3) == ROWS - 3


def test_find_landing_row_full_column() -> None:
    grid = empty_grid()
    grid[:, 4] = Player.B.value
    assert find_landing_row(grid, 4) is None


def test_is_board_full() -> None:
    grid = empty_grid()
    assert not is_board_full(grid)
    grid[:, :] = Player.A.value
    assert is_board_full(grid)


# -- WIN DETECTION --
def test_horizontal_line_is_found() -> None:
    grid = empty_grid()
    for col in range(2, 6):
        grid[ROWS - 3, col] = Player.B.value

    assert find_winning_line(grid, ROWS - 3, 4) == [(3, 2), (3, 3), (3, 4), (3, 5)]


def test_vertical_line_is_ordered_bottom_up() -> None:
    grid = empty_grid()
    for row in range(2, 6):
        grid[row, 0] = Player.A.value

    assert find_winning_line(grid, 2, 0) == [(5, 0), (4, 0), (3, 0), (2, 0)]


def test_diagonal_lines_are_found() -> None:
    down_right = empty_grid()
    for i in range(4):
        down_right[i, i] = Player.B.value
    assert find_winning_line(down_right, 1, 1) == [(3, 3), (2, 2), (1, 1), (0, 0)]

    up_right = empty_grid()
    for i in range(4):
        up_right[ROWS - 1 - i, i] = Player.A.value
    assert find_winning_line(up_right, ROWS - 1, 0) == [(5, 0), (4, 1), (3, 2), (2, 3)]


def test_full_run_longer_than_four_is_reported() -> None:
    """The winning line is the whole connected run, not just four cells"""
    grid = empty_grid()
    for col in range(COLS):
        grid[ROWS - 1, col] = Player.A.value

    line = find_winning_line(grid, ROWS - 1, 3)
    assert line == [(ROWS - 1, col) for col in range(COLS)]


def test_three_in_a_row_or_broken_run_is_not_a_win() -> None:
    grid = empty_grid()
    for col in range(3):
        grid[ROWS - 1, col] = Player.A.value
    assert find_winning_line(grid, ROWS - 1, 1) == []

    grid[ROWS - 1, 4] = Player.A.value
    assert find_winning_line(grid, ROWS - 1, 4) == []


def test_run_of_other_player_does_not_count() -> None:
    grid = empty_grid()
    for col in range(3):
        grid[ROWS - 1, col] = Player.B.value
    grid[ROWS - 1, 3] = Player.A.value
    assert find_winning_line(grid, ROWS - 1, 3) == []


def test_empty_root_is_never_a_win() -> None:
    assert find_winning_line(empty_grid(), 0, 0) == []


def test_first_direction_wins_when_two_lines_cross() -> None:
    """A cell completing horizontal and vertical lines at once reports the horizontal one"""
    grid = empty_grid()
    for col in range(4):
        grid[ROWS - 1, col] = Player.A.value
    for row in range(ROWS - 4, ROWS):
        grid[row, 0] = Player.A.value

    assert find_winning_line(grid, ROWS - 1, 0) == [(5, 0), (5, 1), (5, 2), (5, 3)]


# -- RENDERING --
def test_render_empty_board() -> None:
    lines = render_board_ascii(empty_grid()).split("\n")
    assert len(lines) == ROWS + 3
    assert lines[1] == "|" + " " * (COLS * 3) + "|"
    assert lines[-1] == "| 0  1  2  3  4  5  6 |"


def test_render_marks_last_move_and_winning_cells() -> None:
    grid = empty_grid()
    grid[ROWS - 1, 0] = Player.A.value
    grid[ROWS - 1, 1] = Player.B.value

    text = render_board_ascii(grid, highlight=[(ROWS - 1, 0)], last_move=(ROWS - 1, 1))
    bottom_row = text.split("\n")[ROWS]
    assert bottom_row.startswith("| x [O]")
