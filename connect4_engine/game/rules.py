"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. A high-level game manager that presentation layers drive
2. A gymnasium-compatible environment wrapping the same engine
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.exceptions import MoveError
from connect4_engine.game.board import Board, GameSnapshot
from connect4_engine.utils import ROWS, COLS, DropResult, GameResult, Player

CELL_PIXELS = 50

# RGB colours for the rgb_array renderer
BACKGROUND_COLOR = (0, 0, 128)
PLAYER_COLORS = {
    Player.EMPTY: (0, 0, 0),
    Player.A: (244, 63, 94),    # Red
    Player.B: (250, 204, 21),   # Yellow
}
HIGHLIGHT_COLOR = (255, 255, 255)


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    This class provides a simplified interface for playing Connect Four
    from a user interface. It owns one Board and forwards to it.
    """

    def __init__(self):
        """Initialize a new Connect Four game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = Board()

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()

    def make_move(self, column: int) -> DropResult:
        """
        Make a move in the game.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            The outcome after the move and where the token landed

        Raises:
            MoveError: if the drop is rejected
        """
        debug.debug(f"Game: Making move in column {column}", "game")
        return self.board.drop_token(column)

    def get_snapshot(self) -> GameSnapshot:
        return self.board.snapshot()

    def is_game_over(self) -> bool:
        """
        Check if the game is over.

        Returns:
            True if the game is over, False otherwise
        """
        return self.board.outcome.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        return self.board.outcome.winner

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        """
        Get a list of valid moves.

        Returns:
            List of valid column indices, empty once the game is over
        """
        return [col for col in range(COLS) if self.board.is_valid_move(col)]

    def render(self) -> str:
        """
        Render the game as a string.

        Returns:
            String representation of the board
        """
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    An adapter over the engine: both players act through ``step`` and no
    opponent or agent is provided. The reward attributes are defaults for
    callers driving the env, given from the point of view of the mover.
    """

    metadata = {'render_modes': ['ansi', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)

        # Observation space: 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.board = Board()
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed for reproducibility
            options: Additional options for reset

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.board.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by dropping a token.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            result = self.board.drop_token(action)
        except MoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['error'] = type(e).__name__
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = result.outcome.is_game_over()
        if result.outcome.result == GameResult.WIN:
            debug.info(f"Game over: {result.outcome.winner.label} wins", "env")
            reward = self.reward_win
        elif result.outcome.result == GameResult.DRAW:
            debug.info("Game over: Draw", "env")
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            Rendered frame depending on render_mode
        """
        if self.render_mode is None:
            return None

        if self.render_mode == "ansi":
            return self.board.render()

        if self.render_mode == "human":
            print(self.board.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        """Draw each cell as a filled disc, ringing the winning line."""
        grid = self.board.grid
        winning = set(self.board.outcome.winning_line)
        frame = np.zeros((ROWS * CELL_PIXELS, COLS * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = BACKGROUND_COLOR

        # Disc and ring masks for one cell, reused for every cell
        ys, xs = np.ogrid[:CELL_PIXELS, :CELL_PIXELS]
        center = CELL_PIXELS // 2
        distance = (ys - center) ** 2 + (xs - center) ** 2
        radius = CELL_PIXELS * 2 // 5
        disc = distance <= radius ** 2
        ring = disc & (distance >= (radius - 3) ** 2)

        for row in range(ROWS):
            for col in range(COLS):
                cell = frame[row * CELL_PIXELS:(row + 1) * CELL_PIXELS,
                             col * CELL_PIXELS:(col + 1) * CELL_PIXELS]
                cell[disc] = PLAYER_COLORS[Player(int(grid[row, col]))]
                if (row, col) in winning:
                    cell[ring] = HIGHLIGHT_COLOR

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.board.grid

    def _get_info(self) -> Dict[str, Any]:
        """
        Get additional information about the current state.

        Returns:
            Dictionary with info about the current state
        """
        outcome = self.board.outcome
        valid_moves = [] if outcome.is_game_over() else self.board.legal_columns()
        last = self.board.last_move

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.board.current_player.value,
            'game_result': outcome.result.name,
            'winner': outcome.winner.value if outcome.winner else None,
            'moves_made': self.board.token_count(),
            'winning_line': list(outcome.winning_line),
            'last_move': (last.row, last.column) if last else None
        }

    def close(self):
        """Clean up resources."""
        pass


if __name__ == "__main__":
    debug.configure(level=DebugLevel.INFO)

    env = ConnectFourEnv(render_mode="ansi")
    observation, info = env.reset(seed=0)
    done = False
    while not done:
        action = int(env.np_random.choice(info['valid_moves']))
        observation, reward, terminated, truncated, info = env.step(action)
        done = terminated or truncated
    print(env.render())
    print(f"Result: {info['game_result']}, winning line: {info['winning_line']}")
