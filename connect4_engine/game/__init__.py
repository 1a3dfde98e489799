"""
connect4_engine.game - Core game mechanics for Connect Four

This package contains the board engine and the game session and
environment wrappers built on it.
"""

from connect4_engine.game.board import Board, GameSnapshot
from connect4_engine.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'GameSnapshot', 'ConnectFourGame', 'ConnectFourEnv']
