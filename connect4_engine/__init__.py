"""
connect4_engine - Rules engine for two-player Connect Four

This package provides the game-state core of Connect Four on a 6x7 board:
gravity drops, win and draw detection and turn alternation, plus a
Gymnasium environment adapter and a terminal interface built on top of it.
"""

# Version number
__version__ = '0.1.0'
