#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

Usage:
    python run.py play
    python run.py replay --moves 3,3,4,4,5,5,6
    python run.py --debug benchmark --iterations 500
"""

import sys

from connect4_engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
