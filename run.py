#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four game

Examples:
    python run.py play
    python run.py replay --moves 0,1,0,1,0,1,0
    python run.py test --position ".......,.......,.......,.......,.......,XXXX..."
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connect_four.interfaces.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
