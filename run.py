#!/usr/bin/env python3
"""
run.py - Main entry point for The Fourth Protocol

Examples:
    python run.py play --mode pvai --difficulty medium
    python run.py play --mode aivai --ai minimax --depth 2
    python run.py analyze --position -1 -2 -3 0 0 0 0 ... --player two
    python run.py analyze --position=1,2,3,0,0,0,0,...
    python run.py benchmark --iterations 500
"""

import os
import sys

# Add the project root to Python path so the package imports without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from fourth_protocol.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
