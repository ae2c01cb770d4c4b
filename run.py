#!/usr/bin/env python3
"""
run.py - Main entry point for the connect4ab engine

Examples:
    python run.py play --depth 4
    python run.py analyze --position 0,1,1,1,0,0,0,... --depth 3
    python run.py benchmark --depth 4 --iterations 10
"""

import sys

from connect4ab.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
