"""
connect4ab.interfaces - User interfaces for Connect Four

This package contains the text interface used to play and analyse games
from the command line.
"""

# Don't import anything here to avoid circular imports
__all__ = []
