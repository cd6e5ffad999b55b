"""
multiconnect - Multi-player Connect Four rules engine

This package provides the board, the player lobby, the turn-based game
engine and a terminal front end for playing Connect Four with any number
of players on a board of any size.
"""

# Version number
__version__ = '0.1.0'
