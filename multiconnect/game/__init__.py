"""
multiconnect.game - Core game mechanics

This package contains the board representation, the player registry and the
game state machine.
"""

from multiconnect.game.board import Board
from multiconnect.game.players import Player, PlayerRegistry
from multiconnect.game.rules import (ConnectFourEnv, GameEngine, GameState,
                                     MoveOutcome, MoveResult)

__all__ = ['Board', 'Player', 'PlayerRegistry', 'GameEngine', 'GameState',
           'MoveOutcome', 'MoveResult', 'ConnectFourEnv']
