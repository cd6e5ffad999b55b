"""
rules.py - Game state machine and Gymnasium environment for multiconnect

This module provides:
1. GameEngine, which owns a board and a fixed player rotation and turns column
   choices into MoveResults
2. A gymnasium-compatible environment driving one engine per episode
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from multiconnect.debug import debug
from multiconnect.game.board import Board
from multiconnect.game.players import Player, PlayerRegistry
from multiconnect.utils import (DEFAULT_COLORS, DEFAULT_HEIGHT, DEFAULT_WIDTH, Cell,
                                is_valid_position)


class GameState(Enum):
    """Where the game stands."""
    ACTIVE = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameState.ACTIVE


class MoveOutcome(Enum):
    """What a call to GameEngine.apply_move did."""
    CONTINUE = auto()
    WIN = auto()
    TIE = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of one move request.

    For anything but REJECTED, ``player``, ``row`` and ``column`` describe the
    piece that was just placed.
    """
    outcome: MoveOutcome
    player: Optional[Player] = None
    row: Optional[int] = None
    column: Optional[int] = None
    next_player: Optional[Player] = None
    winning_line: Tuple[Cell, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.outcome != MoveOutcome.REJECTED

    @property
    def is_terminal(self) -> bool:
        return self.outcome in (MoveOutcome.WIN, MoveOutcome.TIE)

    @property
    def winner(self) -> Optional[Player]:
        return self.player if self.outcome == MoveOutcome.WIN else None

    @property
    def message(self) -> Optional[str]:
        """End-of-game announcement, or None while the game goes on."""
        if self.outcome == MoveOutcome.WIN:
            return f"{self.player.color} player won!!"
        if self.outcome == MoveOutcome.TIE:
            return "Tie!"
        return None


REJECTED = MoveResult(MoveOutcome.REJECTED)


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


class GameEngine:
    """
    One game of Connect Four between any number of players.

    Players take turns in the order given. Moves that cannot be played are
    answered with a REJECTED result and change nothing. Start a new game by
    building a new engine.
    """

    def __init__(self, width: int, height: int, players: Iterable[Player]):
        """
        Set up an empty board and give the first turn to the first player.

        Args:
            width: Number of columns, at least 1
            height: Number of rows, at least 1
            players: Players in turn order, e.g. a PlayerRegistry

        Raises:
            ValueError: On non-positive dimensions, no players or duplicate identifiers
            TypeError: If an entry in ``players`` is not a Player
        """
        for name, value in (("width", width), ("height", height)):
            if not _is_integer(value) or value < 1:
                debug.error(f"Invalid board {name}: {value!r}", "game")
                raise ValueError(f"Board {name} must be a positive integer, got {value!r}")

        players = tuple(players)
        if not players:
            debug.error("Cannot start a game without players", "game")
            raise ValueError("At least one player is required")

        for player in players:
            if not isinstance(player, Player):
                debug.error(f"Not a Player: {player!r}", "game")
                raise TypeError(f"Expected a Player, got {type(player).__name__}")

        identifiers = [player.identifier for player in players]
        if len(set(identifiers)) != len(identifiers):
            debug.error(f"Duplicate player identifiers: {identifiers}", "game")
            raise ValueError("Player identifiers must be unique")

        self._width = int(width)
        self._height = int(height)
        self._players = players
        self._tokens = {player.identifier: seat for seat, player in enumerate(players, start=1)}
        self.board = Board(self._width, self._height)
        self._turn_index = 0
        self._state = GameState.ACTIVE
        self._winner: Optional[Player] = None
        self._winning_line: Tuple[Cell, ...] = ()
        self._moves_made: List[int] = []
        self.last_move: Optional[Cell] = None

        debug.debug(f"New {self._width}x{self._height} game with players "
                    f"{', '.join(identifiers)}", "game")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    @property
    def turn_index(self) -> int:
        return self._turn_index

    @property
    def current_player(self) -> Player:
        return self._players[self._turn_index]

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game_over(self) -> bool:
        return self._state.is_game_over()

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def winning_line(self) -> Tuple[Cell, ...]:
        return self._winning_line

    @property
    def moves_made(self) -> List[int]:
        """Columns played so far, in order."""
        return list(self._moves_made)

    def token_for(self, player: Player) -> int:
        """Grid value used for ``player``'s pieces."""
        return self._tokens[player.identifier]

    def cell(self, row: int, column: int) -> Optional[Player]:
        """
        Player occupying a cell, or None if it is empty.

        Raises:
            IndexError: If the cell is not on the board
        """
        if not is_valid_position(row, column, self._height, self._width):
            raise IndexError(f"Cell ({row}, {column}) is off the board")
        token = int(self.board.grid[row, column])
        return self._players[token - 1] if token else None

    def legal_drop_column(self, column: int) -> Optional[int]:
        """
        Row a piece dropped into ``column`` would land on.

        Args:
            column: Column index (0-indexed)

        Returns:
            Row index of the lowest empty cell, or None if the column is full
            or not on the board
        """
        if not _is_integer(column):
            return None
        return self.board.find_spot_for_col(int(column))

    def valid_moves(self) -> List[int]:
        """Columns the current player may drop into; empty once the game is over."""
        if self.game_over:
            return []
        return self.board.open_columns()

    def apply_move(self, column: int) -> MoveResult:
        """
        Drop the current player's piece into ``column``.

        Args:
            column: Column index (0-indexed)

        Returns:
            WIN or TIE when the move ends the game, CONTINUE with the next
            player otherwise, and REJECTED (with no state change) when the game
            is over or the column is off the board or full
        """
        if self.game_over:
            debug.debug(f"Move in column {column!r} rejected: game is over ({self._state.name})",
                        "game")
            return REJECTED

        row = self.legal_drop_column(column)
        if row is None:
            debug.debug(f"Move in column {column!r} rejected: no room", "game")
            return REJECTED

        column = int(column)
        mover = self.current_player
        token = self.token_for(mover)

        self.board.place(row, column, token)
        self._moves_made.append(column)
        self.last_move = (row, column)
        debug.debug(f"Player {mover.identifier} dropped into column {column}, row {row}", "game")

        with debug.timer("win_check", "game"):
            line = self.board.find_win(token)

        if line is not None:
            self._state = GameState.WON
            self._winner = mover
            self._winning_line = tuple(line)
            debug.info(f"Player {mover.identifier} wins after move at {self.last_move}", "game")
            return MoveResult(MoveOutcome.WIN, mover, row, column,
                              winning_line=self._winning_line)

        if self.board.is_full():
            self._state = GameState.TIED
            debug.info("Game ends in a tie", "game")
            return MoveResult(MoveOutcome.TIE, mover, row, column)

        self._turn_index = (self._turn_index + 1) % len(self._players)
        debug.debug(f"Switching to player {self.current_player.identifier}", "game")
        return MoveResult(MoveOutcome.CONTINUE, mover, row, column,
                          next_player=self.current_player)

    def get_state(self) -> np.ndarray:
        """Copy of the token grid (0 empty, n for the n-th player)."""
        return self.board.get_state()

    def render(self) -> str:
        return self.board.render()

    def __str__(self) -> str:
        return self.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Each episode is a fresh GameEngine. Actions are column indices and rewards
    are given from the point of view of the player who just moved.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 players: Optional[Iterable[Player]] = None,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            width: Number of columns
            height: Number of rows
            players: Players in turn order; two default players when omitted
            render_mode: 'ascii', 'human' or None
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        if players is None:
            registry = PlayerRegistry()
            for color in DEFAULT_COLORS:
                registry.register(color)
            players = registry
        self.players = tuple(players)

        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        self.render_mode = render_mode

        self.engine = GameEngine(width, height, self.players)

        # Smallest dtype that holds every token
        self._obs_dtype = np.min_scalar_type(len(self.players))

        self.action_space = spaces.Discrete(width)
        self.observation_space = spaces.Box(
            low=0, high=len(self.players), shape=(height, width), dtype=self._obs_dtype
        )

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

        self._last_result: Optional[MoveResult] = None

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None
              ) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game with the same players and board size.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.engine = GameEngine(self.engine.width, self.engine.height, self.players)
        self._last_result = None

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play ``action`` for the player whose turn it is.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        result = self.engine.apply_move(action)
        self._last_result = result

        if result.outcome == MoveOutcome.REJECTED:
            debug.warning(f"Invalid action: {action}", "env")
            reward = self.reward_invalid_move
        elif result.outcome == MoveOutcome.WIN:
            reward = self.reward_win
        elif result.outcome == MoveOutcome.TIE:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, self.engine.game_over, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.engine.render()
        if self.render_mode == "human":
            print(self.engine.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.engine.get_state().astype(self._obs_dtype)

    def _get_info(self) -> Dict[str, Union[int, str, bool, list, tuple, None]]:
        rejected = (self._last_result is not None
                    and self._last_result.outcome == MoveOutcome.REJECTED)
        return {
            'valid_moves': self.engine.valid_moves(),
            'current_player': self.engine.current_player.identifier,
            'state': self.engine.state.name,
            'moves_made': len(self.engine.moves_made),
            'last_move': self.engine.last_move,
            'winning_line': list(self.engine.winning_line),
            'rejected': rejected,
        }
