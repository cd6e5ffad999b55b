"""
utils.py - Constants, enumerations and board helpers for multiconnect

Shared by the board, the game engine and the front ends. Nothing in here keeps
state; the helpers take the grid or its dimensions as arguments.
"""

from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np

# Game constants
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
CONNECT_N = 4  # Pieces in a line needed to win
EMPTY = 0      # Grid value of an unoccupied cell

DEFAULT_COLORS = ("red", "yellow")

# ASCII symbols by token; token 1 is 'X', token 2 is 'O', and so on
PIECE_SYMBOLS = "XOABCDEFGHIJKLMNPQRSTUVWYZ"

Cell = Tuple[int, int]


class Direction(Enum):
    """Directions a winning line can run from its first cell."""
    RIGHT = (0, 1)
    DOWN = (1, 0)
    DOWN_RIGHT = (1, 1)
    DOWN_LEFT = (1, -1)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value


def is_valid_position(row: int, col: int, height: int, width: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        height: Number of rows on the board
        width: Number of columns on the board

    Returns:
        True if position is on the board, False otherwise
    """
    return 0 <= row < height and 0 <= col < width


def line_cells(row: int, col: int, direction: Direction, length: int = CONNECT_N) -> List[Cell]:
    """
    List the cells of a line starting at (row, col) and stepping along ``direction``.

    Cells are not bounds-checked; a line may run off the board.
    """
    dr, dc = direction.vector
    return [(row + k * dr, col + k * dc) for k in range(length)]


def symbol_for(token: int, symbols: Sequence[str] = PIECE_SYMBOLS) -> str:
    """Character drawn for a grid value."""
    if token == EMPTY:
        return " "
    if 1 <= token <= len(symbols):
        return symbols[token - 1]
    return "?"


def render_board_ascii(grid: np.ndarray, symbols: Sequence[str] = PIECE_SYMBOLS) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: Token grid, row 0 at the top
        symbols: One character per token, starting with token 1

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    height, width = grid.shape
    border = "|" + "-" * (width * 2 - 1) + "|"

    lines = [border]
    for row in range(height):
        cells = [symbol_for(int(grid[row, col]), symbols) for col in range(width)]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)

    # Column numbers only line up while they are single digits
    lines.append("|" + " ".join(str(col % 10) for col in range(width)) + "|")

    return "\n".join(lines)
