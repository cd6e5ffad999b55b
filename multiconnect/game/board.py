"""
board.py - Board representation and win/tie detection for multiconnect

The Board knows nothing about players beyond the integer token stored in each
cell. Turn order, legality of a whole move and game state live in the engine
(see rules.py).
"""

from typing import List, Optional

import numpy as np

from multiconnect.debug import debug
from multiconnect.utils import (CONNECT_N, EMPTY, Cell, Direction,
                                is_valid_position, line_cells,
                                render_board_ascii)


class Board:
    """
    A ``height`` x ``width`` grid of tokens with gravity.

    Row 0 is the top row and row ``height - 1`` the bottom one. A cell is
    written once and never cleared.
    """

    def __init__(self, width: int, height: int):
        """
        Create an empty board.

        Args:
            width: Number of columns
            height: Number of rows
        """
        debug.debug(f"Initializing {width}x{height} Board", "board")
        self.width = width
        self.height = height
        self.grid = np.full((height, width), EMPTY, dtype=int)

    def find_spot_for_col(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped in ``column`` would land on.

        Args:
            column: Column index (0-indexed)

        Returns:
            Lowest empty row index, or None if the column is full or off the board
        """
        if not 0 <= column < self.width:
            return None

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, column] == EMPTY:
                return row
        return None

    def place(self, row: int, column: int, token: int) -> None:
        """
        Write ``token`` into an empty cell.

        Raises:
            ValueError: If the cell is already occupied or the token is EMPTY
        """
        if token == EMPTY:
            raise ValueError("Cannot place the empty marker")
        if self.grid[row, column] != EMPTY:
            raise ValueError(f"Cell ({row}, {column}) is already occupied")

        debug.trace(f"Placing token {token} at ({row}, {column})", "board")
        self.grid[row, column] = token

    def drop(self, column: int, token: int) -> Optional[int]:
        """
        Drop a piece into ``column``.

        Returns:
            The row the piece landed on, or None if nothing was placed
        """
        row = self.find_spot_for_col(column)
        if row is not None:
            self.place(row, column, token)
        return row

    def _is_win_line(self, cells: List[Cell], token: int) -> bool:
        return all(
            is_valid_position(row, col, self.height, self.width)
            and self.grid[row, col] == token
            for row, col in cells
        )

    def find_win(self, token: int) -> Optional[List[Cell]]:
        """
        Scan the whole board for four ``token`` pieces in a line.

        Every cell is tried as the start of a line running right, down,
        down-right and down-left. Lines that leave the board never count.

        Returns:
            The first winning line as (row, col) cells, or None
        """
        for row in range(self.height):
            for col in range(self.width):
                for direction in Direction:
                    cells = line_cells(row, col, direction, CONNECT_N)
                    if self._is_win_line(cells, token):
                        debug.trace(f"Token {token} wins {direction.name} from ({row}, {col})",
                                    "board")
                        return cells
        return None

    def check_win(self, token: int) -> bool:
        """True if ``token`` has four in a line anywhere on the board."""
        return self.find_win(token) is not None

    def is_full(self) -> bool:
        """True if no cell is empty."""
        return bool(np.all(self.grid != EMPTY))

    def open_columns(self) -> List[int]:
        """Columns that still have room for a piece."""
        return [col for col in range(self.width) if self.grid[0, col] == EMPTY]

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the token grid
        """
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
