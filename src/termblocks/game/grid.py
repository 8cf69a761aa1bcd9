from __future__ import annotations

from typing import Iterator, List, Optional

import numpy as np

from .pieces import Color, Piece, Position


PLAYFIELD_WIDTH = 10
PLAYFIELD_HEIGHT = 20


class Playfield:
    """Fixed-size occupancy grid the pieces land on.

    The grid uses 0 for empty cells and a `Color` value for filled ones.
    Row 0 is the top of the well. The stored color is only used for
    rendering; gameplay only ever asks whether a cell is occupied.
    """

    def __init__(self, width: int = PLAYFIELD_WIDTH, height: int = PLAYFIELD_HEIGHT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_position_valid(self, piece: Piece, position: Optional[Position] = None) -> bool:
        for x, y in piece.cells(position):
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != 0:
                return False
        return True

    def merge(self, piece: Piece) -> None:
        for x, y in piece.cells():
            self.grid[y, x] = int(piece.color)

    def is_row_complete(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_completed_lines(self) -> int:
        """Drop every full row, pad the top with empty rows, return how many went."""
        full = np.all(self.grid != 0, axis=1)
        num = int(np.count_nonzero(full))
        if num == 0:
            return 0
        kept = self.grid[~full]
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def color_at(self, x: int, y: int) -> Optional[Color]:
        value = int(self.grid[y, x])
        return Color(value) if value else None

    def rows(self) -> Iterator[List[Optional[Color]]]:
        for y in range(self.height):
            yield [self.color_at(x, y) for x in range(self.width)]

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
