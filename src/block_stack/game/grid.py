from __future__ import annotations

import logging

import numpy as np

from .pieces import ActivePiece, Shape


logger = logging.getLogger(__name__)


class GameGrid:
    """Fixed-size board of locked cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the color ids of the tetromino that locked there.
    Row 0 is the top; rows above it (negative y) are never occupied so that
    pieces can hang partly above the board while spawning.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if x < 0 or x >= self.width or y >= self.height:
            return True
        if y < 0:
            return False
        return self.grid[y, x] != 0

    def collides(self, shape: Shape, origin_x: int, origin_y: int) -> bool:
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if shape[dy, dx] and self.is_occupied(origin_x + dx, origin_y + dy):
                    return True
        return False

    def lock(self, piece: ActivePiece) -> int:
        """Write the piece's color into the board and return cells written."""
        written = 0
        for x, y in piece.cells():
            # Cells still above the top edge are dropped
            if y < 0:
                continue
            self.grid[y, x] = piece.color_id
            written += 1
        logger.debug("Locked %s at (%d, %d), %d cells", piece.kind.name, piece.x, piece.y, written)
        return written

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.grid != 0, axis=1))[0]

    def clear_full_lines(self) -> int:
        full_rows = self.full_rows()
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
