from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import ActivePiece, Shape


logger = logging.getLogger(__name__)

# Offsets tried in order after a rotation: in place, left, right, up.
WALL_KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (-1, 0), (1, 0), (0, -1))


def rotate_clockwise(shape: Shape) -> Shape:
    """Return a new matrix with ``new[j][R-1-i] = old[i][j]``."""
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


def resolve_rotation(grid: GameGrid, piece: ActivePiece) -> Optional[ActivePiece]:
    """Rotate ``piece`` clockwise and find a kick offset that fits.

    Returns the rotated piece at its accepted position, or None when every
    candidate collides. ``piece`` itself is never modified.
    """
    rotated = rotate_clockwise(piece.shape)
    for dx, dy in WALL_KICKS:
        x, y = piece.x + dx, piece.y + dy
        if not grid.collides(rotated, x, y):
            return ActivePiece(piece.kind, rotated, x, y)
    logger.debug("Rotation of %s at (%d, %d) rejected", piece.kind.name, piece.x, piece.y)
    return None
