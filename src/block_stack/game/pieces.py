from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _template(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _template([[1, 1, 1, 1]]),
    TetrominoType.O: _template([[1, 1], [1, 1]]),
    TetrominoType.T: _template([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _template([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _template([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _template([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _template([[0, 0, 1], [1, 1, 1]]),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00ffff",
    TetrominoType.O: "#ffff00",
    TetrominoType.T: "#800080",
    TetrominoType.S: "#00ff00",
    TetrominoType.Z: "#ff0000",
    TetrominoType.J: "#0000ff",
    TetrominoType.L: "#ffa500",
}


def color_for(kind: TetrominoType) -> str:
    return COLORS[TetrominoType(kind)]


@dataclass(frozen=True)
class NextPiece:
    """Queued piece: kind and spawn orientation, no position yet."""

    kind: TetrominoType

    @property
    def shape(self) -> Shape:
        return BASE_SHAPES[self.kind]

    @property
    def color(self) -> str:
        return COLORS[self.kind]


@dataclass
class ActivePiece:
    """The falling piece. ``(x, y)`` is the top-left of the shape's bounding box."""

    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def from_template(cls, template: NextPiece, board_width: int, spawn_y: int = 0) -> "ActivePiece":
        shape = template.shape
        x = board_width // 2 - shape.shape[1] // 2
        return cls(kind=template.kind, shape=shape, x=x, y=spawn_y)

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def color_id(self) -> int:
        return int(self.kind)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        h, w = self.shape.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if self.shape[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)
