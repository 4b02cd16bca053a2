"""Contracts between the game core and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

import numpy as np

from block_stack.storage.highscores import HighScoreEntry

from .pieces import NextPiece, TetrominoType


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only projection of a game handed to renderers."""

    board: np.ndarray
    active_cells: Tuple[Tuple[int, int], ...]
    active_kind: Optional[TetrominoType]
    next_piece: Optional[NextPiece]
    score: int
    lines: int
    level: int
    drop_interval: int
    state: str
    high_score_pending: bool = False


class Renderer(Protocol):
    def render(self, snapshot: GameSnapshot) -> None:
        ...


class HighScoreStore(Protocol):
    def load(self) -> List[HighScoreEntry]:
        ...

    def save(self, initials: str, score: int) -> List[HighScoreEntry]:
        ...
