"""Game module for Block Stack.

Exports the core game engine and supporting classes:
- GameGrid: Board of locked cells, collision queries and line clearing
- ActivePiece / NextPiece: The falling piece and the queued preview piece
- TetrominoType: Enum of available piece types
- rotate_clockwise / resolve_rotation: Rotation with wall kicks
- ScoringRules: Score, level and drop speed policy
- BlockStackGame: State machine for a single game
- GravityScheduler: Time-based gravity driver
"""

from .grid import GameGrid
from .pieces import ActivePiece, NextPiece, TetrominoType, BASE_SHAPES, COLORS, color_for
from .rotation import WALL_KICKS, rotate_clockwise, resolve_rotation
from .rules import ScoringRules
from .interfaces import GameSnapshot, HighScoreStore, Renderer
from .core import Action, BlockStackGame, GameConfig, GameSession, GameState
from .scheduler import GravityScheduler

__all__ = [
    "GameGrid",
    "ActivePiece",
    "NextPiece",
    "TetrominoType",
    "BASE_SHAPES",
    "COLORS",
    "color_for",
    "WALL_KICKS",
    "rotate_clockwise",
    "resolve_rotation",
    "ScoringRules",
    "GameSnapshot",
    "HighScoreStore",
    "Renderer",
    "Action",
    "BlockStackGame",
    "GameConfig",
    "GameSession",
    "GameState",
    "GravityScheduler",
]
