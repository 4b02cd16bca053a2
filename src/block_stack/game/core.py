from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional

import numpy as np

from block_stack.storage.highscores import HighScoreEntry, normalize_initials, qualifies

from .grid import GameGrid
from .interfaces import GameSnapshot, HighScoreStore, Renderer
from .pieces import ActivePiece, NextPiece, TetrominoType
from .rotation import resolve_rotation
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    PAUSE = 5
    NONE = 6


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0

    def __post_init__(self) -> None:
        # The I piece is four wide and every piece is at most two tall at spawn
        if self.width < 4:
            raise ValueError(f"board width must be at least 4, got {self.width}")
        if self.height < 2:
            raise ValueError(f"board height must be at least 2, got {self.height}")


@dataclass
class GameSession:
    score: int = 0
    lines: int = 0
    level: int = 1
    drop_interval: int = 1000
    running: bool = False
    paused: bool = False


class BlockStackGame:
    """Falling-block game state machine.

    Owns the board, the active and queued pieces, the session counters and
    the piece RNG. Input commands and the gravity scheduler both call into
    it from a single thread; every command is ignored unless the game is
    running (pause toggling is also accepted while paused).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        renderer: Optional[Renderer] = None,
        high_scores: Optional[HighScoreStore] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.renderer = renderer
        self.high_scores = high_scores
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.session = GameSession(drop_interval=self.rules.base_interval_ms)
        self.state = GameState.IDLE
        self.current_piece: Optional[ActivePiece] = None
        self.next_piece: Optional[NextPiece] = None
        self.high_score_pending = False
        # Bumped by every start so clocks can tell a new game from a resumed one
        self.games_started = 0

    # -- lifecycle ---------------------------------------------------------

    def seed(self, seed: Optional[int]) -> None:
        self.rng = random.Random(seed)

    def start(self) -> bool:
        if self.state not in (GameState.IDLE, GameState.GAME_OVER):
            return False
        self.session = GameSession(drop_interval=self.rules.base_interval_ms, running=True)
        self.grid.reset()
        self.current_piece = None
        self.next_piece = None
        self.high_score_pending = False
        self.state = GameState.RUNNING
        self.games_started += 1
        logger.info("Game started on a %dx%d board", self.grid.width, self.grid.height)
        self.spawn()
        self.refresh()
        return True

    def reset(self) -> None:
        self.state = GameState.IDLE
        self.session.running = False
        self.session.paused = False
        self.grid.reset()
        self.current_piece = None
        self.next_piece = None
        self.high_score_pending = False
        self.refresh()

    def toggle_pause(self) -> bool:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
        elif self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
        else:
            return False
        self.session.paused = self.state is GameState.PAUSED
        logger.debug("Paused" if self.session.paused else "Resumed")
        self.refresh()
        return True

    # -- piece flow --------------------------------------------------------

    def _random_piece(self) -> NextPiece:
        kind = self.rng.choice(list(TetrominoType))
        return NextPiece(kind)

    def spawn(self) -> None:
        template = self.next_piece or self._random_piece()
        self.current_piece = ActivePiece.from_template(template, self.grid.width, self.config.spawn_y)
        self.next_piece = self._random_piece()
        logger.debug(
            "Spawned %s at (%d, %d), next %s",
            self.current_piece.kind.name,
            self.current_piece.x,
            self.current_piece.y,
            self.next_piece.kind.name,
        )
        # Immediate collision check: if overlaps, game over
        if self.grid.collides(self.current_piece.shape, self.current_piece.x, self.current_piece.y):
            self._game_over()

    def _land(self) -> int:
        assert self.current_piece is not None
        self.grid.lock(self.current_piece)
        self.current_piece = None
        lines = self.grid.clear_full_lines()
        self._apply_line_clear(lines)
        self.spawn()
        return lines

    def _apply_line_clear(self, lines: int) -> None:
        if lines <= 0:
            return
        s = self.session
        gained = self.rules.score_delta(lines, s.level)
        s.lines += lines
        s.score += gained
        new_level = self.rules.level_for(s.lines)
        if new_level > s.level:
            s.level = new_level
            logger.info("Level up: %d", s.level)
        s.drop_interval = self.rules.drop_interval_for(s.score)
        logger.info("Cleared %d line(s) for %d points, score %d", lines, gained, s.score)

    def _game_over(self) -> None:
        self.state = GameState.GAME_OVER
        self.session.running = False
        self.session.paused = False
        entries = self.high_scores.load() if self.high_scores is not None else []
        self.high_score_pending = self.high_scores is not None and qualifies(entries, self.session.score)
        logger.info(
            "Game over with score %d, %d lines, level %d%s",
            self.session.score,
            self.session.lines,
            self.session.level,
            " (new high score)" if self.high_score_pending else "",
        )

    # -- commands ----------------------------------------------------------

    def _move(self, dx: int, dy: int) -> bool:
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return False
        piece = self.current_piece
        if not self.grid.collides(piece.shape, piece.x + dx, piece.y + dy):
            piece.x += dx
            piece.y += dy
            return True
        if dy > 0:
            # Piece has landed
            self._land()
        return False

    def move(self, dx: int, dy: int) -> bool:
        """Shift the active piece; a blocked downward move locks it."""
        moved = self._move(dx, dy)
        self.refresh()
        return moved

    def gravity_tick(self) -> bool:
        return self._move(0, 1)

    def rotate(self) -> bool:
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return False
        rotated = resolve_rotation(self.grid, self.current_piece)
        if rotated is None:
            return False
        self.current_piece = rotated
        self.refresh()
        return True

    def hard_drop(self) -> int:
        """Drop the active piece to its resting row and lock it; returns rows fallen."""
        if self.state is not GameState.RUNNING or self.current_piece is None:
            return 0
        piece = self.current_piece
        distance = 0
        while not self.grid.collides(piece.shape, piece.x, piece.y + 1):
            piece.y += 1
            distance += 1
        self._land()
        self.refresh()
        return distance

    def step(self, action: Action) -> bool:
        if action == Action.PAUSE:
            return self.toggle_pause()
        if self.state is not GameState.RUNNING:
            return False
        if action == Action.LEFT:
            return self.move(-1, 0)
        if action == Action.RIGHT:
            return self.move(1, 0)
        if action == Action.SOFT_DROP:
            return self.move(0, 1)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.HARD_DROP:
            self.hard_drop()
            return True
        return False

    # -- high scores -------------------------------------------------------

    def submit_initials(self, initials: Optional[str]) -> List[HighScoreEntry]:
        if not self.high_score_pending or self.high_scores is None:
            return []
        entries = self.high_scores.save(normalize_initials(initials), self.session.score)
        self.high_score_pending = False
        self.refresh()
        return entries

    def load_high_scores(self) -> List[HighScoreEntry]:
        if self.high_scores is None:
            return []
        return self.high_scores.load()

    # -- projections -------------------------------------------------------

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def lines(self) -> int:
        return self.session.lines

    @property
    def level(self) -> int:
        return self.session.level

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        return GameSnapshot(
            board=self.grid.clone_state(),
            active_cells=tuple(piece.cells()) if piece is not None else (),
            active_kind=piece.kind if piece is not None else None,
            next_piece=self.next_piece,
            score=self.session.score,
            lines=self.session.lines,
            level=self.session.level,
            drop_interval=self.session.drop_interval,
            state=self.state.value,
            high_score_pending=self.high_score_pending,
        )

    def refresh(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.snapshot())

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state
