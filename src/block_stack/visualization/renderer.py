from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from block_stack.game import GameSnapshot, NextPiece, TetrominoType, color_for
from block_stack.storage import HighScoreEntry


EMPTY_COLOR = (20, 20, 26)
BACKGROUND = (10, 10, 14)
TEXT_COLOR = (230, 230, 230)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    v = abs(int(v))
    if v == 0:
        return EMPTY_COLOR
    try:
        c = pygame.Color(color_for(TetrominoType(v)))
    except ValueError:
        return (200, 200, 200)
    return (c.r, c.g, c.b)


def high_score_lines(entries: Sequence[HighScoreEntry]) -> List[str]:
    if not entries:
        return ["No high scores yet!"]
    return [f"#{rank} {e.initials} {e.score:,}" for rank, e in enumerate(entries, start=1)]


class Renderer:
    """Draws game snapshots onto a pygame surface.

    The board sits at ``margin`` from the top-left corner; the side panel
    with the next piece and the score fields is to its right.
    """

    def __init__(self, screen: pygame.Surface, cell_size: int = 30, margin: int = 20, flip: bool = True) -> None:
        self.screen = screen
        self.cell_size = cell_size
        self.margin = margin
        self.flip = flip
        self._font: Optional[pygame.font.Font] = None
        # Text typed at the initials prompt, owned by the input loop
        self.prompt = ""
        # High-score table shown over the board, None while hidden
        self.high_scores: Optional[List[HighScoreEntry]] = None

    @staticmethod
    def window_size(width: int, height: int, cell_size: int = 30, margin: int = 20) -> Tuple[int, int]:
        side_panel_w = 6 * cell_size
        return (margin * 3 + width * cell_size + side_panel_w, margin * 2 + height * cell_size)

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont(None, max(18, self.cell_size - 4))
        return self._font

    def _cell_rect(self, x0: int, y0: int, x: int, y: int, size: int) -> pygame.Rect:
        return pygame.Rect(x0 + x * size, y0 + y * size, size - 1, size - 1)

    def _grid_surface(self, board: np.ndarray, active_cells, active_kind) -> pygame.Surface:
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(board[y, x]), self._cell_rect(0, 0, x, y, self.cell_size))
        if active_kind is not None:
            color = _color_for_value(int(active_kind))
            for x, y in active_cells:
                if 0 <= x < w and 0 <= y < h:
                    pygame.draw.rect(surf, color, self._cell_rect(0, 0, x, y, self.cell_size))
        return surf

    def _draw_next(self, piece: Optional[NextPiece], x0: int, y0: int) -> None:
        if piece is None:
            return
        size = max(8, self.cell_size * 2 // 3)
        color = _color_for_value(int(piece.kind))
        shape = piece.shape
        for py in range(shape.shape[0]):
            for px in range(shape.shape[1]):
                if shape[py, px]:
                    pygame.draw.rect(self.screen, color, self._cell_rect(x0, y0, px, py, size))

    def _draw_text(self, text: str, x: int, y: int) -> int:
        font = self._get_font()
        surf = font.render(text, True, TEXT_COLOR)
        self.screen.blit(surf, (x, y))
        return y + surf.get_height() + 6

    def _draw_high_scores(self, board_w: int, board_h: int) -> None:
        panel = pygame.Rect(self.margin, self.margin, board_w, board_h)
        pygame.draw.rect(self.screen, (20, 25, 40), panel)
        y = self._draw_text("HIGH SCORES", panel.x + 8, panel.y + 8)
        for line in high_score_lines(self.high_scores or []):
            y = self._draw_text(line, panel.x + 8, y)

    def render(self, snapshot: GameSnapshot) -> None:
        board = snapshot.board
        h, w = board.shape
        self.screen.fill(BACKGROUND)
        self.screen.blit(self._grid_surface(board, snapshot.active_cells, snapshot.active_kind), (self.margin, self.margin))

        panel_x = self.margin * 2 + w * self.cell_size
        y = self._draw_text("NEXT", panel_x, self.margin)
        self._draw_next(snapshot.next_piece, panel_x, y)
        y += self.cell_size * 2
        y = self._draw_text(f"SCORE {snapshot.score}", panel_x, y)
        y = self._draw_text(f"LINES {snapshot.lines}", panel_x, y)
        y = self._draw_text(f"LEVEL {snapshot.level}", panel_x, y)

        status = {
            "idle": "Press ENTER to start",
            "paused": "PAUSED",
            "game_over": f"Initials: {self.prompt}_" if snapshot.high_score_pending else "GAME OVER - R to restart",
        }.get(snapshot.state)
        if status:
            self._draw_text(status, self.margin, self.margin + (h * self.cell_size) // 2)
        if self.high_scores is not None:
            self._draw_high_scores(w * self.cell_size, h * self.cell_size)
        if self.flip and self.screen is pygame.display.get_surface():
            pygame.display.flip()
