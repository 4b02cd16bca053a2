from __future__ import annotations

from .core import BlockStackGame, GameState


class GravityScheduler:
    """Drives gravity from wall-clock time, independent of frame rate.

    Call ``tick`` once per display refresh with a monotonic timestamp in
    milliseconds (``pygame.time.get_ticks()`` in the human-play loop, made-up
    values in tests). At most one gravity step happens per call.
    """

    def __init__(self, game: BlockStackGame, now_ms: int = 0) -> None:
        self.game = game
        self.last_tick = now_ms
        self._seen_game = game.games_started

    def restart(self, now_ms: int) -> None:
        self.last_tick = now_ms

    def tick(self, now_ms: int) -> bool:
        fired = False
        if self.game.games_started != self._seen_game:
            # New game since the last tick: the first piece gets a full interval
            self._seen_game = self.game.games_started
            self.last_tick = now_ms
        elif self.game.state is GameState.RUNNING:
            if now_ms - self.last_tick >= self.game.session.drop_interval:
                self.game.gravity_tick()
                self.last_tick = now_ms
                fired = True
        elif self.game.state is GameState.PAUSED:
            self.last_tick = now_ms
        self.game.refresh()
        return fired
