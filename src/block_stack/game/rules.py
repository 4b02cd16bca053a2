from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    points_per_step: int = 2000
    min_interval_ms: int = 50

    def score_delta(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        # One piece can clear at most four rows; treat anything larger as four
        lines = min(lines, len(self.line_clear_scores) - 1)
        return self.line_clear_scores[lines] * level

    def level_for(self, total_lines: int) -> int:
        return max(0, total_lines) // self.lines_per_level + 1

    def drop_interval_for(self, score: int) -> int:
        steps = max(0, score) // self.points_per_step
        return max(self.min_interval_ms, self.base_interval_ms - self.interval_step_ms * steps)
