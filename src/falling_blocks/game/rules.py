from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, ...] = (0, 100, 300, 500, 800)
    points_per_level: int = 1000
    # False keeps the level check on the score from before the clear was added.
    level_from_post_clear_score: bool = False
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0 or lines >= len(self.line_clear_scores):
            return 0
        return self.line_clear_scores[lines] * level

    def next_level(self, score: int, level: int) -> int:
        """Advance at most one level when `score` has crossed the next threshold."""
        if score // self.points_per_level + 1 > level:
            return level + 1
        return level

    def tick_interval_ms(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - level * self.interval_step_ms)
