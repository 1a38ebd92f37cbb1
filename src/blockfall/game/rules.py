from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    lock_points: int = 10
    line_clear_base: int = 100

    def score_for_lines(self, lines: int) -> int:
        # 1: 100, 2: 200, 3: 400, 4: 800
        if lines <= 0:
            return 0
        return self.line_clear_base * 2 ** (lines - 1)


@dataclass
class GameSpeed:
    """Seconds before the current piece drops by one row."""

    start: float = 0.6
    decrement: float = 0.005
    min: float = 0.1

    def interval_for_rows(self, rows: int) -> float:
        return max(self.min, self.start - self.decrement * rows)
