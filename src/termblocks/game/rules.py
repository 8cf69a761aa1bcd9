from __future__ import annotations

import logging
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)

INITIAL_DELAY = 1.0
DELAY_FACTOR = 0.8
LEVEL_UP = 20


@dataclass
class GravityDelay:
    """Seconds between gravity ticks, shared between the tracker and the loop."""

    initial: float = INITIAL_DELAY
    factor: float = DELAY_FACTOR
    value: float = field(init=False)

    def __post_init__(self) -> None:
        self.value = self.initial

    def reset(self) -> None:
        self.value = self.initial

    def decay(self) -> None:
        self.value *= self.factor


@dataclass
class ScoreTracker:
    gravity: GravityDelay = field(default_factory=GravityDelay)
    level_up: int = LEVEL_UP
    lines_completed: int = 0
    level: int = 1
    score: int = 0

    def reset(self) -> None:
        self.lines_completed = 0
        self.level = 1
        self.score = 0
        self.gravity.reset()

    def record_clear(self, lines: int) -> bool:
        """Account for `lines` cleared at once. Returns True on a level change."""
        if lines <= 0:
            return False
        self.lines_completed += lines
        self.score += lines * lines
        # a single comparison, so at most one level per clear event
        if self.score > self.level_up * self.level:
            self.level += 1
            self.gravity.decay()
            logger.info("level %d reached, gravity delay %.3fs", self.level, self.gravity.value)
            return True
        return False
