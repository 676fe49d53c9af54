"""Tunable parameters for the lightning animation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import exceptions


@dataclass(frozen=True)
class SimulationConfig:
    width: int = 60
    height: int = 30
    iterations_per_frame: int = 15
    frame_delay: float = 0.05  # seconds between frames
    start_margin: int = 10  # keep the strike start away from the side edges
    randomness_range: Tuple[int, int] = (3, 30)
    randomness: Optional[int] = None  # None = draw from randomness_range per strike
    tileset: Optional[str] = None  # CP437 16x16 tilesheet, tcod default font if None
    title: str = "Lightning"

    @property
    def y_range(self) -> Tuple[int, int]:
        """Inclusive vertical span the bolt has to cross."""
        return 0, self.height - 1

    def validate(self) -> SimulationConfig:
        if self.width <= 0 or self.height <= 0:
            raise exceptions.InvalidConfig(
                f"Grid must be at least 1x1, got {self.width}x{self.height}"
            )
        if self.iterations_per_frame <= 0:
            raise exceptions.InvalidConfig("iterations_per_frame must be positive")
        if self.frame_delay < 0:
            raise exceptions.InvalidConfig("frame_delay can not be negative")
        if self.start_margin < 0:
            raise exceptions.InvalidConfig("start_margin can not be negative")
        low, high = self.randomness_range
        if low < 0 or low > high:
            raise exceptions.InvalidConfig(f"Bad randomness range {self.randomness_range}")
        if self.randomness is not None and self.randomness < 0:
            raise exceptions.InvalidConfig("randomness can not be negative")
        return self
