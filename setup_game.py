"""Create new strikes."""
from __future__ import annotations

import logging
import random
from typing import Optional

from config import SimulationConfig
from lightning import Lightning

logger = logging.getLogger(__name__)


def start_column(config: SimulationConfig, rng) -> int:
    """Random column for the strike to start in, away from the side edges."""
    low = config.start_margin
    high = config.width - config.start_margin
    if low > high:
        # Grid narrower than both margins, anywhere will do.
        low, high = 0, config.width - 1
    return rng.randint(low, high)


def new_lightning(config: SimulationConfig, rng: Optional[random.Random] = None) -> Lightning:
    """Return a brand new strike starting on the top row."""
    rng = rng if rng is not None else random
    y_min, _ = config.y_range
    start = (start_column(config, rng), y_min)

    randomness = config.randomness
    if randomness is None:
        randomness = rng.randint(*config.randomness_range)

    return Lightning(start, config.y_range, randomness, rng=rng)
