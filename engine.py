from __future__ import annotations

import logging
import random
from typing import Optional, TYPE_CHECKING

from config import SimulationConfig
from lightning import Lightning, Phase
import render_functions
import setup_game

if TYPE_CHECKING:
    from tcod.console import Console

logger = logging.getLogger(__name__)


class Engine:
    """Keeps one strike going after another."""

    lightning: Lightning

    def __init__(self, config: SimulationConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng
        self.strike_count = 0
        self.show_status = False
        self.lightning = setup_game.new_lightning(config, rng)

    def tick(self) -> None:
        for _ in range(self.config.iterations_per_frame):
            self.lightning.iterate()

    def render(self, console: Console) -> None:
        cells = self.lightning.render(self.config.width, self.config.height)
        render_functions.render_lightning(console, cells)
        if self.show_status:
            render_functions.render_status(
                console,
                f"Strike {self.strike_count + 1} {self.lightning.phase.value} "
                f"cells={len(self.lightning.nodes)}",
            )
        if self.lightning.phase is Phase.DONE:
            self.strike_count += 1
            logger.info("Strike %d done, starting another", self.strike_count)
            self.lightning = setup_game.new_lightning(self.config, self.rng)
