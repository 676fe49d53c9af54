#!/usr/bin/env python3
import argparse
import logging
import random
import time

import tcod

from config import SimulationConfig
from engine import Engine
import input_handlers
from logger import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Animated lightning strikes in a tile window.")
    parser.add_argument("--width", type=int, default=defaults.width, help="Grid width in tiles")
    parser.add_argument("--height", type=int, default=defaults.height, help="Grid height in tiles")
    parser.add_argument("--randomness", type=int, default=None,
                        help="Fixed branching randomness (default: random 3..30 per strike)")
    parser.add_argument("--iterations", type=int, default=defaults.iterations_per_frame,
                        help="Simulation steps per frame")
    parser.add_argument("--delay", type=float, default=defaults.frame_delay,
                        help="Seconds to wait between frames")
    parser.add_argument("--tileset", type=str, default=None, help="CP437 16x16 tilesheet image")
    parser.add_argument("--log-file", type=str, default="lightning.log", help="Where to write the log")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible strikes")
    parser.add_argument("--status", action="store_true", help="Show the strike phase on the bottom row")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        width=args.width,
        height=args.height,
        iterations_per_frame=args.iterations,
        frame_delay=args.delay,
        randomness=args.randomness,
        tileset=args.tileset,
    ).validate()


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file)
    config = config_from_args(args)
    logger.info("Starting with %s", config)

    tileset = None
    if config.tileset:
        tileset = tcod.tileset.load_tilesheet(config.tileset, 16, 16, tcod.tileset.CHARMAP_CP437)

    rng = random.Random(args.seed) if args.seed is not None else None
    engine = Engine(config, rng)
    engine.show_status = args.status
    handler: input_handlers.BaseEventHandler = input_handlers.MainHandler(engine)

    with tcod.context.new(
        columns=config.width,
        rows=config.height,
        tileset=tileset,
        title=config.title,
        vsync=True,
    ) as context:
        console = tcod.console.Console(config.width, config.height, order="F")
        try:
            while True:
                engine.tick()
                console.clear()
                handler.on_render(console=console)
                context.present(console)

                for event in tcod.event.get():
                    context.convert_event(event)
                    handler = handler.handle_events(event)
                time.sleep(config.frame_delay)
        except SystemExit:
            logger.info("Window closed after %d strikes.", engine.strike_count)
            raise
        except Exception:
            logger.exception("An unhandled exception occurred during the animation:")
            raise


if __name__ == "__main__":
    main()
