import random

import pytest
import tcod

import exceptions
import main
import setup_game
from config import SimulationConfig
from engine import Engine
from lightning import Phase


def small_config(**kwargs):
    options = dict(width=20, height=8, iterations_per_frame=50, start_margin=4, randomness=2)
    options.update(kwargs)
    return SimulationConfig(**options).validate()


def test_engine_replaces_finished_strikes():
    config = small_config()
    engine = Engine(config, random.Random(3))
    console = tcod.console.Console(config.width, config.height, order="F")

    first = engine.lightning
    for _ in range(1000):
        engine.tick()
        engine.render(console)
        if engine.strike_count == 2:
            break
    assert engine.strike_count == 2
    assert engine.lightning is not first
    assert engine.lightning.phase is not Phase.DONE


def test_engine_draws_the_bolt():
    config = small_config()
    engine = Engine(config, random.Random(1))
    console = tcod.console.Console(config.width, config.height, order="F")

    while engine.lightning.phase is Phase.SEARCHING:
        engine.tick()
    engine.render(console)

    drawn = {(x, y) for (x, y) in engine.lightning.nodes if 0 <= x < 20 and 0 <= y < 8}
    for x, y in drawn:
        assert console.rgb["ch"][x, y] == ord(engine.lightning.nodes[(x, y)].char)


def test_status_line():
    config = small_config()
    engine = Engine(config, random.Random(1))
    engine.show_status = True
    console = tcod.console.Console(config.width, config.height, order="F")
    engine.render(console)
    assert console.rgb["ch"][0, config.height - 1] == ord("S")


def test_start_column_respects_margins():
    config = small_config(width=30, start_margin=10)
    rng = random.Random(0)
    columns = {setup_game.start_column(config, rng) for _ in range(200)}
    assert min(columns) >= 10
    assert max(columns) <= 20


def test_start_column_on_narrow_grid():
    config = small_config(width=5, start_margin=10)
    rng = random.Random(0)
    for _ in range(50):
        assert 0 <= setup_game.start_column(config, rng) <= 4


def test_new_lightning_uses_config():
    config = small_config(randomness=None, randomness_range=(3, 5))
    lightning = setup_game.new_lightning(config, random.Random(8))
    assert lightning.phase is Phase.SEARCHING
    assert (lightning.y_min, lightning.y_max) == (0, 7)
    assert 3 <= lightning.randomness <= 5

    fixed = setup_game.new_lightning(small_config(randomness=7), random.Random(8))
    assert fixed.randomness == 7


def test_y_range_spans_the_grid():
    assert SimulationConfig(height=30).y_range == (0, 29)


@pytest.mark.parametrize(
    "options",
    [
        dict(width=0),
        dict(height=-1),
        dict(iterations_per_frame=0),
        dict(frame_delay=-0.1),
        dict(randomness_range=(5, 3)),
        dict(randomness=-1),
    ],
)
def test_invalid_config(options):
    with pytest.raises(exceptions.InvalidConfig):
        SimulationConfig(**options).validate()


def test_command_line_options():
    args = main.parse_args(["--width", "40", "--height", "20", "--randomness", "5", "--seed", "1"])
    config = main.config_from_args(args)
    assert (config.width, config.height) == (40, 20)
    assert config.randomness == 5
    assert config.iterations_per_frame == 15
    assert args.seed == 1


def test_command_line_rejects_bad_grid():
    args = main.parse_args(["--width", "0"])
    with pytest.raises(exceptions.InvalidConfig):
        main.config_from_args(args)
