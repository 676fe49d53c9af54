"""
Procedural lightning strike.

A bolt grows from its start cell toward the bottom of its vertical range
through a randomized best-first search. Every committed cell remembers the
cell it was reached from, so the explored area forms a tree of branches.
Once a branch crosses the far boundary the path back to the root becomes
the main stroke, which then discharges (brightens) and fades out.

Phases run strictly in order:
    SEARCHING -> DISCHARGING -> FADING -> DONE
"""
from __future__ import annotations

import heapq
import itertools
import logging
import math
import random
from enum import Enum, IntFlag
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

import numpy as np

import exceptions
import render_functions
import tile_types

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# Box drawing glyphs indexed by a shape bitmask (RIGHT=1, UP=2, LEFT=4, DOWN=8).
SINGLE_LINES = "   └ ─┘┴ ┌│├┐┬┤┼"
DOUBLE_LINES = "   ╚ ═╝╩ ╔║╠╗╦╣╬"

INITIAL_INTENSITY = 0.7
# Above this a cell is drawn with the double line glyphs.
BRIGHT_INTENSITY = 1.0
SEARCH_DRAIN = 0.002
DISCHARGE_DRAIN = 0.01
PHASE_TICKS = (40, 80)
GLOW_FACTOR = 0.8


class Direction(IntFlag):
    RIGHT = 1
    UP = 2
    LEFT = 4
    DOWN = 8


DIRECTIONS = (Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN)

_OPPOSITES = {
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.LEFT: Direction.RIGHT,
    Direction.DOWN: Direction.UP,
}


def opposite(direction: Direction) -> Direction:
    try:
        return _OPPOSITES[direction]
    except KeyError:
        raise ValueError(f"{direction!r} is not a single direction") from None


def moved(position: Position, directions: int) -> Position:
    """Step once for every direction bit set in `directions`."""
    x, y = position
    if directions & Direction.RIGHT:
        x += 1
    if directions & Direction.LEFT:
        x -= 1
    if directions & Direction.DOWN:
        y += 1
    if directions & Direction.UP:
        y -= 1
    return x, y


class Phase(Enum):
    SEARCHING = "searching"
    DISCHARGING = "discharging"
    FADING = "fading"
    DONE = "done"


class Node:
    """A cell that belongs, or may come to belong, to the bolt."""

    def __init__(
            self,
            pos: Position,
            origin_direction: Direction,
            traveled_distance: int,
            total_cost: float,
            parent: Optional[Node] = None,
    ):
        self.pos = pos
        self.origin_direction = origin_direction  # Points back toward the parent.
        self.traveled_distance = traveled_distance
        self.total_cost = total_cost
        self.parent = parent
        self.shape = int(origin_direction)
        self.intensity = INITIAL_INTENSITY

    @property
    def char(self) -> str:
        if self.intensity > BRIGHT_INTENSITY:
            return DOUBLE_LINES[self.shape]
        return SINGLE_LINES[self.shape]

    def add_direction(self, direction: int) -> None:
        self.shape |= direction

    def ancestors(self):
        """Yield this node, its parent, and so on up to the root."""
        node = self
        while node is not None:
            yield node
            node = node.parent

    def path(self) -> Set[Node]:
        return set(self.ancestors())

    def __repr__(self) -> str:
        return (
            f"Node(pos={self.pos}, distance={self.traveled_distance}, "
            f"shape={self.shape}, intensity={self.intensity:.3f})"
        )


class Lightning:
    """
    One strike, from first spark to darkness.

    Call iterate() to advance it and render() to look at it. Once phase is
    DONE the instance has nothing more to do and should be replaced.
    """

    def __init__(
            self,
            start: Position,
            y_range: Tuple[int, int],
            randomness: int,
            rng: Optional[random.Random] = None,
    ):
        y_min, y_max = y_range
        assert y_min <= y_max, f"Inverted vertical range {y_range}"
        assert randomness >= 0, "randomness can not be negative"
        self.y_min, self.y_max = y_min, y_max
        self.randomness = randomness
        self.rng = rng if rng is not None else random

        self._frontier: List[Tuple[float, int, Node]] = []
        self._sequence = itertools.count()
        self._nodes: Dict[Position, Node] = {}

        self._phase = Phase.SEARCHING
        self.state_counter = 0
        self.final_path: Set[Node] = set()
        self.fade_amount = 0.0
        self._glow: Optional[np.ndarray] = None

        self._push(start, Direction.UP, 0, None)
        logger.debug(
            "New strike from %s over y %d..%d, randomness %d", start, y_min, y_max, randomness
        )

    @property
    def phase(self) -> Phase:
        return self._phase

    def current_phase(self) -> Phase:
        return self._phase

    @property
    def nodes(self) -> Mapping[Position, Node]:
        """Read only view of the committed cells."""
        return MappingProxyType(self._nodes)

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    def _cost(self, pos: Position, traveled_distance: int) -> float:
        jitter = round(math.exp(self.rng.random() * self.randomness))
        return traveled_distance + self.y_max - pos[1] + jitter

    def _push(
            self,
            pos: Position,
            origin_direction: Direction,
            traveled_distance: int,
            parent: Optional[Node],
    ) -> Node:
        node = Node(
            pos, origin_direction, traveled_distance, self._cost(pos, traveled_distance), parent
        )
        heapq.heappush(self._frontier, (node.total_cost, next(self._sequence), node))
        return node

    def _next_node_to_expand(self) -> Node:
        # Positions can be queued several times; stale entries are dropped here.
        while self._frontier:
            _, _, node = heapq.heappop(self._frontier)
            if node.pos not in self._nodes:
                return node
        raise exceptions.FrontierExhausted(
            f"Nothing left to expand after {len(self._nodes)} cells"
        )

    def iterate(self) -> None:
        self._glow = None
        if self._phase is Phase.SEARCHING:
            self._search()
        elif self._phase is Phase.DISCHARGING:
            self._redistribute_intensity(DISCHARGE_DRAIN, self.final_path)
            self._average_intensity(self.final_path)
            self.state_counter -= 1
            if self.state_counter == 0:
                self._start_fading()
        elif self._phase is Phase.FADING:
            for node in self._nodes.values():
                node.intensity -= self.fade_amount
            self.state_counter -= 1
            if self.state_counter == 0:
                self._end()

    def _search(self) -> None:
        node = self._next_node_to_expand()
        neighbour = self._nodes.get(moved(node.pos, node.origin_direction))
        if neighbour is not None:
            neighbour.add_direction(opposite(node.origin_direction))
        self._nodes[node.pos] = node

        current_path = node.path()
        if node.pos[1] > self.y_max:
            self._start_discharging(node, current_path)
            return

        for direction in DIRECTIONS:
            new_pos = moved(node.pos, direction)
            if new_pos in self._nodes or new_pos[1] < self.y_min:
                continue
            self._push(new_pos, opposite(direction), node.traveled_distance + 1, node)
        self._redistribute_intensity(SEARCH_DRAIN, current_path)

    def _start_discharging(self, node: Node, path: Set[Node]) -> None:
        node.add_direction(Direction.DOWN)
        self.final_path = path
        self._phase = Phase.DISCHARGING
        self.state_counter = self.rng.randint(*PHASE_TICKS)
        self._average_intensity(path)

        # Keep only the stroke itself on the main path, dropping branch junctions.
        for n in path:
            n.shape = 0
        node.add_direction(Direction.DOWN)
        child = None
        for n in node.ancestors():
            if child is not None:
                n.add_direction(opposite(child.origin_direction))
            n.add_direction(n.origin_direction)
            child = n
        logger.info(
            "Bolt reached the ground at %s: %d cells explored, stroke length %d, discharging for %d ticks",
            node.pos, len(self._nodes), len(path), self.state_counter,
        )

    def _start_fading(self) -> None:
        self._phase = Phase.FADING
        self.state_counter = self.rng.randint(*PHASE_TICKS)
        peak = max(n.intensity for n in self._nodes.values())
        self.fade_amount = peak / self.state_counter
        logger.debug("Fading over %d ticks from peak %.3f", self.state_counter, peak)

    def _end(self) -> None:
        for node in self._nodes.values():
            node.intensity = 0.0
        self._phase = Phase.DONE
        logger.debug("Strike finished")

    def _redistribute_intensity(self, amount: float, targets: Set[Node]) -> float:
        """
        Drain `amount` of every cell's intensity and boost the targets.

        The boost is a flat (1 + 4 * amount) factor rather than a share of
        the drained energy, so total intensity is not conserved. Returns the
        drained energy per target.
        """
        energy = 0.0
        for node in self._nodes.values():
            drained = node.intensity * amount
            node.intensity -= drained
            energy += drained
        energy /= len(targets)
        for node in targets:
            node.intensity *= 1 + amount * 4
        return energy

    @staticmethod
    def _average_intensity(targets: Set[Node]) -> None:
        mean = sum(n.intensity for n in targets) / len(targets)
        for node in targets:
            node.intensity += mean

    def glow(self, width: int, height: int) -> np.ndarray:
        """Blurred intensity field behind the glyphs, cached until the next tick."""
        if self._glow is None or self._glow.shape != (width, height):
            field = render_functions.sample_field(
                {pos: n.intensity for pos, n in self._nodes.items()}, width, height
            )
            self._glow = render_functions.gaussian_blur(field)
        return self._glow

    def render(self, width: int, height: int) -> np.ndarray:
        """Return a (width, height) array of tile_types.cell_dt."""
        cells = np.full((width, height), fill_value=tile_types.BLANK_CELL, order="F")
        bg = np.maximum(0.0, self.glow(width, height) * GLOW_FACTOR)
        cells["bg"] = bg
        cells["fg"] = bg
        for (x, y), node in self._nodes.items():
            if 0 <= x < width and 0 <= y < height:
                cells[x, y] = (ord(node.char), max(node.intensity, bg[x, y]), bg[x, y])
        return cells
