from __future__ import annotations

from typing import Mapping, Tuple, TYPE_CHECKING

import numpy as np

import color
import tile_types

if TYPE_CHECKING:
    from tcod.console import Console

GLOW_SIGMA = 1.1
GLOW_RADIUS = 20
# Field value where there is no bolt, keeps empty sky dark after blurring.
EMPTY_FIELD = -10.0


def gaussian_kernel(sigma: float, radius: int) -> np.ndarray:
    """Normalized 1D gaussian weights for offsets -radius..radius."""
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.exp(-0.5 * (offsets / sigma) ** 2) / (sigma * np.sqrt(2 * np.pi))
    return kernel / kernel.sum()


def sample_field(
        values: Mapping[Tuple[int, int], float],
        width: int,
        height: int,
        radius: int = GLOW_RADIUS,
        empty: float = EMPTY_FIELD,
) -> np.ndarray:
    """
    Lay point values out on a grid widened by `radius` columns on each side.

    The horizontal blur pass reads that far past the left and right edges,
    and a bolt is free to wander there, so those columns hold real samples.
    Rows outside the grid are not sampled.
    """
    field = np.full((width + 2 * radius, height), empty, dtype=np.float64, order="F")
    for (x, y), value in values.items():
        if -radius <= x < width + radius and 0 <= y < height:
            field[x + radius, y] = value
    return field


def gaussian_blur(field: np.ndarray, sigma: float = GLOW_SIGMA, radius: int = GLOW_RADIUS) -> np.ndarray:
    """
    Separable blur of a field produced by sample_field.

    Horizontal pass first, over the widened field, then vertical with zero
    beyond the top and bottom rows. Returns a (width, height) array.
    """
    kernel = gaussian_kernel(sigma, radius)
    width = field.shape[0] - 2 * radius
    height = field.shape[1]

    horizontal = np.zeros((width, height), dtype=np.float64, order="F")
    for i, weight in enumerate(kernel):
        horizontal += weight * field[i : i + width, :]

    padded = np.pad(horizontal, ((0, 0), (radius, radius)))
    blurred = np.zeros((width, height), dtype=np.float64, order="F")
    for i, weight in enumerate(kernel):
        blurred += weight * padded[:, i : i + height]
    return blurred


def cells_to_graphics(cells: np.ndarray) -> np.ndarray:
    """Turn cell_dt brightness values into console tiles."""
    graphics = np.empty(cells.shape, dtype=tile_types.graphic_dt, order="F")
    graphics["ch"] = cells["ch"]
    graphics["fg"] = color.intensity_color(cells["fg"])
    graphics["bg"] = color.intensity_color(cells["bg"])
    return graphics


def render_lightning(console: Console, cells: np.ndarray) -> None:
    """Paint a rendered bolt onto the console, clipped to both sizes."""
    width = min(console.width, cells.shape[0])
    height = min(console.height, cells.shape[1])
    console.rgb[0:width, 0:height] = cells_to_graphics(cells[0:width, 0:height])


def render_status(console: Console, text: str) -> None:
    console.print(0, console.height - 1, text, fg=color.white)
