from __future__ import annotations

from typing import Union

import numpy as np

black = (0, 0, 0)
white = (0xFF, 0xFF, 0xFF)

# Bolt palette: dark blue glow, white hot core.
RG_SLOPE, RG_OFFSET = 2.0, 2.0
BLUE_SLOPE, BLUE_OFFSET = 3.0, 2.0
OVERSHOOT = 1.03


def _channel(intensity: np.ndarray, slope: float, offset: float) -> np.ndarray:
    level = OVERSHOOT * (np.tanh(slope * intensity - offset) + 1.0) / 2.0
    # Round half up, then clamp to a displayable byte.
    return np.clip(np.floor(level * 255 + 0.5), 0, 255).astype(np.uint8)


def intensity_color(intensity: Union[float, np.ndarray]) -> np.ndarray:
    """
    Map brightness to RGB.

    Accepts a scalar or an array of any shape; the result has one more
    trailing axis of length 3. Red and green share one curve, blue rises
    earlier so faint light reads as blue.
    """
    intensity = np.asarray(intensity, dtype=np.float64)
    rg = _channel(intensity, RG_SLOPE, RG_OFFSET)
    b = _channel(intensity, BLUE_SLOPE, BLUE_OFFSET)
    return np.stack((rg, rg, b), axis=-1)
