import numpy as np

# Tile graphics structured type compatible with Console.rgb.
graphic_dt = np.dtype(
    [
        ("ch", np.int32),  # Unicode codepoint.
        ("fg", "3B"),  # 3 unsigned bytes, for RGB colors.
        ("bg", "3B"),
    ]
)

# What the simulation hands to the renderer: a glyph plus two brightness
# values, turned into colors later by color.intensity_color.
cell_dt = np.dtype(
    [
        ("ch", np.int32),
        ("fg", np.float64),
        ("bg", np.float64),
    ]
)


def new_cell(ch: str = " ", fg: float = 0.0, bg: float = 0.0) -> np.ndarray:
    return np.array((ord(ch), fg, bg), dtype=cell_dt)


BLANK_CELL = new_cell()
