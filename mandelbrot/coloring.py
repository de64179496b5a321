"""Conversion of escape counts to RGB pixels."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from matplotlib.colors import hsv_to_rgb

from .renderer import INSIDE, IterationGrid

INSIDE_COLOR = (0, 0, 0)


@dataclass(frozen=True)
class PixelBuffer:
    """RGB image of shape ``(height, width, 3)``; ``buffer[x, y]`` and ``buffer[x][y]`` address column ``x``, row ``y``."""

    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def __getitem__(self, key):
        if isinstance(key, tuple):
            x, y = key
            r, g, b = self.pixels[y, x]
            return int(r), int(g), int(b)
        # A single index selects column ``key`` as a ``(height, 3)`` array.
        return self.pixels[:, key]


def colorize(grid: IterationGrid, colored: bool = True) -> PixelBuffer:
    """Map every escape count to a colour.

    Points inside the set (count 255) are black. Other counts are normalised
    with ``count / 254``; in pseudocolor mode the hue is ``sqrt(value) + 0.5``
    taken modulo 1 at full saturation and brightness, in grayscale mode the
    brightness is ``value`` itself.
    """

    counts = grid.counts
    value = counts.astype(np.float64) / 254.0

    hsv = np.empty(counts.shape + (3,), dtype=np.float64)
    if colored:
        hsv[..., 0] = np.mod(np.sqrt(value) + 0.5, 1.0)
        hsv[..., 1] = 1.0
        hsv[..., 2] = 1.0
    else:
        hsv[..., 0] = 0.0
        hsv[..., 1] = 0.0
        hsv[..., 2] = np.clip(value, 0.0, 1.0)

    inside = counts == INSIDE
    # Keep hsv_to_rgb's input range valid for the cells that are overwritten below.
    hsv[inside] = 0.0

    rgb = hsv_to_rgb(hsv)
    pixels = np.floor(rgb * 255.0 + 0.5).astype(np.uint8)
    pixels[inside] = INSIDE_COLOR
    return PixelBuffer(pixels)
