"""Block-sampled raster to ASCII conversion.

Each output cell covers ``block_width`` source columns and ``block_height``
source rows and is represented by the single pixel at the centre of that
block (clamped to the image edge). No averaging is done.
"""

from __future__ import annotations

import math
from functools import lru_cache

import numpy as np

from .models import DEFAULT_PALETTE, AsciiFrame, DecodeFailure, GradientPalette, Raster


@lru_cache(maxsize=8)
def _lookup_table(palette: GradientPalette) -> np.ndarray:
    return np.array([palette.char_for(level) for level in range(256)])


def grid_size(width: int, height: int, block_width: int, block_height: int) -> tuple[int, int]:
    """Return ``(columns, rows)`` of the ASCII grid for a ``width`` x ``height`` raster."""
    if block_width < 1 or block_height < 1:
        raise ValueError("Block sizes must be positive")
    return math.ceil(width / block_width), math.ceil(height / block_height)


def sample_positions(extent: int, block: int, count: int) -> np.ndarray:
    return np.minimum(np.arange(count) * block + block // 2, extent - 1)


def rasterize(
    raster: Raster | None,
    block_width: int = 16,
    block_height: int = 9,
    palette: GradientPalette = DEFAULT_PALETTE,
) -> AsciiFrame:
    if raster is None:
        raise DecodeFailure("No raster was produced for this frame")
    width, height = raster.width, raster.height
    if width == 0 or height == 0:
        raise DecodeFailure(f"Cannot rasterize an empty {width}x{height} image")

    columns, rows = grid_size(width, height, block_width, block_height)
    xs = sample_positions(width, block_width, columns)
    ys = sample_positions(height, block_height, rows)

    samples = raster.pixels[np.ix_(ys, xs)]
    cells = _lookup_table(palette)[samples]
    return AsciiFrame(tuple("".join(row) for row in cells))
