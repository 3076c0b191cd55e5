"""Renderer package turning decoded frames into ASCII grids."""

from .decode import decode_frame, image_to_raster
from .models import (
    DEFAULT_GRADIENT,
    DEFAULT_PALETTE,
    ROW_SEPARATOR,
    AsciiFrame,
    DecodeFailure,
    GradientPalette,
    Raster,
)
from .rasterizer import grid_size, rasterize

__all__ = [
    "AsciiFrame",
    "DEFAULT_GRADIENT",
    "DEFAULT_PALETTE",
    "DecodeFailure",
    "GradientPalette",
    "ROW_SEPARATOR",
    "Raster",
    "decode_frame",
    "grid_size",
    "image_to_raster",
    "rasterize",
]
