"""Image decode collaborator: raw PNG bytes to a grayscale raster."""

from __future__ import annotations

import struct
from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from .models import DecodeFailure, Raster


def decode_frame(data: bytes) -> Raster:
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
            if image.mode != "L":
                image = image.convert("L")
            pixels = np.asarray(image, dtype=np.uint8)
    except (UnidentifiedImageError, OSError, EOFError, SyntaxError, ValueError, struct.error) as exc:
        raise DecodeFailure(f"Failed to create image from frame data: {exc}") from exc

    if pixels.size == 0:
        raise DecodeFailure("Decoded frame has no pixels")
    return Raster(pixels)


def image_to_raster(image: Image.Image) -> Raster:
    if image.mode != "L":
        image = image.convert("L")
    return Raster(np.asarray(image, dtype=np.uint8))
