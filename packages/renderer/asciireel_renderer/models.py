"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

DEFAULT_GRADIENT = "$@B%8&WM#*+=-:. "
ROW_SEPARATOR = "\n"


class DecodeFailure(ValueError):
    """A frame or container record could not be decoded."""


@dataclass(frozen=True)
class Raster:
    """Grayscale pixels addressed as ``pixels[y, x]``."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 2:
            raise DecodeFailure(f"Raster must be two-dimensional, got shape {self.pixels.shape}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def luminance(self, x: int, y: int) -> int:
        return int(self.pixels[y, x])


@dataclass(frozen=True)
class GradientPalette:
    chars: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.chars) < 2:
            raise ValueError("Palette needs at least two characters")
        if any(len(c) != 1 or c in "\r\n" for c in self.chars):
            raise ValueError("Palette entries must be single non-newline characters")

    @classmethod
    def from_string(cls, chars: str = DEFAULT_GRADIENT) -> "GradientPalette":
        return cls(tuple(chars))

    def __len__(self) -> int:
        return len(self.chars)

    def index_for(self, luminance: int) -> int:
        top = len(self.chars) - 1
        luminance = max(0, min(255, int(luminance)))
        index = -(-top * luminance // 255)
        return max(0, min(top, index))

    def char_for(self, luminance: int) -> str:
        return self.chars[self.index_for(luminance)]


DEFAULT_PALETTE = GradientPalette.from_string(DEFAULT_GRADIENT)


@dataclass(frozen=True)
class AsciiFrame:
    rows: tuple[str, ...]

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def text(self) -> str:
        return ROW_SEPARATOR.join(self.rows)

    @classmethod
    def from_text(cls, text: str) -> "AsciiFrame":
        return cls(tuple(text.split(ROW_SEPARATOR)))
