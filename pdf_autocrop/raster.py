"""Pixel sampling over a rendered page raster."""

from __future__ import annotations

import numpy as np

from .models import WHITE


class Raster:
    """Read-only pixel grid of one rendered page.

    Accepts an ``H x W`` gray array or an ``H x W x C`` array with 1, 3 (RGB)
    or 4 (RGBA) channels. A pixel is blank when it equals ``blank_color``
    exactly; for RGBA the blank pixel is also fully opaque.
    """

    def __init__(self, pixels: np.ndarray, blank_color: tuple[int, int, int] = WHITE):
        pixels = np.asarray(pixels)
        if pixels.ndim == 2:
            pixels = pixels[:, :, np.newaxis]
        if pixels.ndim != 3 or pixels.shape[2] not in (1, 3, 4):
            raise ValueError(f"Unsupported raster shape: {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Raster is empty: {pixels.shape[1]}x{pixels.shape[0]}")

        self.pixels = pixels
        self.blank = _blank_for_channels(blank_color, pixels.shape[2])
        self._blank_mask: np.ndarray | None = None

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def color_at(self, x: int, y: int) -> tuple[int, ...]:
        """Return the color of the pixel at column x, row y."""
        return tuple(int(c) for c in self.pixels[y, x])

    def is_blank(self, x: int, y: int) -> bool:
        return bool(self.blank_mask[y, x])

    @property
    def blank_mask(self) -> np.ndarray:
        """Boolean ``H x W`` mask of pixels equal to the blank color."""
        if self._blank_mask is None:
            self._blank_mask = np.all(self.pixels == self.blank, axis=2)
        return self._blank_mask

    def row_is_blank(self, y: int) -> bool:
        """Check whether every pixel of row y across the full width is blank."""
        return bool(self.blank_mask[y, :].all())

    def column_is_blank(self, x: int) -> bool:
        """Check whether every pixel of column x across the full height is blank."""
        return bool(self.blank_mask[:, x].all())

    def to_bgr(self) -> np.ndarray:
        """Return a 3-channel uint8 copy in OpenCV channel order."""
        channels = self.pixels.shape[2]
        pixels = self.pixels.astype(np.uint8, copy=False)
        if channels == 1:
            return np.repeat(pixels, 3, axis=2)
        return np.ascontiguousarray(pixels[:, :, 2::-1])


def _blank_for_channels(blank_color: tuple[int, int, int], channels: int) -> np.ndarray:
    if channels == 1:
        r, g, b = blank_color
        if not (r == g == b):
            raise ValueError(f"Gray raster needs a gray blank color, got {blank_color}")
        return np.array([r])
    if channels == 3:
        return np.array(blank_color)
    return np.array((*blank_color, 255))
