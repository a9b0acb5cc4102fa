"""Image model shared by the codec and the filter pipelines."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

MAX_VALUE = 255
CHANNELS = 3


@dataclass(eq=False)
class Image:
    """
    RGB pixel grid backed by one flat uint8 buffer.

    pixels has shape (height, width, 3) and is C-contiguous, so the row
    stride is 3 * width bytes and (x, y, channel) indexing is O(1).
    """
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != CHANNELS:
            raise ValueError(f"Expected (height, width, 3) pixels, got {self.pixels.shape}")
        if self.pixels.shape[0] <= 0 or self.pixels.shape[1] <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.pixels.shape[:2]}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        self.pixels = np.ascontiguousarray(self.pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @classmethod
    def blank(cls, width: int, height: int) -> Image:
        """Allocate a zero-filled image of the given size."""
        return cls(np.zeros((height, width, CHANNELS), dtype=np.uint8))

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> Image:
        """Build an image from exactly 3 * width * height interleaved RGB bytes."""
        expected = CHANNELS * width * height
        if len(data) != expected:
            raise ValueError(f"Expected {expected} pixel bytes, got {len(data)}")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape((height, width, CHANNELS))
        # frombuffer views are read-only; keep an owned, writable copy.
        return cls(pixels.copy())

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and np.array_equal(self.pixels, other.pixels)
