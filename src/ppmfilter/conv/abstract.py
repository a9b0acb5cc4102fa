"""Abstract base classes for convolution operations."""

import numpy as np
from abc import ABC, abstractmethod

from ppmfilter.conv.border import BorderPolicy, pad
from ppmfilter.conv.kernels import Kernel
from ppmfilter.conv.partition import RowRange
from ppmfilter.pixmap.image import Image


class Conv2D(ABC):
    """Abstract base class for 3x3 convolution pipelines."""

    kernel: Kernel
    border: BorderPolicy

    def __init__(self, kernel: Kernel, border: BorderPolicy) -> None:
        """Initialize Conv2D class.

        Args:
            kernel (Kernel): Kernel that will be used.
            border (BorderPolicy): How taps outside the image are treated.
        """
        self.kernel = kernel
        self.border = border

    def pad(self, grid: np.ndarray) -> np.ndarray:
        """Pad the grid by one pixel on each side using the border policy."""
        return pad(grid, self.border)

    def convolve_rows(self, padded: np.ndarray, rows: RowRange) -> np.ndarray:
        """Weighted 3x3 sum for the output rows in the given range.

        Args:
            padded (np.ndarray): Source grid padded by one pixel per side,
                either (h+2, w+2) or (h+2, w+2, channels).
            rows (RowRange): Output rows to compute.

        Returns:
            np.ndarray: Unnormalized sums with the dtype of padded.
        """
        start, end = rows
        width = padded.shape[1] - 2
        acc = np.zeros((end - start, width) + padded.shape[2:], dtype=padded.dtype)
        for ky, kernel_row in enumerate(self.kernel.coefficients):
            for kx, weight in enumerate(kernel_row):
                if weight == 0:
                    continue
                acc += padded[start + ky:end + ky, kx:kx + width] * weight
        return acc

    @abstractmethod
    def run(self, image: Image) -> Image:
        """Run convolution operation on the given image.

        Args:
            image (Image): Image to apply convolution on.

        Returns:
            Image: New convolved image, the input is left untouched.
        """
        pass
