"""Module for the sequential edge-detection pipeline."""

import logging
import time

import numpy as np

from ppmfilter.conv.abstract import Conv2D
from ppmfilter.conv.border import BorderPolicy
from ppmfilter.conv.kernels import EDGE_DETECT
from ppmfilter.conv.partition import RowRange
from ppmfilter.pixmap.image import CHANNELS, Image

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights.
LUMA_WEIGHTS = (np.float32(0.299), np.float32(0.587), np.float32(0.114))


def to_luma(image: Image) -> np.ndarray:
    """Convert an RGB image to a single-channel float32 intensity grid."""
    rgb = image.pixels.astype(np.float32)
    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    return r_weight * rgb[..., 0] + g_weight * rgb[..., 1] + b_weight * rgb[..., 2]


class Standard(Conv2D):
    """Single-threaded Laplacian edge detection on the luma channel.

    The kernel is fixed to edge-detect and out-of-range taps are clamped
    to the nearest edge pixel. The result is gray, replicated to RGB.
    """

    def __init__(self) -> None:
        super().__init__(EDGE_DETECT, BorderPolicy.CLAMP)

    def run(self, image: Image) -> Image:
        """Run edge detection on the given image.

        Args:
            image (Image): Image to apply convolution on.

        Returns:
            Image: Grayscale edge map with the same dimensions.
        """
        start_time = time.perf_counter()

        gray = to_luma(image)
        padded = self.pad(gray)
        response = self.convolve_rows(padded, RowRange(0, image.height))

        magnitude = np.minimum(np.abs(response), np.float32(255.0))
        edges = (magnitude + np.float32(0.5)).astype(np.uint8)
        output = Image(np.repeat(edges[:, :, np.newaxis], CHANNELS, axis=2))

        elapsed = time.perf_counter() - start_time
        logger.info("Standard convolution took %.6f seconds", elapsed)
        return output
