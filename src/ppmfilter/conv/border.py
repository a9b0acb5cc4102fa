"""Border policies for 3x3 convolution."""

from enum import Enum

import numpy as np


class BorderPolicy(Enum):
    """How taps that fall outside the image are treated.

    CLAMP replaces an out-of-range coordinate with the nearest valid one.
    SKIP drops the tap from the sum and leaves the divisor untouched.
    """

    CLAMP = "clamp"
    SKIP = "skip"


def pad(grid: np.ndarray, policy: BorderPolicy, radius: int = 1) -> np.ndarray:
    """Pad the two spatial axes of grid by radius according to policy.

    Any trailing channel axis is left unpadded. Skipped taps read zero,
    which contributes nothing to a weighted sum.
    """
    widths = [(radius, radius), (radius, radius)] + [(0, 0)] * (grid.ndim - 2)
    if policy is BorderPolicy.CLAMP:
        return np.pad(grid, widths, mode="edge")
    return np.pad(grid, widths, mode="constant", constant_values=0)
