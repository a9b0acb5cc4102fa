"""Named 3x3 convolution kernels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Kernel:
    """A 3x3 integer kernel with its normalization divisor.

    A divisor of 0 or 1 means the raw weighted sum is used. The identity
    kernel has no coefficients and is applied as a plain pixel copy.
    """

    name: str
    coefficients: Optional[tuple[tuple[int, int, int], ...]]
    divisor: int = 0

    @property
    def is_identity(self) -> bool:
        return self.coefficients is None

    @property
    def normalizes(self) -> bool:
        return self.divisor not in (0, 1)


BOX_BLUR = Kernel(
    "box-blur",
    (
        (1, 1, 1),
        (1, 1, 1),
        (1, 1, 1),
    ),
    divisor=9,
)

SHARPEN = Kernel(
    "sharpen",
    (
        (0, -1, 0),
        (-1, 5, -1),
        (0, -1, 0),
    ),
    divisor=1,
)

EDGE_DETECT = Kernel(
    "edge-detect",
    (
        (-1, -1, -1),
        (-1, 8, -1),
        (-1, -1, -1),
    ),
    divisor=0,
)

IDENTITY = Kernel("identity", None)

_PRESETS = {kernel.name: kernel for kernel in (BOX_BLUR, SHARPEN, EDGE_DETECT)}

# Short names and the numeric selectors of the legacy filter binary.
_ALIASES = {
    "blur": BOX_BLUR,
    "1": BOX_BLUR,
    "2": SHARPEN,
    "3": EDGE_DETECT,
}


def get_kernel(identifier: str | int) -> Kernel:
    """Return the kernel for the identifier, or IDENTITY when it is unknown."""
    key = str(identifier).strip().lower()
    return _PRESETS.get(key) or _ALIASES.get(key) or IDENTITY


def available_kernels() -> list[str]:
    return [*_PRESETS, IDENTITY.name]
