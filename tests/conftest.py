import builtins
import errno
import io

import numpy as np
import pytest

from ppmfilter.pixmap.image import Image


def solid(width: int, height: int, color: tuple[int, int, int]) -> Image:
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return Image(pixels)


@pytest.fixture
def solid_red_image() -> Image:
    """4x4 solid red image."""
    return solid(4, 4, (255, 0, 0))


@pytest.fixture
def noise_image() -> Image:
    """Deterministic random 23x17 image."""
    rng = np.random.default_rng(1234)
    return Image(rng.integers(0, 256, size=(17, 23, 3), dtype=np.uint8))


@pytest.fixture
def write_file(tmp_path):
    """Write raw bytes to a file under tmp_path and return its path."""
    def _write(data: bytes, name: str = "image.ppm"):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write


class FullDisk(io.BytesIO):
    """Writable file object whose writes fail with ENOSPC."""

    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")


def open_with_full_disk(path, mode="r", *args, **kwargs):
    """Stand-in for open() where every write-mode file is on a full disk."""
    if "w" in mode:
        return FullDisk()
    return builtins.open(path, mode, *args, **kwargs)
