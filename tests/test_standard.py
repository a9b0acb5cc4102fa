"""
Tests for the sequential grayscale edge-detection pipeline.
"""

import numpy as np
import pytest

from conftest import solid
from ppmfilter.conv.border import BorderPolicy
from ppmfilter.conv.kernels import EDGE_DETECT
from ppmfilter.conv.standard import Standard, to_luma
from ppmfilter.pixmap.image import Image


def gray_image(values) -> Image:
    gray = np.array(values, dtype=np.uint8)
    return Image(np.repeat(gray[:, :, np.newaxis], 3, axis=2))


def test_fixed_configuration():
    standard_conv = Standard()
    assert standard_conv.kernel is EDGE_DETECT
    assert standard_conv.border is BorderPolicy.CLAMP


def test_luma_weights():
    image = Image(np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255]]], dtype=np.uint8))
    luma = to_luma(image)
    assert luma.dtype == np.float32
    assert luma[0] == pytest.approx([0.299 * 255, 0.587 * 255, 0.114 * 255], rel=1e-6)


@pytest.mark.parametrize("color", [(0, 0, 0), (128, 128, 128), (255, 255, 255), (10, 200, 30)])
def test_flat_field_is_zero_everywhere(color):
    output = Standard().run(solid(5, 4, color))
    assert (output.width, output.height) == (5, 4)
    assert not output.pixels.any()


def test_single_point_response():
    values = np.zeros((5, 5), dtype=np.uint8)
    values[2, 2] = 20
    output = Standard().run(gray_image(values)).pixels[..., 0]

    expected = np.zeros((5, 5), dtype=np.uint8)
    expected[1:4, 1:4] = 20
    expected[2, 2] = 160
    assert np.array_equal(output, expected)


def test_clamp_border_replicates_edge_pixels():
    values = np.zeros((3, 3), dtype=np.uint8)
    values[0, 0] = 10
    output = Standard().run(gray_image(values)).pixels[..., 0]
    # Three of the eight neighbour taps of the corner clamp back onto itself.
    assert output[0, 0] == 8 * 10 - 3 * 10
    assert output[0, 1] == 2 * 10
    assert output[1, 1] == 10
    assert output[2, 2] == 0


def test_response_is_absolute_and_clamped():
    values = np.zeros((3, 3), dtype=np.uint8)
    values[1, 1] = 200
    output = Standard().run(gray_image(values)).pixels[..., 0]
    assert output[1, 1] == 255
    assert output[0, 0] == 200


def test_output_is_gray(noise_image):
    output = Standard().run(noise_image).pixels
    assert np.array_equal(output[..., 0], output[..., 1])
    assert np.array_equal(output[..., 0], output[..., 2])


def test_input_is_not_modified(noise_image):
    before = noise_image.pixels.copy()
    Standard().run(noise_image)
    assert np.array_equal(noise_image.pixels, before)


def reference_edges(image: Image) -> np.ndarray:
    """Pixel-by-pixel clamp-border Laplacian in single precision."""
    h, w = image.height, image.width
    weights = [np.float32(0.299), np.float32(0.587), np.float32(0.114)]
    gray = [
        [
            weights[0] * np.float32(image.pixels[y, x, 0])
            + weights[1] * np.float32(image.pixels[y, x, 1])
            + weights[2] * np.float32(image.pixels[y, x, 2])
            for x in range(w)
        ]
        for y in range(h)
    ]
    out = np.zeros_like(image.pixels)
    for y in range(h):
        for x in range(w):
            acc = np.float32(0.0)
            for ky in range(-1, 2):
                for kx in range(-1, 2):
                    iy = min(max(y + ky, 0), h - 1)
                    ix = min(max(x + kx, 0), w - 1)
                    weight = np.float32(8.0) if ky == 0 and kx == 0 else np.float32(-1.0)
                    acc = np.float32(acc + gray[iy][ix] * weight)
            value = min(abs(acc), np.float32(255.0))
            out[y, x] = int(np.float32(value + np.float32(0.5)))
    return out


@pytest.mark.parametrize("seed", [0, 7, 42])
def test_matches_pixelwise_reference(seed):
    rng = np.random.default_rng(seed)
    image = Image(rng.integers(0, 256, size=(31, 37, 3), dtype=np.uint8))
    assert np.array_equal(Standard().run(image).pixels, reference_edges(image))
