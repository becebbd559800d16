"""Tests for the PixelBuffer and Kernel data models."""

import numpy as np
import pytest
from models.errors import DimensionMismatchError, InvalidArgumentError
from models.kernel import Kernel
from models.pixel_buffer import PixelBuffer


def test_planes_are_read_only_copies():
    """Mutating the input array must not change the buffer, and planes reject writes."""
    red = np.full((2, 3), 10)
    image = PixelBuffer(3, 2, red, red, red)
    red[0, 0] = 99
    assert image.red[0, 0] == 10
    with pytest.raises(ValueError):
        image.red[0, 0] = 5


def test_out_of_range_samples_rejected():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.from_array(np.full((2, 2, 3), 256))
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.from_array(np.full((2, 2, 3), -1))


def test_clamp_on_construction():
    image = PixelBuffer.from_array(np.array([[[-20, 128, 300]]]), clamp=True)
    assert (image.red[0, 0], image.green[0, 0], image.blue[0, 0]) == (0, 128, 255)


def test_plane_shape_mismatch():
    with pytest.raises(DimensionMismatchError):
        PixelBuffer(3, 2, np.zeros((2, 3)), np.zeros((2, 3)), np.zeros((3, 2)))


def test_non_positive_dimensions():
    with pytest.raises(InvalidArgumentError):
        PixelBuffer(0, 0, np.zeros((0, 0)), np.zeros((0, 0)), np.zeros((0, 0)))


def test_array_roundtrip_and_equality():
    rgb = np.random.randint(0, 256, (5, 7, 3), dtype=np.uint8)
    image = PixelBuffer.from_array(rgb)
    assert (image.width, image.height) == (7, 5)
    assert np.array_equal(image.to_array(), rgb)
    assert image == PixelBuffer.from_array(rgb.copy())
    assert image != PixelBuffer.from_array(255 - rgb)


def test_kernel_must_be_odd_square():
    assert Kernel(np.ones((3, 3)) / 9).radius == 1
    with pytest.raises(InvalidArgumentError):
        Kernel(np.ones((4, 4)))
    with pytest.raises(InvalidArgumentError):
        Kernel(np.ones((3, 5)))
