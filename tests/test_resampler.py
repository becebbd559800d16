"""Tests for bilinear downscaling."""

import numpy as np
import pytest
from engines.resampler import downscale, downscale_plane
from models.errors import InvalidArgumentError
from models.pixel_buffer import PixelBuffer
from utils.test_images import generate_noise


def test_constant_field_invariant():
    """4x4 uniform 200 -> 2x2 uniform 200."""
    result = downscale(PixelBuffer.filled(4, 4, (200, 200, 200)), 2, 2)
    assert result.shape == (2, 2)
    assert np.all(result.to_array() == 200)


def test_fractional_scale_blends_neighbours():
    plane = np.array([[0, 100, 200]])
    # scale 1.5: output x=1 samples halfway between 100 and 200
    assert downscale_plane(plane, 2, 1).tolist() == [[0, 150]]


def test_truncates_each_blend_stage():
    plane = np.array([
        [0, 0, 0],
        [0, 1, 0],
        [0, 0, 3],
    ])
    # top = trunc(0.5) = 0, bottom = trunc(1.5) = 1, out = trunc(0.5) = 0;
    # a single rounding at the end would give 1
    assert downscale_plane(plane, 2, 2)[1, 1] == 0


def test_same_size_is_identity():
    image = generate_noise(6, 4, seed=9)
    assert downscale(image, 6, 4) == image


@pytest.mark.parametrize("width, height", [(0, 2), (2, 0), (-1, 2), (5, 2), (2, 5)])
def test_invalid_targets(width, height):
    with pytest.raises(InvalidArgumentError):
        downscale(PixelBuffer.filled(4, 4, (1, 1, 1)), width, height)
