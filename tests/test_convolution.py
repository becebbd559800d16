"""Tests for kernel convolution."""

import numpy as np
import pytest
from engines.convolution import blur, convolve, sharpen
from models.kernel import Kernel
from models.pixel_buffer import PixelBuffer
from utils.test_images import generate_colored_checkerboard, generate_noise


def _row(values) -> PixelBuffer:
    """1 x N image with the values in the red plane."""
    red = np.array([values])
    zeros = np.zeros_like(red)
    return PixelBuffer.from_planes(red, zeros, zeros)


def test_output_shape_and_range():
    """Any kernel keeps the size and yields samples in [0, 255]."""
    image = generate_noise(11, 7, seed=5)
    harsh = Kernel(np.array([[-4.0, 0, 4.0], [-8.0, 1, 8.0], [-4.0, 0, 4.0]]))
    for kernel_result in (blur(image), sharpen(image), convolve(image, harsh)):
        assert kernel_result.shape == image.shape
        arr = kernel_result.to_array()
        assert arr.min() >= 0 and arr.max() <= 255


def test_constant_image_unchanged():
    """Both named kernels sum to 1, so flat regions survive, borders included."""
    flat = PixelBuffer.filled(6, 5, (90, 140, 210))
    assert blur(flat) == flat
    assert sharpen(flat) == flat


def test_edge_clamp_not_zero_padding():
    """Right border replicates the last pixel instead of reading zeros."""
    result = blur(_row([0, 0, 160]))
    # Zero padding would give 80 at the last column
    assert list(result.red[0]) == [0, 40, 120]


def test_rounds_half_up():
    result = blur(_row([0, 0, 2]))
    # 0.5 -> 1 and 1.5 -> 2
    assert list(result.red[0]) == [0, 1, 2]


def test_identity_kernel():
    image = generate_noise(5, 5, seed=6)
    identity = np.zeros((5, 5))
    identity[2, 2] = 1.0
    assert convolve(image, Kernel(identity)) == image


def test_sharpen_increases_contrast():
    board = generate_colored_checkerboard(32, 8)
    sharpened = sharpen(board).to_array().astype(int)
    assert sharpened.max() - sharpened.min() >= board.to_array().max() - board.to_array().min()
