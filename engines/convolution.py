"""Kernel convolution with clamp-to-edge borders."""

import numpy as np
from scipy.ndimage import correlate

from models.kernel import Kernel
from models.pixel_buffer import PixelBuffer
from utils.constants import BLUR_KERNEL, SHARPEN_KERNEL


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Nearest integer, .5 rounds towards +inf."""
    return np.floor(values + 0.5).astype(np.int64)


def convolve_plane(plane: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Weighted sum over the kernel footprint, edge pixels replicated.

    Kernel[ki][kj] weights source[row + ki - r][col + kj - r], which is a
    correlation in scipy's terms; mode='nearest' is the edge clamp.
    """
    summed = correlate(plane.astype(np.float64), kernel.weights, mode='nearest')
    return np.clip(round_half_up(summed), 0, 255)


def convolve(image: PixelBuffer, kernel: Kernel) -> PixelBuffer:
    """Apply kernel to every channel; output has the input's size."""
    return PixelBuffer.from_planes(*(convolve_plane(p, kernel) for p in image.planes()))


def blur(image: PixelBuffer) -> PixelBuffer:
    return convolve(image, BLUR_KERNEL)


def sharpen(image: PixelBuffer) -> PixelBuffer:
    return convolve(image, SHARPEN_KERNEL)
