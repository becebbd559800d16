"""Shared utilities."""

from .constants import BLUR_KERNEL, SHARPEN_KERNEL, COMPONENTS
from .metrics import compute_psnr_ssim, coefficient_stats, Timer
from .test_images import (
    generate_colored_checkerboard,
    generate_thin_stripes,
    generate_gradient,
    generate_noise,
    generate_demo_image,
)
from .image_io import load_image, save_image, decode_ppm, encode_ppm
from .log import get_logger, setup_logging

__all__ = [
    'BLUR_KERNEL',
    'SHARPEN_KERNEL',
    'COMPONENTS',
    'compute_psnr_ssim',
    'coefficient_stats',
    'Timer',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'generate_gradient',
    'generate_noise',
    'generate_demo_image',
    'load_image',
    'save_image',
    'decode_ppm',
    'encode_ppm',
    'get_logger',
    'setup_logging',
]
