"""Image engines - pure computation on PixelBuffer values, no catalog access."""

from .point_ops import (
    extract_component,
    greyscale,
    sepia,
    brighten,
    flip,
    rgb_split,
    rgb_combine,
)
from .convolution import convolve, blur, sharpen
from .histogram import compute_histograms, find_peak, color_correct, levels_adjust, render_histogram
from .wavelet import haar_forward, haar_inverse, compress, compress_reconstruct
from .resampler import downscale
from .compositor import apply_masked, apply_split, merge_with_mask, merge_split

__all__ = [
    'extract_component',
    'greyscale',
    'sepia',
    'brighten',
    'flip',
    'rgb_split',
    'rgb_combine',
    'convolve',
    'blur',
    'sharpen',
    'compute_histograms',
    'find_peak',
    'color_correct',
    'levels_adjust',
    'render_histogram',
    'haar_forward',
    'haar_inverse',
    'compress',
    'compress_reconstruct',
    'downscale',
    'apply_masked',
    'apply_split',
    'merge_with_mask',
    'merge_split',
]
