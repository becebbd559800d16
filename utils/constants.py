"""Named kernels and per-pixel transform weights."""

import numpy as np

from models.kernel import Kernel

BLUR_KERNEL = Kernel(np.array([
    [1 / 16, 1 / 8, 1 / 16],
    [1 / 8, 1 / 4, 1 / 8],
    [1 / 16, 1 / 8, 1 / 16],
]), name="blur")

SHARPEN_KERNEL = Kernel(np.array([
    [-1 / 8, -1 / 8, -1 / 8, -1 / 8, -1 / 8],
    [-1 / 8, 1 / 4, 1 / 4, 1 / 4, -1 / 8],
    [-1 / 8, 1 / 4, 1.0, 1 / 4, -1 / 8],
    [-1 / 8, 1 / 4, 1 / 4, 1 / 4, -1 / 8],
    [-1 / 8, -1 / 8, -1 / 8, -1 / 8, -1 / 8],
]), name="sharpen")

# Rows produce R', G', B' from (R, G, B)
SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
])

# Rec. 709 luma weights
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

CHANNELS = ('red', 'green', 'blue')
DERIVED_COMPONENTS = ('value', 'intensity', 'luma')
COMPONENTS = CHANNELS + DERIVED_COMPONENTS

# Peak search window for color correction, [low, high)
PEAK_SEARCH_LOW = 10
PEAK_SEARCH_HIGH = 245

HISTOGRAM_SIZE = 256
