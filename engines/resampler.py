"""Bilinear downscaling."""

import numpy as np

from models.errors import InvalidArgumentError
from models.operation_params import DownscaleParams
from models.pixel_buffer import PixelBuffer


def _axis_samples(src_size: int, dst_size: int):
    """Floor neighbour, clamped next neighbour and fractional offset per output index."""
    scale = src_size / dst_size
    coords = np.arange(dst_size) * scale
    lo = np.floor(coords).astype(np.int64)
    hi = np.minimum(lo + 1, src_size - 1)
    return lo, hi, coords - lo


def downscale_plane(plane: np.ndarray, new_width: int, new_height: int) -> np.ndarray:
    """Bilinear interpolation truncated after the horizontal and vertical blends."""
    h, w = plane.shape
    x1, x2, fx = _axis_samples(w, new_width)
    y1, y2, fy = _axis_samples(h, new_height)
    p = plane.astype(np.float64)

    top_left = p[np.ix_(y1, x1)]
    top_right = p[np.ix_(y1, x2)]
    bottom_left = p[np.ix_(y2, x1)]
    bottom_right = p[np.ix_(y2, x2)]

    top = ((1 - fx) * top_left + fx * top_right).astype(np.int64)
    bottom = ((1 - fx) * bottom_left + fx * bottom_right).astype(np.int64)
    fy = fy[:, np.newaxis]
    return ((1 - fy) * top + fy * bottom).astype(np.int64)


def downscale(image: PixelBuffer, new_width: int, new_height: int) -> PixelBuffer:
    """Shrink to new_width x new_height; enlarging is rejected."""
    params = DownscaleParams(new_width, new_height)
    if params.new_width > image.width or params.new_height > image.height:
        raise InvalidArgumentError(
            f"Invalid dimensions for downscaling: {new_width}x{new_height} "
            f"exceeds {image.width}x{image.height}"
        )
    return PixelBuffer.from_planes(
        *(downscale_plane(p, new_width, new_height) for p in image.planes()), clamp=True
    )
