"""Per-pixel transforms: components, sepia, brightness, flips, channel split/combine."""

import numpy as np
from typing import Tuple

from models.errors import DimensionMismatchError, InvalidArgumentError
from models.pixel_buffer import PixelBuffer
from utils.constants import COMPONENTS, LUMA_WEIGHTS, SEPIA_MATRIX


def _planes_int(image: PixelBuffer) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    return tuple(p.astype(np.int32) for p in image.planes())


def _replicate(image: PixelBuffer, value: np.ndarray) -> PixelBuffer:
    return PixelBuffer(image.width, image.height, value, value, value)


def value_component(image: PixelBuffer) -> np.ndarray:
    """max(r, g, b)."""
    return np.maximum(np.maximum(image.red, image.green), image.blue)


def intensity_component(image: PixelBuffer) -> np.ndarray:
    """floor((r + g + b) / 3)."""
    r, g, b = _planes_int(image)
    return (r + g + b) // 3


def luma_component(image: PixelBuffer) -> np.ndarray:
    """Rec. 709 luma, truncated."""
    r, g, b = _planes_int(image)
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * r + wg * g + wb * b).astype(np.int32)


def extract_component(image: PixelBuffer, component: str) -> PixelBuffer:
    """Channel isolation (red/green/blue) or derived greyscale (value/intensity/luma)."""
    key = component.lower()
    if key not in COMPONENTS:
        raise InvalidArgumentError(f"Unknown component or channel: {component}")

    if key in ('red', 'green', 'blue'):
        zeros = np.zeros(image.shape, dtype=np.uint8)
        planes = [plane if name == key else zeros
                  for name, plane in zip(('red', 'green', 'blue'), image.planes())]
        return PixelBuffer(image.width, image.height, *planes)

    derived = {
        'value': value_component,
        'intensity': intensity_component,
        'luma': luma_component,
    }[key]
    return _replicate(image, derived(image))


def greyscale(image: PixelBuffer) -> PixelBuffer:
    """Average of the three channels in every channel."""
    return _replicate(image, intensity_component(image))


def sepia(image: PixelBuffer) -> PixelBuffer:
    """Sepia tone matrix, truncated then clamped."""
    r, g, b = (p.astype(np.float64) for p in image.planes())
    toned = [(wr * r + wg * g + wb * b).astype(np.int32) for wr, wg, wb in SEPIA_MATRIX]
    return PixelBuffer.from_planes(*toned, clamp=True)


def brighten(image: PixelBuffer, amount: int) -> PixelBuffer:
    """Add amount to every sample (negative darkens), clamped."""
    # Anything past 255 either way saturates every sample.
    amount = max(-255, min(255, int(amount)))
    r, g, b = _planes_int(image)
    return PixelBuffer.from_planes(r + amount, g + amount, b + amount, clamp=True)


def flip(image: PixelBuffer, direction: str) -> PixelBuffer:
    """Mirror horizontally (columns) or vertically (rows)."""
    key = direction.lower()
    if key == 'horizontal':
        planes = [p[:, ::-1] for p in image.planes()]
    elif key == 'vertical':
        planes = [p[::-1, :] for p in image.planes()]
    else:
        raise InvalidArgumentError(f"Invalid flip direction: {direction}")
    return PixelBuffer(image.width, image.height, *planes)


def rgb_split(image: PixelBuffer) -> Tuple[PixelBuffer, PixelBuffer, PixelBuffer]:
    """Three images, each holding one source channel in its own slot."""
    return (
        extract_component(image, 'red'),
        extract_component(image, 'green'),
        extract_component(image, 'blue'),
    )


def rgb_combine(red_image: PixelBuffer, green_image: PixelBuffer, blue_image: PixelBuffer) -> PixelBuffer:
    """Red plane of the first, green of the second, blue of the third."""
    if not (red_image.same_size(green_image) and red_image.same_size(blue_image)):
        raise DimensionMismatchError(
            "Channel images must share dimensions, got "
            f"{red_image.width}x{red_image.height}, "
            f"{green_image.width}x{green_image.height}, "
            f"{blue_image.width}x{blue_image.height}"
        )
    return PixelBuffer(red_image.width, red_image.height,
                       red_image.red, green_image.green, blue_image.blue)
