"""Mask-gated and split-view compositing around the other engines."""

import numpy as np
from functools import partial
from typing import Callable, Dict, Optional

from engines import convolution, histogram, point_ops
from models.errors import DimensionMismatchError, InvalidArgumentError
from models.operation_params import LevelsParams, SplitParams
from models.pixel_buffer import PixelBuffer

Transform = Callable[[PixelBuffer], PixelBuffer]

MASKABLE_OPERATIONS: Dict[str, Transform] = {
    'blur': convolution.blur,
    'sharpen': convolution.sharpen,
    'sepia': point_ops.sepia,
}

SPLIT_OPERATIONS: Dict[str, Transform] = {
    'blur': convolution.blur,
    'sharpen': convolution.sharpen,
    'sepia': point_ops.sepia,
    'greyscale': point_ops.greyscale,
    'color-correct': histogram.color_correct,
}

SPLIT_ALIASES = {
    'colorcorrect': 'color-correct',
    'levels': 'levels-adjust',
}


def _merge(selector: np.ndarray, transformed: PixelBuffer, kept: PixelBuffer) -> PixelBuffer:
    """Per-pixel pick: transformed where selector is True, kept elsewhere."""
    planes = [np.where(selector, t, k) for t, k in zip(transformed.planes(), kept.planes())]
    return PixelBuffer(kept.width, kept.height, *planes)


def merge_with_mask(source: PixelBuffer, transformed: PixelBuffer, mask: PixelBuffer) -> PixelBuffer:
    """Transformed pixel where the mask's red sample is 0, source pixel elsewhere."""
    if not (mask.same_size(source) and transformed.same_size(source)):
        raise DimensionMismatchError(
            f"Mask is {mask.width}x{mask.height} but image is {source.width}x{source.height}"
        )
    return _merge(mask.red == 0, transformed, source)


def merge_split(source: PixelBuffer, transformed: PixelBuffer, percent: int) -> PixelBuffer:
    """Columns left of the split index transformed, the rest original."""
    split_index = SplitParams(percent).split_index(source.width)
    columns = np.arange(source.width) < split_index
    selector = np.broadcast_to(columns, source.shape)
    return _merge(selector, transformed, source)


def apply_masked(
    operation: str,
    source: PixelBuffer,
    mask: PixelBuffer,
    component: Optional[str] = None,
) -> PixelBuffer:
    """Run a maskable operation and keep the source wherever the mask is set."""
    key = operation.lower()
    if key == 'component':
        if component is None:
            raise InvalidArgumentError("Masked component operation needs a component name")
        transform = partial(point_ops.extract_component, component=component)
    elif key in MASKABLE_OPERATIONS:
        transform = MASKABLE_OPERATIONS[key]
    else:
        raise InvalidArgumentError(f"Operation does not support a mask: {operation}")

    return merge_with_mask(source, transform(source), mask)


def apply_split(
    operation: str,
    source: PixelBuffer,
    percent: int,
    levels: Optional[LevelsParams] = None,
) -> PixelBuffer:
    """Before/after preview: transform the left part of the image only."""
    SplitParams(percent)
    key = operation.lower()
    key = SPLIT_ALIASES.get(key, key)

    if key == 'levels-adjust':
        if levels is None:
            raise InvalidArgumentError("Missing black, mid and white parameters for levels operation")
        transformed = histogram.levels_adjust(source, levels.black, levels.mid, levels.white)
    elif key in SPLIT_OPERATIONS:
        transformed = SPLIT_OPERATIONS[key](source)
    else:
        raise InvalidArgumentError(f"Unknown split operation: {operation}")

    return merge_split(source, transformed, percent)
