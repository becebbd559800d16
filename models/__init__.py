"""Data models: pixel buffers, kernels, parameters, results and errors."""

from .errors import (
    ImageError,
    ImageNotFoundError,
    InvalidArgumentError,
    DimensionMismatchError,
    UnsupportedFormatError,
)
from .pixel_buffer import PixelBuffer
from .kernel import Kernel
from .operation_params import LevelsParams, CompressionParams, DownscaleParams, SplitParams
from .compression_result import CompressionResult
from .intermediate_data import IntermediateData

__all__ = [
    'ImageError',
    'ImageNotFoundError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'UnsupportedFormatError',
    'PixelBuffer',
    'Kernel',
    'LevelsParams',
    'CompressionParams',
    'DownscaleParams',
    'SplitParams',
    'CompressionResult',
    'IntermediateData',
]
