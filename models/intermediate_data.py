"""Intermediate data for compression analysis."""

from dataclasses import dataclass
from typing import Optional
import numpy as np


@dataclass
class IntermediateData:
    """Coefficient planes and error maps kept for inspection."""

    padded_shape: tuple = (0, 0)
    coefficients: Optional[np.ndarray] = None
    thresholded: Optional[np.ndarray] = None

    error_map_rgb: Optional[np.ndarray] = None
    coefficient_histogram: Optional[np.ndarray] = None
