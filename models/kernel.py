"""Convolution kernel."""

from dataclasses import dataclass

import numpy as np

from models.errors import InvalidArgumentError


@dataclass(frozen=True, eq=False)
class Kernel:
    """Square, odd-sized matrix of float weights."""

    weights: np.ndarray
    name: str = "custom"

    def __post_init__(self):
        w = np.array(self.weights, dtype=np.float64)
        if w.ndim != 2 or w.shape[0] != w.shape[1]:
            raise InvalidArgumentError(f"Kernel must be square, got shape {w.shape}")
        if w.shape[0] % 2 == 0:
            raise InvalidArgumentError(f"Kernel size must be odd, got {w.shape[0]}")
        w.flags.writeable = False
        object.__setattr__(self, 'weights', w)

    @property
    def size(self) -> int:
        return self.weights.shape[0]

    @property
    def radius(self) -> int:
        return self.size // 2
