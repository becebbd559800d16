"""Immutable three-plane 8-bit image."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from models.errors import DimensionMismatchError, InvalidArgumentError


def _frozen_plane(plane, name: str) -> np.ndarray:
    arr = np.asarray(plane)
    if arr.ndim != 2:
        raise InvalidArgumentError(f"{name} plane must be 2-D, got shape {arr.shape}")
    if arr.size and (arr.min() < 0 or arr.max() > 255):
        raise InvalidArgumentError(f"{name} plane has samples outside [0, 255]")
    arr = arr.astype(np.uint8, copy=True)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Width, height and three same-shaped planes in row-major order.

    Planes are copied on construction and made read-only, so a buffer can be
    shared between catalog entries and composited without defensive copies.
    """

    width: int
    height: int
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgumentError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        for name in ('red', 'green', 'blue'):
            plane = _frozen_plane(getattr(self, name), name)
            if plane.shape != (self.height, self.width):
                raise DimensionMismatchError(
                    f"{name} plane is {plane.shape[1]}x{plane.shape[0]}, "
                    f"expected {self.width}x{self.height}"
                )
            object.__setattr__(self, name, plane)

    @classmethod
    def from_planes(cls, red, green, blue, clamp: bool = False) -> 'PixelBuffer':
        """Build from three 2-D planes; optionally clamp wide results to [0, 255]."""
        planes = [np.asarray(p) for p in (red, green, blue)]
        if clamp:
            planes = [np.clip(p, 0, 255) for p in planes]
        height, width = planes[0].shape
        return cls(width, height, *planes)

    @classmethod
    def from_array(cls, rgb: np.ndarray, clamp: bool = False) -> 'PixelBuffer':
        """Build from an H x W x 3 RGB array."""
        rgb = np.asarray(rgb)
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise InvalidArgumentError(f"Expected an H x W x 3 array, got shape {rgb.shape}")
        return cls.from_planes(rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2], clamp=clamp)

    @classmethod
    def filled(cls, width: int, height: int, rgb: Tuple[int, int, int]) -> 'PixelBuffer':
        """Uniform image, handy for masks and tests."""
        planes = [np.full((height, width), value) for value in rgb]
        return cls(width, height, *planes)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def planes(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.red, self.green, self.blue

    def to_array(self) -> np.ndarray:
        """H x W x 3 uint8 RGB copy."""
        return np.stack([self.red, self.green, self.blue], axis=-1)

    def same_size(self, other: 'PixelBuffer') -> bool:
        return self.width == other.width and self.height == other.height

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.same_size(other) and all(
            np.array_equal(a, b) for a, b in zip(self.planes(), other.planes())
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
