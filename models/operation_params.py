"""Validated parameters for the parameterized operations."""

from dataclasses import dataclass

from models.errors import InvalidArgumentError

BASE_THRESHOLD = 50
MAX_THRESHOLD = 250
COMPRESSION_FACTOR = 0.7


@dataclass(frozen=True)
class LevelsParams:
    """Black, mid and white reference points of the levels curve."""

    black: int = 0
    mid: int = 128
    white: int = 255

    def __post_init__(self):
        for label, value in (('black', self.black), ('mid', self.mid), ('white', self.white)):
            if not (0 <= value <= 255):
                raise InvalidArgumentError(
                    f"Levels {label} point must be in [0, 255], got {value}"
                )
        if not (self.black < self.mid < self.white):
            raise InvalidArgumentError(
                "Levels points must satisfy black < mid < white, got "
                f"{self.black}, {self.mid}, {self.white}"
            )


@dataclass(frozen=True)
class CompressionParams:
    """Haar compression strength (0-100)."""

    percent: float = 0

    def __post_init__(self):
        if not (0 <= self.percent <= 100):
            raise InvalidArgumentError(
                f"Compression percentage must be between 0 and 100, got {self.percent}"
            )

    @property
    def threshold(self) -> int:
        """Coefficient magnitude below which detail is discarded."""
        adjusted = int(self.percent * COMPRESSION_FACTOR)
        return BASE_THRESHOLD + int((MAX_THRESHOLD - BASE_THRESHOLD) * (adjusted / 100.0))


@dataclass(frozen=True)
class DownscaleParams:
    """Target size of a downscale."""

    new_width: int
    new_height: int

    def __post_init__(self):
        if self.new_width <= 0 or self.new_height <= 0:
            raise InvalidArgumentError(
                f"Downscale target must be positive, got {self.new_width}x{self.new_height}"
            )


@dataclass(frozen=True)
class SplitParams:
    """Before/after split position as a percentage of the width."""

    percent: int = 50

    def __post_init__(self):
        if not (0 <= self.percent <= 100):
            raise InvalidArgumentError(
                f"Split percentage must be between 0 and 100, got {self.percent}"
            )

    def split_index(self, width: int) -> int:
        return (width * self.percent) // 100
