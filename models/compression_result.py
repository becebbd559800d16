"""Haar compression result with metrics."""

from dataclasses import dataclass
from typing import Optional

from models.pixel_buffer import PixelBuffer


@dataclass
class CompressionResult:
    """Results from the compress/reconstruct pipeline."""

    original_image: PixelBuffer
    reconstructed_image: PixelBuffer
    percent: float
    threshold: int

    # Quality metrics
    psnr_rgb: float
    ssim_rgb: Optional[float]

    # Coefficient stats
    nonzero_coeffs: int
    total_coeffs: int

    # Runtime
    forward_time_ms: float
    inverse_time_ms: float

    @property
    def zeroed_fraction(self) -> float:
        if self.total_coeffs == 0:
            return 0.0
        return 1.0 - self.nonzero_coeffs / self.total_coeffs
