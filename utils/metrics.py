"""Metrics: PSNR, SSIM, coefficient statistics, timing."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict, Optional


def _ssim_window(height: int, width: int) -> Optional[int]:
    """Largest odd window up to 7 that fits the image, or None if below 3."""
    win = min(7, height, width)
    if win % 2 == 0:
        win -= 1
    return win if win >= 3 else None


def compute_psnr_ssim(original_rgb: np.ndarray, reconstructed_rgb: np.ndarray) -> Dict[str, Optional[float]]:
    """Compute PSNR and SSIM on RGB."""
    if np.array_equal(original_rgb, reconstructed_rgb):
        psnr_rgb = float('inf')
    else:
        psnr_rgb = float(peak_signal_noise_ratio(original_rgb, reconstructed_rgb, data_range=255))

    win = _ssim_window(*original_rgb.shape[:2])
    ssim_rgb = None
    if win is not None:
        ssim_rgb = float(structural_similarity(
            original_rgb, reconstructed_rgb, channel_axis=2, data_range=255, win_size=win
        ))

    return {
        'psnr_rgb': psnr_rgb,
        'ssim_rgb': ssim_rgb,
    }


def coefficient_stats(coeffs: np.ndarray) -> Dict[str, int]:
    """Nonzero/total counts of a coefficient array."""
    return {
        'nonzero_count': int(np.count_nonzero(coeffs)),
        'total_coeffs': int(coeffs.size),
    }


class Timer:
    """Simple timer for forward/inverse transform runtime."""

    def __init__(self):
        self.forward_time_ms = 0.0
        self.inverse_time_ms = 0.0

    def measure_forward(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.forward_time_ms = (time.perf_counter() - start) * 1000.0
        return result

    def measure_inverse(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.inverse_time_ms = (time.perf_counter() - start) * 1000.0
        return result
