"""Haar wavelet compression: pad, forward transform, threshold, inverse, crop."""

import numpy as np
from typing import Tuple

from models.compression_result import CompressionResult
from models.intermediate_data import IntermediateData
from models.operation_params import CompressionParams
from models.pixel_buffer import PixelBuffer
from utils.log import get_logger
from utils.metrics import Timer, coefficient_stats, compute_psnr_ssim

logger = get_logger(__name__)


def _trunc_div4(values: np.ndarray) -> np.ndarray:
    """Integer division by 4 rounding toward zero."""
    return np.sign(values) * (np.abs(values) // 4)


def pad_to_even(plane: np.ndarray) -> np.ndarray:
    """Append one zero row/column where the size is odd."""
    h, w = plane.shape
    return np.pad(plane, ((0, h % 2), (0, w % 2)), mode='constant', constant_values=0)


def haar_forward(plane: np.ndarray) -> np.ndarray:
    """One level of the 2x2 Haar transform into LL/LH/HL/HH quadrants.

    Expects even dimensions. LL is top-left, LH top-right, HL bottom-left,
    HH bottom-right.
    """
    p = plane.astype(np.int64)
    h, w = p.shape
    a = p[0::2, 0::2]
    b = p[0::2, 1::2]
    c = p[1::2, 0::2]
    d = p[1::2, 1::2]

    out = np.empty((h, w), dtype=np.int64)
    hh, hw = h // 2, w // 2
    out[:hh, :hw] = _trunc_div4(a + b + c + d)
    out[:hh, hw:] = _trunc_div4(a + b - c - d)
    out[hh:, :hw] = _trunc_div4(a - b + c - d)
    out[hh:, hw:] = _trunc_div4(a - b - c + d)
    return out


def haar_inverse(coeffs: np.ndarray) -> np.ndarray:
    """Rebuild 2x2 blocks from the quadrants (sums only, no division)."""
    h, w = coeffs.shape
    hh, hw = h // 2, w // 2
    ll = coeffs[:hh, :hw]
    lh = coeffs[:hh, hw:]
    hl = coeffs[hh:, :hw]
    hh_ = coeffs[hh:, hw:]

    out = np.empty((h, w), dtype=np.int64)
    out[0::2, 0::2] = ll + lh + hl + hh_
    out[0::2, 1::2] = ll + lh - hl - hh_
    out[1::2, 0::2] = ll - lh + hl - hh_
    out[1::2, 1::2] = ll - lh - hl + hh_
    return out


def threshold_for(percent: float) -> int:
    return CompressionParams(percent).threshold


def apply_threshold(coeffs: np.ndarray, threshold: int) -> np.ndarray:
    """Zero every coefficient with magnitude below threshold."""
    return np.where(np.abs(coeffs) < threshold, 0, coeffs)


def _round_trip(image: PixelBuffer, threshold: int, timer: Timer):
    """Pad, transform, threshold, invert and crop every plane.

    Returns (padded_shape, coefficients, thresholded, reconstructed).
    """
    padded = np.stack([pad_to_even(p) for p in image.planes()])

    # === FORWARD ===
    coeffs = timer.measure_forward(lambda: np.stack([haar_forward(p) for p in padded]))
    thresholded = apply_threshold(coeffs, threshold)

    # === INVERSE ===
    restored = timer.measure_inverse(lambda: np.stack([haar_inverse(c) for c in thresholded]))
    cropped = restored[:, :image.height, :image.width]
    reconstructed = PixelBuffer.from_planes(*cropped, clamp=True)
    return padded.shape[1:], coeffs, thresholded, reconstructed


def compress_reconstruct(
    image: PixelBuffer,
    params: CompressionParams,
) -> Tuple[CompressionResult, IntermediateData]:
    """Run the full Haar compression pipeline and collect metrics."""
    timer = Timer()
    threshold = params.threshold
    padded_shape, coeffs, thresholded, reconstructed = _round_trip(image, threshold, timer)

    logger.debug(
        "Haar compression %sx%s at %s%%: threshold %d",
        image.width, image.height, params.percent, threshold,
    )

    # === METRICS ===
    original_rgb = image.to_array()
    reconstructed_rgb = reconstructed.to_array()
    metrics = compute_psnr_ssim(original_rgb, reconstructed_rgb)
    stats = coefficient_stats(thresholded)

    result = CompressionResult(
        original_image=image,
        reconstructed_image=reconstructed,
        percent=params.percent,
        threshold=threshold,
        psnr_rgb=metrics['psnr_rgb'],
        ssim_rgb=metrics['ssim_rgb'],
        nonzero_coeffs=stats['nonzero_count'],
        total_coeffs=stats['total_coeffs'],
        forward_time_ms=timer.forward_time_ms,
        inverse_time_ms=timer.inverse_time_ms,
    )

    # === INTERMEDIATE DATA ===
    error_map_rgb = np.mean(
        np.abs(original_rgb.astype(np.float64) - reconstructed_rgb.astype(np.float64)), axis=2
    )
    hist, _ = np.histogram(np.abs(coeffs), bins=50, range=(0, 500))

    intermediate = IntermediateData(
        padded_shape=padded_shape,
        coefficients=coeffs,
        thresholded=thresholded,
        error_map_rgb=error_map_rgb,
        coefficient_histogram=hist,
    )

    return result, intermediate


def compress(image: PixelBuffer, percent: float) -> PixelBuffer:
    """Lossy Haar compression; higher percent discards more detail."""
    threshold = CompressionParams(percent).threshold
    return _round_trip(image, threshold, Timer())[3]
