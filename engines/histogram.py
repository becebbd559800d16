"""Histograms, peak-based color correction and the levels tone curve."""

import cv2
import numpy as np

from models.operation_params import LevelsParams
from models.pixel_buffer import PixelBuffer
from utils.constants import HISTOGRAM_SIZE, PEAK_SEARCH_HIGH, PEAK_SEARCH_LOW
from utils.log import get_logger

logger = get_logger(__name__)

GRAPH_SIZE = 256
GRID_STEP = 64
GRID_COLOR = (192, 192, 192)
LINE_COLORS = ((255, 0, 0), (0, 255, 0), (0, 0, 255))


def compute_histograms(image: PixelBuffer) -> np.ndarray:
    """(3, 256) counts, rows red/green/blue."""
    return np.stack([
        np.bincount(plane.ravel(), minlength=HISTOGRAM_SIZE)
        for plane in image.planes()
    ])


def find_peak(histogram: np.ndarray) -> int:
    """Most populated bucket in [10, 245); the lowest index wins ties."""
    window = histogram[PEAK_SEARCH_LOW:PEAK_SEARCH_HIGH]
    return PEAK_SEARCH_LOW + int(np.argmax(window))


def color_correct(image: PixelBuffer) -> PixelBuffer:
    """Shift each channel so its histogram peak lands on the mean peak."""
    histograms = compute_histograms(image)
    peaks = [find_peak(h) for h in histograms]
    average_peak = sum(peaks) // 3
    logger.debug("Color correction peaks %s, average %d", peaks, average_peak)

    planes = [
        plane.astype(np.int32) + (average_peak - peak)
        for plane, peak in zip(image.planes(), peaks)
    ]
    return PixelBuffer.from_planes(*planes, clamp=True)


def levels_curve(params: LevelsParams) -> np.ndarray:
    """256-entry lookup table: quadratic black->mid, linear mid->white."""
    black, mid, white = params.black, params.mid, params.white
    a = 128.0 / ((mid - black) * (mid - black))
    b = -2.0 * a * black
    c = a * black * black
    slope = 127.0 / (white - mid)

    v = np.arange(HISTOGRAM_SIZE, dtype=np.float64)
    curve = np.select(
        [v <= black, v >= white, v <= mid],
        [0.0, 255.0, a * v * v + b * v + c],
        default=128 + slope * (v - mid),
    )
    return np.clip(np.floor(curve + 0.5), 0, 255).astype(np.uint8)


def levels_adjust(image: PixelBuffer, black: int, mid: int, white: int) -> PixelBuffer:
    """Remap every channel through the levels curve."""
    lut = levels_curve(LevelsParams(black, mid, white))
    return PixelBuffer.from_planes(*(lut[p] for p in image.planes()))


def render_histogram(image: PixelBuffer) -> PixelBuffer:
    """256x256 line graph of the three channel histograms on a grid."""
    canvas = np.full((GRAPH_SIZE, GRAPH_SIZE, 3), 255, dtype=np.uint8)

    for i in range(0, GRAPH_SIZE + 1, GRID_STEP):
        cv2.line(canvas, (i, 0), (i, GRAPH_SIZE), GRID_COLOR, 1)
        cv2.line(canvas, (0, GRAPH_SIZE - i), (GRAPH_SIZE, GRAPH_SIZE - i), GRID_COLOR, 1)

    for histogram, color in zip(compute_histograms(image), LINE_COLORS):
        peak = max(int(histogram.max()), 1)
        heights = (histogram / peak * GRAPH_SIZE).astype(np.int32)
        ys = GRAPH_SIZE - heights
        for x in range(1, HISTOGRAM_SIZE):
            cv2.line(canvas, (x - 1, int(ys[x - 1])), (x, int(ys[x])), color, 1)

    return PixelBuffer.from_array(canvas)
