"""Catalog-addressed image operations.

Each method resolves its inputs from the catalog, calls one engine (or the
mask/split compositor around one) and stores the result under the
destination name. Nothing is written if any step fails.
"""

import numpy as np
from typing import Optional

import engines
from models.operation_params import LevelsParams
from models.pixel_buffer import PixelBuffer
from utils import image_io
from utils.log import get_logger
from workspace.catalog import ImageCatalog

logger = get_logger(__name__)


class ImageEngine:
    """Owns one catalog and exposes every named operation on it."""

    def __init__(self, catalog: Optional[ImageCatalog] = None, codec=None):
        self.catalog = catalog if catalog is not None else ImageCatalog()
        # Anything with load_image(path) and save_image(image, path).
        self.codec = codec if codec is not None else image_io

    # --- catalog access ---

    def get(self, name: str) -> PixelBuffer:
        return self.catalog.get(name)

    def exists(self, name: str) -> bool:
        return name in self.catalog

    def _store(self, name: str, image: PixelBuffer, message: str) -> None:
        self.catalog.put(name, image)
        logger.info("%s -> %s (%dx%d)", message, name, image.width, image.height)

    def _masked_or_plain(self, operation, src, dst, mask, plain, component=None):
        source = self.catalog.get(src, "Source image")
        if mask is None:
            result = plain(source)
        else:
            mask_image = self.catalog.get(mask, "Mask image")
            result = engines.apply_masked(operation, source, mask_image, component)
        label = f"{operation} {src}" if mask is None else f"{operation} {src} masked by {mask}"
        self._store(dst, result, label)

    # --- I/O ---

    def load(self, path, name: str) -> None:
        self._store(name, self.codec.load_image(path), f"load {path}")

    def save(self, path, name: str) -> None:
        image = self.catalog.get(name)
        self.codec.save_image(image, path)
        logger.info("save %s -> %s", name, path)

    # --- point transforms ---

    def visualize_component(self, component: str, src: str, dst: str, mask: Optional[str] = None) -> None:
        """Channel isolation or value/intensity/luma, optionally masked."""
        self._masked_or_plain(
            'component', src, dst, mask,
            lambda img: engines.extract_component(img, component),
            component=component,
        )

    def flip(self, direction: str, src: str, dst: str) -> None:
        self._store(dst, engines.flip(self.catalog.get(src, "Source image"), direction),
                    f"flip {direction} {src}")

    def brighten(self, amount: int, src: str, dst: str) -> None:
        self._store(dst, engines.brighten(self.catalog.get(src, "Source image"), amount),
                    f"brighten {amount} {src}")

    def sepia(self, src: str, dst: str, mask: Optional[str] = None) -> None:
        self._masked_or_plain('sepia', src, dst, mask, engines.sepia)

    def greyscale(self, src: str, dst: str, mask: Optional[str] = None,
                  component: Optional[str] = None) -> None:
        """Channel average, or a named component when one is given."""
        if component is None and mask is None:
            self._store(dst, engines.greyscale(self.catalog.get(src, "Source image")),
                        f"greyscale {src}")
            return
        self.visualize_component(component or 'intensity', src, dst, mask)

    def rgb_split(self, src: str, red: str, green: str, blue: str) -> None:
        parts = engines.rgb_split(self.catalog.get(src, "Source image"))
        for name, part in zip((red, green, blue), parts):
            self._store(name, part, f"rgb-split {src}")

    def rgb_combine(self, dst: str, red: str, green: str, blue: str) -> None:
        combined = engines.rgb_combine(
            self.catalog.get(red, "Red channel image"),
            self.catalog.get(green, "Green channel image"),
            self.catalog.get(blue, "Blue channel image"),
        )
        self._store(dst, combined, f"rgb-combine {red} {green} {blue}")

    # --- convolution ---

    def blur(self, src: str, dst: str, mask: Optional[str] = None) -> None:
        self._masked_or_plain('blur', src, dst, mask, engines.blur)

    def sharpen(self, src: str, dst: str, mask: Optional[str] = None) -> None:
        self._masked_or_plain('sharpen', src, dst, mask, engines.sharpen)

    # --- histogram & tone ---

    def histogram_counts(self, src: str) -> np.ndarray:
        """(3, 256) channel histograms; not stored."""
        return engines.compute_histograms(self.catalog.get(src, "Source image"))

    def histogram(self, src: str, dst: str) -> None:
        """Store a rendered line graph of the source histograms."""
        self._store(dst, engines.render_histogram(self.catalog.get(src, "Source image")),
                    f"histogram {src}")

    def color_correct(self, src: str, dst: str) -> None:
        self._store(dst, engines.color_correct(self.catalog.get(src, "Source image")),
                    f"color-correct {src}")

    def levels_adjust(self, black: int, mid: int, white: int, src: str, dst: str) -> None:
        LevelsParams(black, mid, white)
        source = self.catalog.get(src, "Source image")
        self._store(dst, engines.levels_adjust(source, black, mid, white),
                    f"levels-adjust {black} {mid} {white} {src}")

    # --- split preview ---

    def split(self, operation: str, src: str, dst: str, percent: int,
              levels: Optional[LevelsParams] = None) -> None:
        source = self.catalog.get(src, "Source image")
        self._store(dst, engines.apply_split(operation, source, percent, levels),
                    f"split {operation} {percent}% {src}")

    # --- wavelet & resampling ---

    def compress(self, percent: float, src: str, dst: str) -> None:
        self._store(dst, engines.compress(self.catalog.get(src, "Source image"), percent),
                    f"compress {percent}% {src}")

    def downscale(self, new_width: int, new_height: int, src: str, dst: str) -> None:
        self._store(dst, engines.downscale(self.catalog.get(src, "Source image"), new_width, new_height),
                    f"downscale {new_width}x{new_height} {src}")
