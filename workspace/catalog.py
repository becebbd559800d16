"""Name to PixelBuffer store."""

import threading
from typing import Dict, List

from models.errors import ImageNotFoundError
from models.pixel_buffer import PixelBuffer


class ImageCatalog:
    """
    In-memory map of image names to buffers.

    Buffers are immutable, so readers never need the lock. Writes go through
    one lock: concurrent writers to the same name are last-write-wins.
    """

    def __init__(self):
        self._images: Dict[str, PixelBuffer] = {}
        self._lock = threading.Lock()

    def get(self, name: str, role: str = "Image") -> PixelBuffer:
        try:
            return self._images[name]
        except KeyError:
            raise ImageNotFoundError(f"{role} not found: {name}") from None

    def put(self, name: str, image: PixelBuffer) -> None:
        if not isinstance(image, PixelBuffer):
            raise TypeError(f"Catalog entries must be PixelBuffer, got {type(image).__name__}")
        with self._lock:
            self._images[name] = image

    def names(self) -> List[str]:
        return sorted(self._images)

    def __contains__(self, name) -> bool:
        return name in self._images

    def __len__(self) -> int:
        return len(self._images)
