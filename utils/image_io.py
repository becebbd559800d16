"""Image I/O: plain-text PPM plus OpenCV for compressed rasters."""

from pathlib import Path

import cv2
import numpy as np

from config import get_settings
from models.errors import ImageNotFoundError, UnsupportedFormatError
from models.pixel_buffer import PixelBuffer

PPM_EXTENSIONS = {'.ppm'}
RASTER_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp'}
SUPPORTED_EXTENSIONS = PPM_EXTENSIONS | RASTER_EXTENSIONS


def _extension(path) -> str:
    ext = Path(path).suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormatError(
            f"Unsupported format '{ext or path}'. Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )
    return ext


def _ppm_tokens(text: str):
    for line in text.splitlines():
        line = line.split('#', 1)[0]
        yield from line.split()


def decode_ppm(text: str) -> PixelBuffer:
    """Parse a P3 (ASCII) PPM document."""
    tokens = list(_ppm_tokens(text))
    if not tokens or tokens[0] != 'P3':
        raise UnsupportedFormatError("PPM file must start with P3")
    try:
        width, height, max_value = (int(t) for t in tokens[1:4])
        samples = np.array(tokens[4:], dtype=np.int64)
    except (ValueError, OverflowError) as e:
        raise UnsupportedFormatError(f"Malformed PPM data: {e}") from e

    if width <= 0 or height <= 0 or max_value <= 0:
        raise UnsupportedFormatError(f"Invalid PPM header: {width}x{height}, max {max_value}")
    expected = width * height * 3
    if samples.size < expected:
        raise UnsupportedFormatError(
            f"PPM data truncated: expected {expected} samples, got {samples.size}"
        )

    rgb = samples[:expected].reshape(height, width, 3)
    if max_value != 255:
        rgb = (rgb * 255) // max_value
    return PixelBuffer.from_array(rgb, clamp=True)


def encode_ppm(image: PixelBuffer) -> str:
    """Serialize as P3 with one text row per image row."""
    lines = ['P3', f'{image.width} {image.height}', '255']
    rgb = image.to_array().reshape(image.height, image.width * 3)
    for row in rgb:
        lines.append(' '.join(str(v) for v in row))
    return '\n'.join(lines) + '\n'


def decode_bytes(data: bytes, ext: str) -> PixelBuffer:
    """Decode PNG/JPEG/BMP bytes."""
    if ext.lower() in PPM_EXTENSIONS:
        return decode_ppm(data.decode('ascii', errors='replace'))
    if not data:
        raise UnsupportedFormatError(f"Empty {ext} data")
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if img is None:
        raise UnsupportedFormatError(f"Could not decode {ext} data")
    return PixelBuffer.from_array(cv2.cvtColor(img, cv2.COLOR_BGR2RGB))


def encode_bytes(image: PixelBuffer, ext: str) -> bytes:
    """Encode to PNG/JPEG/BMP bytes."""
    ext = ext.lower()
    if ext in PPM_EXTENSIONS:
        return encode_ppm(image).encode('ascii')

    settings = get_settings()
    if ext in ('.jpg', '.jpeg'):
        params = [cv2.IMWRITE_JPEG_QUALITY, settings.jpeg_quality]
    elif ext == '.png':
        params = [cv2.IMWRITE_PNG_COMPRESSION, settings.png_compression]
    else:
        params = []

    ok, encoded = cv2.imencode(ext, cv2.cvtColor(image.to_array(), cv2.COLOR_RGB2BGR), params)
    if not ok:
        raise UnsupportedFormatError(f"Could not encode image as {ext}")
    return encoded.tobytes()


def load_image(path) -> PixelBuffer:
    """Load image from disk, dispatching on extension."""
    ext = _extension(path)
    path = Path(path)
    if not path.is_file():
        raise ImageNotFoundError(f"Image file not found: {path}")
    return decode_bytes(path.read_bytes(), ext)


def save_image(image: PixelBuffer, path) -> None:
    """Save image, format chosen by extension."""
    ext = _extension(path)
    Path(path).write_bytes(encode_bytes(image, ext))
