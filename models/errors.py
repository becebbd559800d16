"""Error taxonomy shared by engines, catalog, codecs and commands."""


class ImageError(Exception):
    """Base class for every failure reported by the image engine."""


class ImageNotFoundError(ImageError, KeyError):
    """A referenced source, mask or channel image is not in the catalog."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class InvalidArgumentError(ImageError, ValueError):
    """Out-of-range number or unknown keyword."""


class DimensionMismatchError(ImageError, ValueError):
    """Images that must share width/height do not."""


class UnsupportedFormatError(ImageError, ValueError):
    """The codec cannot decode or encode the requested file."""
