"""
Exception types raised by the pixelator core.
"""


class PixelatorError(Exception):
    """Base class for all pixelator errors."""
    pass


class InvalidConfiguration(PixelatorError):
    """Raised when a grid or delay configuration cannot be used for a run."""
    pass


class NotInitialized(PixelatorError):
    """Raised when a run or restore is requested before an image is captured."""
    pass


class GeometryMismatch(PixelatorError):
    """Raised when buffer or tile geometry does not match the captured image."""
    pass
