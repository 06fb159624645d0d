"""
Exceptions Module.

Error kinds raised by the QR detection pipeline.

- InvalidArgumentError: no input, or input is neither path-like nor buffer-like
- ImageDecodeError: the image codec could not produce a raster
- CapabilityError: the QR reader or an image transform raised a fault

"No QR code found" is not an error; it is a normal result.
"""


class QrPipelineError(Exception):
    """Base class for all pipeline errors."""


class InvalidArgumentError(QrPipelineError, TypeError):
    """Input is missing or of an unsupported type."""


class ImageDecodeError(QrPipelineError, ValueError):
    """Image could not be read or decoded into a raster."""


class CapabilityError(QrPipelineError, RuntimeError):
    """QR reader or image transform failed unexpectedly."""
