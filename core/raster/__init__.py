"""
Raster Module

Contains the image container and the loading/encoding adapters:
- RasterImage: Immutable pixel buffer
- RasterLoader: Path or buffer -> RasterImage
- OpenCvImageCodec: OpenCV-backed IImageCodec
"""

from core.raster.raster_image import RasterImage
from core.raster.raster_loader import RasterLoader, ImageSource
from core.raster.opencv_image_codec import OpenCvImageCodec


__all__ = [
    "RasterImage",
    "RasterLoader",
    "ImageSource",
    "OpenCvImageCodec"
]
