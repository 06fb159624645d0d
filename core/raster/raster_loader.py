"""
Raster Loader Module

Turns a file path or an encoded byte buffer into a RasterImage
using an injected image codec.
"""

import os
import logging
from typing import Optional, Union

from core.exceptions import ImageDecodeError, InvalidArgumentError
from core.interfaces.image_codec_interface import IImageCodec
from core.raster.raster_image import RasterImage


logger = logging.getLogger(__name__)


ImageSource = Union[str, "os.PathLike[str]", bytes, bytearray, memoryview]


class RasterLoader:
    """
    Loads images from a path or a buffer.
    
    Accepted inputs:
    - str / os.PathLike: path to an image file
    - bytes / bytearray / memoryview: encoded image content
    
    Anything else raises InvalidArgumentError before any decoding.
    """
    
    def __init__(self, codec: IImageCodec):
        """
        Initialize RasterLoader.
        
        Args:
            codec: Image codec used to decode files and buffers.
        """
        self._codec = codec
    
    def load(self, source: Optional[ImageSource]) -> RasterImage:
        """
        Load an image as a 3-channel RasterImage.
        
        Args:
            source: Image path or encoded image bytes.
            
        Returns:
            RasterImage with BGR pixels.
            
        Raises:
            InvalidArgumentError: If source is missing or of an unsupported type.
            ImageDecodeError: If the image could not be decoded.
        """
        if source is None:
            raise InvalidArgumentError("Expected an image path or buffer")
        
        if isinstance(source, (str, os.PathLike)):
            pixels = self._loadPath(os.fspath(source))
        elif isinstance(source, (bytes, bytearray, memoryview)):
            pixels = self._loadBuffer(bytes(source))
        else:
            raise InvalidArgumentError(
                f"Expected string or buffer argument, got {type(source).__name__}"
            )
        
        if pixels is None or pixels.size == 0:
            raise ImageDecodeError("Failed to read image")
        
        raster = RasterImage(pixels=pixels)
        logger.debug(
            f"Loaded image {raster.width}x{raster.height} "
            f"({raster.channels} channels)"
        )
        return raster
    
    def _loadPath(self, path: str):
        """Decode an image file."""
        if not os.path.isfile(path):
            raise ImageDecodeError(f"Failed to read image: file not found: {path}")
        return self._codec.read(path)
    
    def _loadBuffer(self, buffer: bytes):
        """Decode an in-memory image."""
        if not buffer:
            raise ImageDecodeError("Failed to read image: empty buffer")
        return self._codec.decode(buffer)
