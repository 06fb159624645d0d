"""
OpenCV Image Codec Implementation

Implements IImageCodec using OpenCV imread/imdecode/imencode.
Follows SRP: Only handles raster decoding and PNG encoding.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.interfaces.image_codec_interface import IImageCodec


logger = logging.getLogger(__name__)


class OpenCvImageCodec(IImageCodec):
    """
    Image codec implementation backed by OpenCV.
    
    Decoding always uses color mode (3-channel BGR).
    """
    
    def __init__(self, pngCompression: int = 9):
        """
        Initialize OpenCvImageCodec.
        
        Args:
            pngCompression: PNG compression level (0-9, higher is smaller).
        """
        self._pngCompression = pngCompression
    
    @property
    def pngCompression(self) -> int:
        """Get PNG compression level."""
        return self._pngCompression
    
    def read(self, filepath: str) -> Optional[np.ndarray]:
        """Read an image file in color mode."""
        image = cv2.imread(filepath, cv2.IMREAD_COLOR)
        if image is None:
            logger.debug(f"cv2.imread returned nothing for {filepath}")
        return image
    
    def decode(self, buffer: bytes) -> Optional[np.ndarray]:
        """Decode an encoded buffer in color mode."""
        data = np.frombuffer(buffer, dtype=np.uint8)
        if data.size == 0:
            return None
        
        try:
            image = cv2.imdecode(data, cv2.IMREAD_COLOR)
        except cv2.error as e:
            logger.debug(f"cv2.imdecode failed: {e}")
            return None
        
        return image
    
    def encodePng(self, image: np.ndarray) -> bytes:
        """Encode an image as PNG with the configured compression level."""
        params = [cv2.IMWRITE_PNG_COMPRESSION, self._pngCompression]
        success, encoded = cv2.imencode(".png", image, params)
        if not success:
            raise RuntimeError("PNG encoding failed")
        return encoded.tobytes()
