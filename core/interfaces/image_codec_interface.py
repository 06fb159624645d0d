"""
Image Codec Interface Module

Defines the abstract interface for image decoding and encoding operations.
Follows ISP: Only contains methods related to raster conversion.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class IImageCodec(ABC):
    """
    Abstract interface for image codec operations.
    
    Implementations convert encoded image files/buffers to pixel arrays
    and pixel arrays back to PNG bytes.
    """
    
    @abstractmethod
    def read(self, filepath: str) -> Optional[np.ndarray]:
        """
        Read an image file in color (3-channel BGR) mode.
        
        Args:
            filepath: Path to the image file.
            
        Returns:
            BGR image, or None if the file could not be decoded.
        """
        pass
    
    @abstractmethod
    def decode(self, buffer: bytes) -> Optional[np.ndarray]:
        """
        Decode an encoded image buffer in color (3-channel BGR) mode.
        
        Args:
            buffer: Encoded image bytes (PNG, JPEG, ...).
            
        Returns:
            BGR image, or None if the bytes could not be decoded.
        """
        pass
    
    @abstractmethod
    def encodePng(self, image: np.ndarray) -> bytes:
        """
        Encode an image as PNG.
        
        Args:
            image: Image as numpy array (BGR or grayscale).
            
        Returns:
            bytes: PNG file content.
        """
        pass
