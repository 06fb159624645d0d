"""
Contrast Enhancer Module

Enhances local contrast using CLAHE (Contrast Limited Adaptive Histogram Equalization).
Particularly effective for low-contrast or unevenly lit QR codes.

Follows SRP: Only handles contrast enhancement operations.
"""

import logging
from typing import Tuple

import numpy as np
import cv2


logger = logging.getLogger(__name__)


class ContrastEnhancer:
    """
    Enhances local contrast using CLAHE algorithm.
    
    CLAHE (Contrast Limited Adaptive Histogram Equalization):
    - Divides image into tiles and equalizes histogram for each tile separately
    - Uses clip limit to avoid noise amplification
    - Applied directly on grayscale images
    
    Follows SRP: Only responsible for contrast enhancement.
    """
    
    def __init__(
        self,
        clipLimit: float = 3.0,
        tileGridSize: Tuple[int, int] = (8, 8)
    ):
        """
        Initialize ContrastEnhancer.
        
        Args:
            clipLimit: Contrast limit to avoid noise amplification (1.0 - 5.0).
                       Higher values = more contrast but more noise.
            tileGridSize: Grid size for dividing image into tiles.
                          Smaller tiles = more localized enhancement.
        """
        self._clipLimit = clipLimit
        self._tileGridSize = tuple(tileGridSize)
        
        logger.debug(
            f"ContrastEnhancer initialized: clipLimit={clipLimit}, "
            f"tileGridSize={self._tileGridSize}"
        )
    
    def enhanceContrast(self, image: np.ndarray) -> np.ndarray:
        """
        Enhance local contrast using CLAHE.
        
        Args:
            image: Input grayscale image (H, W) or (H, W, 1).
            
        Returns:
            Contrast-enhanced grayscale image (H, W).
            
        Raises:
            ValueError: If the image is empty or has more than one channel.
        """
        if image is None or image.size == 0:
            raise ValueError("Input image is None or empty")
        
        # Ensure input is 2D array
        if len(image.shape) == 3:
            if image.shape[2] != 1:
                raise ValueError("Expected grayscale image, got multi-channel image")
            image = image[:, :, 0]
        
        # CLAHE objects are not shared between calls
        clahe = cv2.createCLAHE(
            clipLimit=self._clipLimit,
            tileGridSize=self._tileGridSize
        )
        return clahe.apply(image)
