"""
Sharpness Enhancer Module

Enhances image sharpness using Unsharp Mask technique.
Restores module edges of slightly blurred QR codes.

Follows SRP: Only handles sharpness enhancement operations.
"""

import logging

import numpy as np
import cv2


logger = logging.getLogger(__name__)


class SharpnessEnhancer:
    """
    Enhances image sharpness using Unsharp Mask algorithm.
    
    Unsharp Mask Formula:
        Sharpened = Original + amount × (Original - Blurred)
    
    Process:
    1. Apply Gaussian blur to original image (low-pass filter)
    2. Subtract blurred from original = high frequency details (edges)
    3. Add high frequency details to original with amount coefficient
    
    Follows SRP: Only responsible for sharpness enhancement.
    """
    
    def __init__(
        self,
        sigma: float = 1.0,
        amount: float = 1.5
    ):
        """
        Initialize SharpnessEnhancer.
        
        Args:
            sigma: Sigma for Gaussian blur (0.5 - 3.0).
                   Higher values = more blur = stronger edge detection.
            amount: Sharpen coefficient (1.0 - 3.0).
                    1.0 = light sharpening, 2.0+ = strong sharpening.
        """
        self._sigma = sigma
        self._amount = amount
        
        logger.debug(
            f"SharpnessEnhancer initialized: sigma={sigma}, amount={amount}"
        )
    
    def enhanceSharpness(self, image: np.ndarray) -> np.ndarray:
        """
        Enhance image sharpness using Unsharp Mask.
        
        Formula: Sharpened = Original + amount × (Original - Blurred)
        Using cv2.addWeighted:
            dst = src1 × alpha + src2 × beta + gamma
            Sharpened = Original × (1 + amount) + Blurred × (-amount) + 0
        
        Args:
            image: Input image (grayscale or BGR).
            
        Returns:
            Sharpened image, same shape and dtype as the input.
            
        Raises:
            ValueError: If the image is empty.
        """
        if image is None or image.size == 0:
            raise ValueError("Input image is None or empty")
        
        # ksize=(0,0) means kernel size is computed from sigma
        blurred = cv2.GaussianBlur(image, (0, 0), self._sigma)
        
        return cv2.addWeighted(
            image, 1.0 + self._amount,   # src1 and alpha
            blurred, -self._amount,       # src2 and beta
            0                             # gamma
        )
