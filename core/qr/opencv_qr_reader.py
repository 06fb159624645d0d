"""
OpenCV QR Reader Implementation.

This module provides QR code reading using OpenCV's built-in
cv2.QRCodeDetector (objdetect module, no contrib build required).

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.exceptions import CapabilityError
from core.interfaces.qr_reader_interface import (
    IQrReader,
    Point2D,
    QrReadResult,
    QuadCorners
)


class OpenCvQrReader(IQrReader):
    """
    QR code reader using cv2.QRCodeDetector.
    
    A new detector object is created for every call, so one reader
    instance can be shared between threads.
    """
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize OpenCvQrReader.
        
        Args:
            logger: Logger instance for debug output
        """
        self._logger = logger or logging.getLogger(__name__)
        self._logger.info("OpenCvQrReader initialized")
    
    def detect(self, image: np.ndarray) -> Optional[QuadCorners]:
        """
        Locate a QR code without decoding.
        
        Args:
            image: Input image (BGR or grayscale)
            
        Returns:
            Corner points if located, None otherwise
        """
        try:
            found, points = cv2.QRCodeDetector().detect(image)
        except cv2.error as e:
            self._logger.error(f"Error during QR detection: {e}")
            raise CapabilityError(f"QR detection failed: {e}") from e
        
        if not found or points is None:
            self._logger.debug("No QR code located")
            return None
        
        corners = self._toCorners(points)
        return corners or None
    
    def detectAndDecode(self, image: np.ndarray) -> QrReadResult:
        """
        Locate and decode a QR code.
        
        Args:
            image: Input image (BGR or grayscale)
            
        Returns:
            QrReadResult (text None if decoding failed)
        """
        try:
            # API: detectAndDecode(img) -> (text, points, straight_qrcode)
            # - points: float32 array of shape (1, 4, 2) or None
            text, points, _ = cv2.QRCodeDetector().detectAndDecode(image)
        except cv2.error as e:
            self._logger.error(f"Error during QR decoding: {e}")
            raise CapabilityError(f"QR decoding failed: {e}") from e
        
        corners = self._toCorners(points) if points is not None else []
        
        if not text:
            self._logger.debug(
                f"No QR code decoded (corners located: {len(corners)})"
            )
            return QrReadResult(text=None, corners=corners)
        
        self._logger.debug(f"QR code decoded: {text}")
        return QrReadResult(text=text, corners=corners)
    
    @staticmethod
    def _toCorners(points: np.ndarray) -> QuadCorners:
        """Flatten OpenCV point array to Point2D list, keeping detector order."""
        flat = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return [Point2D(float(x), float(y)) for x, y in flat]
