"""
ZXing QR Reader Implementation.

This module provides QR code reading using the zxing-cpp library.
zxing-cpp is a high-performance C++ implementation with Python bindings.

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


class ZxingQrReader(IQrReader):
    """
    QR code reader using zxing-cpp library.
    
    zxing-cpp only reports symbols it could decode, so detect() returns
    the corners of the first decodable QR code.
    """
    
    def __init__(
        self,
        tryRotate: bool = True,
        tryDownscale: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ZxingQrReader.
        
        Args:
            tryRotate: Try rotated barcodes (90/270 degrees)
            tryDownscale: Try downscaled versions for better detection
            logger: Logger instance for debug output
        """
        self._tryRotate = tryRotate
        self._tryDownscale = tryDownscale
        self._logger = logger or logging.getLogger(__name__)
        self._zxingcpp = None
        
        self._logger.info(
            f"ZxingQrReader initialized "
            f"(tryRotate={tryRotate}, tryDownscale={tryDownscale})"
        )
    
    def _ensureZxing(self) -> None:
        """Lazily import zxing-cpp module."""
        if self._zxingcpp is None:
            try:
                import zxingcpp
                self._zxingcpp = zxingcpp
                self._logger.info("zxing-cpp module loaded successfully")
            except ImportError as e:
                self._logger.error(
                    f"Failed to import zxing-cpp. "
                    f"Please install: pip install zxing-cpp. Error: {e}"
                )
                raise
    
    def detect(self, image: np.ndarray) -> Optional[QuadCorners]:
        """
        Locate a QR code.
        
        Args:
            image: Input image (BGR or grayscale)
            
        Returns:
            Corner points if found, None otherwise
        """
        result = self.detectAndDecode(image)
        return result.corners or None
    
    def detectAndDecode(self, image: np.ndarray) -> QrReadResult:
        """
        Detect and decode QR code in image.
        
        Args:
            image: Input image (BGR or grayscale)
            
        Returns:
            QrReadResult for the first valid QR code, empty result otherwise
        """
        self._ensureZxing()
        
        try:
            # Convert BGR to grayscale if needed for better detection
            if len(image.shape) == 3:
                grayImage = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
            else:
                grayImage = image
            
            # API: read_barcodes(image, formats, try_rotate, try_downscale, ...)
            barcodes = self._zxingcpp.read_barcodes(
                grayImage,
                formats=self._zxingcpp.BarcodeFormat.QRCode,
                try_rotate=self._tryRotate,
                try_downscale=self._tryDownscale
            )
        except Exception as e:
            self._logger.error(f"Error during QR detection: {e}")
            raise CapabilityError(f"zxing-cpp read failed: {e}") from e
        
        for barcode in barcodes:
            if not barcode.valid or not barcode.text:
                continue
            
            self._logger.debug(f"QR code detected: {barcode.text}")
            position = barcode.position
            corners = [
                Point2D(float(position.top_left.x), float(position.top_left.y)),
                Point2D(float(position.top_right.x), float(position.top_right.y)),
                Point2D(float(position.bottom_right.x), float(position.bottom_right.y)),
                Point2D(float(position.bottom_left.x), float(position.bottom_left.y))
            ]
            return QrReadResult(text=barcode.text, corners=corners)
        
        self._logger.debug("No valid QR code in detected barcodes")
        return QrReadResult()
