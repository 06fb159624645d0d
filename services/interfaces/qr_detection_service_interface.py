"""
QR Detection Service Interface Module.

Defines the public interface of the QR detector: decode one QR code,
decode "multiple" QR codes, or only check for presence.

Follows:
- SRP: Only handles QR detection operations
- DIP: Depends on IQrReader abstraction from core layer
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from core.raster.raster_loader import ImageSource


class IQrDetectionService(ABC):
    """
    Interface for QR detection operations.

    Every operation accepts an image path or encoded image bytes and
    returns a JSON-serializable dictionary.
    """

    @abstractmethod
    def detectAndDecode(self, source: Optional[ImageSource] = None) -> Dict[str, Any]:
        """
        Detect and decode a single QR code.

        Args:
            source: Image file path or buffer containing image data.

        Returns:
            {detected, data, corners?, qrCodeImage?}
        """
        pass

    @abstractmethod
    def detectAndDecodeMultiple(self, source: Optional[ImageSource] = None) -> Dict[str, Any]:
        """
        Detect and decode QR codes.

        At most one QR code is reported.

        Args:
            source: Image file path or buffer containing image data.

        Returns:
            {detected, count, qrCodes: [{data, corners?, qrCodeImage?}]}
        """
        pass

    @abstractmethod
    def hasQRCode(self, source: Optional[ImageSource] = None) -> Dict[str, Any]:
        """
        Check if an image contains a QR code without decoding it.

        Args:
            source: Image file path or buffer containing image data.

        Returns:
            {hasQRCode, corners?}
        """
        pass
