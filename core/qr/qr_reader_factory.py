"""
QR Reader Factory Module.

Factory function for creating QR reader instances based on backend selection.
Supports OpenCV QRCodeDetector and ZXing-cpp backends.

Follows:
- OCP (Open/Closed Principle): Easy to extend with new backends
- DIP (Dependency Inversion): Returns IQrReader interface
- Factory Pattern: Encapsulates object creation logic
"""

import logging
from typing import List

from core.interfaces.qr_reader_interface import IQrReader


logger = logging.getLogger(__name__)


def createQrReader(
    backend: str = "opencv",
    # ZXing params (prefixed with 'zxing')
    zxingTryRotate: bool = True,
    zxingTryDownscale: bool = True
) -> IQrReader:
    """
    Factory function to create QR reader based on backend.
    
    Supports:
    - "opencv": cv2.QRCodeDetector (default, no extra dependency)
    - "zxing": ZXing-cpp backend (fast, tolerant to rotation)
    
    Args:
        backend: Backend name ("opencv" or "zxing").
        zxingTryRotate: (zxing) Try rotated barcodes (90/270 degrees).
        zxingTryDownscale: (zxing) Try downscaled versions for better detection.
        
    Returns:
        IQrReader: QR reader instance implementing IQrReader interface.
        
    Raises:
        ValueError: If backend is invalid or not supported.
        ImportError: If required library is not installed.
        
    Examples:
        >>> reader = createQrReader(backend="opencv")
        >>> reader = createQrReader(
        ...     backend="zxing",
        ...     zxingTryRotate=True,
        ...     zxingTryDownscale=True
        ... )
    """
    # Normalize backend name
    backend = backend.lower().strip()
    
    supportedBackends = getSupportedQrBackends()
    if backend not in supportedBackends:
        errorMsg = (
            f"Invalid QR backend: '{backend}'. "
            f"Supported backends: {supportedBackends}"
        )
        logger.error(errorMsg)
        raise ValueError(errorMsg)
    
    if backend == "opencv":
        return _createOpenCvReader()
    
    elif backend == "zxing":
        return _createZxingReader(
            zxingTryRotate=zxingTryRotate,
            zxingTryDownscale=zxingTryDownscale
        )
    
    # Should never reach here due to validation above
    raise ValueError(f"Unsupported QR backend: {backend}")


def _createOpenCvReader() -> IQrReader:
    """
    Create OpenCV QR reader instance.
    
    Returns:
        IQrReader: OpenCV QR reader instance.
    """
    from core.qr.opencv_qr_reader import OpenCvQrReader
    
    logger.info("Creating OpenCV QR reader")
    return OpenCvQrReader()


def _createZxingReader(
    zxingTryRotate: bool,
    zxingTryDownscale: bool
) -> IQrReader:
    """
    Create ZXing QR reader instance.
    
    Args:
        zxingTryRotate: Try rotated barcodes.
        zxingTryDownscale: Try downscaled versions.
        
    Returns:
        IQrReader: ZXing QR reader instance.
        
    Raises:
        ImportError: If zxing-cpp is not installed.
    """
    if not isQrBackendAvailable("zxing"):
        errorMsg = (
            "ZXing-cpp is not installed. "
            "Install with: pip install zxing-cpp"
        )
        logger.error(errorMsg)
        raise ImportError(errorMsg)
    
    from core.qr.zxing_qr_reader import ZxingQrReader
    
    logger.info(
        f"Creating ZXing QR reader "
        f"(tryRotate={zxingTryRotate}, tryDownscale={zxingTryDownscale})"
    )
    
    return ZxingQrReader(
        tryRotate=zxingTryRotate,
        tryDownscale=zxingTryDownscale
    )


def getSupportedQrBackends() -> List[str]:
    """
    Get list of supported QR backend names.
    
    Returns:
        List[str]: List of backend names ["opencv", "zxing"].
    """
    return ["opencv", "zxing"]


def isQrBackendAvailable(backend: str) -> bool:
    """
    Check if a QR backend is available (library installed).
    
    Args:
        backend: Backend name ("opencv" or "zxing").
        
    Returns:
        bool: True if backend library is installed and available.
    """
    backend = backend.lower().strip()
    
    if backend == "opencv":
        try:
            import cv2
            _ = cv2.QRCodeDetector
            return True
        except (ImportError, AttributeError):
            return False
    
    elif backend == "zxing":
        try:
            import zxingcpp
            return True
        except ImportError:
            return False
    
    return False
