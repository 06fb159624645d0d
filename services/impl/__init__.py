"""
Services Implementation Package.

Exports all service implementations for the QR Detector.
"""

from services.impl.config_service import ConfigService
from services.impl.qr_detection_service import QrDetectionService


__all__ = [
    "ConfigService",
    "QrDetectionService",
]
