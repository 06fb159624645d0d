"""
Services Interfaces Package.

Exports all service interfaces for the QR Detector.
"""

from services.interfaces.base_service_interface import (
    IBaseService,
    BaseService
)

from services.interfaces.config_service_interface import IConfigService

from services.interfaces.qr_detection_service_interface import IQrDetectionService


__all__ = [
    # Base
    "IBaseService",
    "BaseService",
    # Config
    "IConfigService",
    # QR Detection
    "IQrDetectionService",
]
