# Services module for QR Detector
# Contains configuration and the public QR detection service

# Implementations are in services/impl/
# Import them directly from there:
# from services.impl.qr_detection_service import QrDetectionService
# from services.impl.config_service import ConfigService

__all__ = []
