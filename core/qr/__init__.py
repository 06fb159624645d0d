"""QR Reading module."""

from core.qr.opencv_qr_reader import OpenCvQrReader
from core.qr.zxing_qr_reader import ZxingQrReader
from core.qr.qr_reader_factory import (
    createQrReader,
    getSupportedQrBackends,
    isQrBackendAvailable
)

__all__ = [
    'OpenCvQrReader',
    'ZxingQrReader',
    'createQrReader',
    'getSupportedQrBackends',
    'isQrBackendAvailable'
]
