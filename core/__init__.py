# Core module for QR Detector
# Contains interfaces and implementations for image loading, QR reading,
# preprocessing strategies and the fallback pipeline

from core.exceptions import (
    QrPipelineError,
    InvalidArgumentError,
    ImageDecodeError,
    CapabilityError
)
from core.interfaces.qr_reader_interface import IQrReader, Point2D, QrReadResult
from core.interfaces.image_codec_interface import IImageCodec
from core.raster import RasterImage, RasterLoader, OpenCvImageCodec
from core.pipeline import FallbackOrchestrator, PipelineMode, ResultAssembler

__all__ = [
    "QrPipelineError",
    "InvalidArgumentError",
    "ImageDecodeError",
    "CapabilityError",
    "IQrReader",
    "Point2D",
    "QrReadResult",
    "IImageCodec",
    "RasterImage",
    "RasterLoader",
    "OpenCvImageCodec",
    "FallbackOrchestrator",
    "PipelineMode",
    "ResultAssembler",
]
