"""Shared fixtures: synthetic QR images and fake capabilities."""

from typing import Callable, List, Optional

import cv2
import numpy as np
import pytest

from core.interfaces.image_codec_interface import IImageCodec
from core.interfaces.qr_reader_interface import IQrReader, Point2D, QrReadResult
from core.raster.opencv_image_codec import OpenCvImageCodec


QR_TEXT = "ORDER-2024-000123"


def makeQrImage(
    text: str = QR_TEXT,
    moduleSize: int = 8,
    border: int = 40,
    foreground: int = 0,
    background: int = 255
) -> np.ndarray:
    """Render a BGR QR code with crisp modules and a white margin."""
    symbol = cv2.QRCodeEncoder.create().encode(text)
    symbol = cv2.resize(
        symbol, None, fx=moduleSize, fy=moduleSize, interpolation=cv2.INTER_NEAREST
    )
    symbol = cv2.copyMakeBorder(
        symbol, border, border, border, border, cv2.BORDER_CONSTANT, value=255
    )
    # Map black/white onto the requested intensities
    gray = np.where(symbol < 128, foreground, background).astype(np.uint8)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def toPngBytes(image: np.ndarray) -> bytes:
    success, encoded = cv2.imencode(".png", image)
    assert success
    return encoded.tobytes()


def square(x0: float, y0: float, x1: float, y1: float) -> List[Point2D]:
    return [Point2D(x0, y0), Point2D(x1, y0), Point2D(x1, y1), Point2D(x0, y1)]


class FakeQrReader(IQrReader):
    """
    Scripted QR reader.

    `matcher(image, callIndex)` decides whether a call succeeds;
    callIndex starts at 1 and counts both detect and detectAndDecode.
    """

    def __init__(
        self,
        matcher: Optional[Callable[[np.ndarray, int], bool]] = None,
        text: str = QR_TEXT,
        corners: Optional[List[Point2D]] = None,
        error: Optional[Exception] = None
    ):
        self._matcher = matcher or (lambda image, index: False)
        self._text = text
        self._corners = corners if corners is not None else square(10, 10, 50, 50)
        self._error = error
        self.images: List[np.ndarray] = []
        self.detectCalls = 0
        self.decodeCalls = 0

    @property
    def callCount(self) -> int:
        return len(self.images)

    def _hit(self, image: np.ndarray) -> bool:
        self.images.append(image)
        if self._error is not None:
            raise self._error
        return self._matcher(image, len(self.images))

    def detect(self, image):
        self.detectCalls += 1
        return list(self._corners) if self._hit(image) else None

    def detectAndDecode(self, image):
        self.decodeCalls += 1
        if self._hit(image):
            return QrReadResult(text=self._text, corners=list(self._corners))
        return QrReadResult()


class RecordingCodec(IImageCodec):
    """OpenCV codec that records every call."""

    def __init__(self, failPng: bool = False):
        self._inner = OpenCvImageCodec()
        self._failPng = failPng
        self.calls: List[str] = []

    def read(self, filepath):
        self.calls.append("read")
        return self._inner.read(filepath)

    def decode(self, buffer):
        self.calls.append("decode")
        return self._inner.decode(buffer)

    def encodePng(self, image):
        self.calls.append("encodePng")
        if self._failPng:
            raise RuntimeError("encoder unavailable")
        return self._inner.encodePng(image)


@pytest.fixture
def qrImage() -> np.ndarray:
    return makeQrImage()


@pytest.fixture
def qrPng(qrImage) -> bytes:
    return toPngBytes(qrImage)


@pytest.fixture
def noiseImage() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(240, 320, 3), dtype=np.uint8)


@pytest.fixture
def codec() -> RecordingCodec:
    return RecordingCodec()
