"""
Result Assembler Module.

Builds the three public result shapes from a pipeline outcome:
- Single-detect:  {detected, data, corners?, qrCodeImage?}
- Multi-detect:   {detected, count, qrCodes: [{data, corners?, qrCodeImage?}]}
- Detect-only:    {hasQRCode, corners?}

The multi-detect shape carries at most one QR code: the pipeline stops at
the first successful attempt and the QR reader reports a single quad.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.encoding.base64_encoder import EncodedRegion, encodeRegion
from core.exceptions import CapabilityError
from core.geometry.coordinate_remapper import CoordinateRemapper
from core.geometry.region_extractor import RegionExtractor
from core.interfaces.image_codec_interface import IImageCodec
from core.interfaces.qr_reader_interface import QuadCorners
from core.pipeline.fallback_orchestrator import PipelineOutcome
from core.raster.raster_image import RasterImage


logger = logging.getLogger(__name__)


def _cornersToList(corners: QuadCorners) -> List[Dict[str, float]]:
    return [p.toDict() for p in corners]


@dataclass
class QrCodeEntry:
    """One decoded QR code of a multi-detect result."""
    data: str
    corners: Optional[QuadCorners] = None
    qrCodeImage: Optional[str] = None

    def toDict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"data": self.data}
        if self.corners:
            result["corners"] = _cornersToList(self.corners)
        if self.qrCodeImage:
            result["qrCodeImage"] = self.qrCodeImage
        return result


@dataclass
class SingleDetectionResult:
    """
    Result of detectAndDecode.

    Attributes:
        detected: Whether a QR code was decoded.
        data: Decoded text (None if not detected).
        corners: Corners in original image space (None if unavailable).
        qrCodeImage: PNG data URI of the region (None with < 4 corners).
        strategyName: Winning strategy (diagnostic, not part of toDict()).
        attemptCount: Reader calls made (diagnostic, not part of toDict()).
    """
    detected: bool
    data: Optional[str] = None
    corners: Optional[QuadCorners] = None
    qrCodeImage: Optional[str] = None
    strategyName: Optional[str] = None
    attemptCount: int = 0

    def toDict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"detected": self.detected, "data": self.data}
        if self.corners:
            result["corners"] = _cornersToList(self.corners)
        if self.qrCodeImage:
            result["qrCodeImage"] = self.qrCodeImage
        return result


@dataclass
class MultiDetectionResult:
    """Result of detectAndDecodeMultiple (count is 0 or 1)."""
    detected: bool
    count: int = 0
    qrCodes: List[QrCodeEntry] = field(default_factory=list)

    def toDict(self) -> Dict[str, Any]:
        return {
            "detected": self.detected,
            "count": self.count,
            "qrCodes": [entry.toDict() for entry in self.qrCodes]
        }


@dataclass
class PresenceResult:
    """Result of hasQRCode."""
    hasQRCode: bool
    corners: Optional[QuadCorners] = None

    def toDict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"hasQRCode": self.hasQRCode}
        if self.corners:
            result["corners"] = _cornersToList(self.corners)
        return result


class ResultAssembler:
    """
    Packages pipeline outcomes into public result records.

    Crops and PNG-encodes the QR region of the original image when at
    least 4 corners are available.
    """

    def __init__(
        self,
        codec: IImageCodec,
        extractor: Optional[RegionExtractor] = None,
        remapper: Optional[CoordinateRemapper] = None,
        includeImage: bool = True
    ):
        """
        Initialize ResultAssembler.

        Args:
            codec: Codec used to PNG-encode the extracted region.
            extractor: Region extractor (default padding 10px).
            remapper: Used to clamp published corners to the image.
            includeImage: Whether to produce qrCodeImage at all.
        """
        self._codec = codec
        self._extractor = extractor or RegionExtractor()
        self._remapper = remapper or CoordinateRemapper()
        self._includeImage = includeImage

    def assembleSingle(self, raster: RasterImage, outcome: PipelineOutcome) -> SingleDetectionResult:
        """Build the single-detect result."""
        if not outcome.detected:
            return SingleDetectionResult(
                detected=False,
                attemptCount=outcome.attemptCount
            )

        corners = self._publishCorners(raster, outcome)
        region = self.encodeRegion(raster, corners)
        return SingleDetectionResult(
            detected=True,
            data=outcome.data,
            corners=corners or None,
            qrCodeImage=region.dataUri if region is not None else None,
            strategyName=outcome.strategyName,
            attemptCount=outcome.attemptCount
        )

    def assembleMultiple(self, raster: RasterImage, outcome: PipelineOutcome) -> MultiDetectionResult:
        """Build the multi-detect result (at most one entry)."""
        if not outcome.detected:
            return MultiDetectionResult(detected=False, count=0, qrCodes=[])

        single = self.assembleSingle(raster, outcome)
        entry = QrCodeEntry(
            data=single.data,
            corners=single.corners,
            qrCodeImage=single.qrCodeImage
        )
        return MultiDetectionResult(detected=True, count=1, qrCodes=[entry])

    def assemblePresence(self, raster: RasterImage, outcome: PipelineOutcome) -> PresenceResult:
        """Build the detect-only result (no decoding, no region)."""
        if not outcome.detected:
            return PresenceResult(hasQRCode=False)
        return PresenceResult(
            hasQRCode=True,
            corners=self._publishCorners(raster, outcome) or None
        )

    def encodeRegion(self, raster: RasterImage, corners: QuadCorners) -> Optional[EncodedRegion]:
        """
        Crop and encode the QR region.

        Returns:
            EncodedRegion, or None if images are disabled, fewer than
            4 corners are available or the box is empty.

        Raises:
            CapabilityError: If PNG encoding fails.
        """
        if not self._includeImage:
            return None

        region = self._extractor.extract(raster, corners)
        if region is None:
            return None

        try:
            pngBytes = self._codec.encodePng(region)
        except Exception as e:
            logger.error(f"PNG encoding of QR region failed: {e}")
            raise CapabilityError(f"PNG encoding of QR region failed: {e}") from e

        return encodeRegion(pngBytes)

    def _publishCorners(self, raster: RasterImage, outcome: PipelineOutcome) -> QuadCorners:
        return self._remapper.clamp(outcome.corners, raster.width, raster.height)
