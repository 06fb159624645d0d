"""
QR Detection Service Implementation.

Entry point of the detector: loads the image, runs the fallback pipeline
and packages the outcome into one of the three public result shapes.
Creates and manages core components using the factory pattern.

Follows:
- SRP: Only wires core components and handles logging/debug output
- DIP: Depends on IQrReader / IImageCodec abstractions (injectable)
- Factory Pattern: Uses createQrReader() for backend selection
"""

import uuid
from typing import Any, Dict, Optional, Sequence, Tuple

from core.exceptions import CapabilityError, QrPipelineError
from core.geometry import CoordinateRemapper, RegionExtractor
from core.interfaces.image_codec_interface import IImageCodec
from core.interfaces.qr_reader_interface import IQrReader
from core.pipeline import (
    FallbackOrchestrator,
    MultiDetectionResult,
    PipelineMode,
    PipelineOutcome,
    PresenceResult,
    ResultAssembler,
    SingleDetectionResult
)
from core.preprocessor import PreprocessingCatalog
from core.qr import createQrReader
from core.raster import ImageSource, OpenCvImageCodec, RasterImage, RasterLoader
from services.interfaces.base_service_interface import BaseService
from services.interfaces.qr_detection_service_interface import IQrDetectionService


class QrDetectionService(IQrDetectionService, BaseService):
    """
    QR Detection Service Implementation.

    Every call is independent: the service holds configuration and
    stateless components only, so one instance may serve concurrent calls.
    """

    SERVICE_NAME = "qr_detection"

    def __init__(
        self,
        # Backend selection
        backend: str = "opencv",

        # ZXing params (prefixed with 'zxing')
        zxingTryRotate: bool = True,
        zxingTryDownscale: bool = True,

        # Preprocessing params (prefixed with 'preprocessing')
        preprocessingClaheClipLimit: float = 3.0,
        preprocessingClaheTileSize: int = 8,
        preprocessingAdaptiveBlockSizes: Sequence[int] = (11, 15, 21, 31, 51),
        preprocessingAdaptiveC: float = 2,
        preprocessingDenoiseDiameter: int = 9,
        preprocessingDenoiseSigmaColor: float = 75,
        preprocessingDenoiseSigmaSpace: float = 75,
        preprocessingDenoiseBlockSize: int = 11,
        preprocessingMorphKernelSize: int = 3,
        preprocessingSharpenSigma: float = 1.0,
        preprocessingSharpenAmount: float = 1.5,
        preprocessingUpscaleFactor: float = 2.0,
        preprocessingUpscaleMaxDimension: int = 800,
        preprocessingGammaValues: Sequence[float] = (0.5, 0.7, 1.5, 2.0),
        preprocessingCombinedBlockSize: int = 31,
        preprocessingModerateUpscaleFactor: float = 1.5,

        # Region params (prefixed with 'region')
        regionPadding: int = 10,
        regionPngCompression: int = 9,
        includeImage: bool = True,

        # Injected capabilities (created from params when omitted)
        qrReader: Optional[IQrReader] = None,
        imageCodec: Optional[IImageCodec] = None,

        # Debug settings
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize QrDetectionService.

        Args:
            backend: QR reading backend ("opencv" or "zxing").
            zxingTryRotate: (ZXing) Try rotated symbols.
            zxingTryDownscale: (ZXing) Try downscaled versions.
            preprocessing*: Parameters of the preprocessing catalog.
            regionPadding: Padding around the extracted QR region.
            regionPngCompression: PNG compression level (0-9).
            includeImage: Whether to produce qrCodeImage.
            qrReader: Custom QR reader (overrides backend).
            imageCodec: Custom image codec (overrides regionPngCompression).
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.

        Raises:
            ValueError: If backend or a preprocessing parameter is invalid.
            ImportError: If the selected backend is not installed.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )

        # Create QR reader using factory
        self._qrReader: IQrReader = qrReader or createQrReader(
            backend=backend,
            zxingTryRotate=zxingTryRotate,
            zxingTryDownscale=zxingTryDownscale
        )
        self._codec: IImageCodec = imageCodec or OpenCvImageCodec(
            pngCompression=regionPngCompression
        )

        self._catalog = PreprocessingCatalog(
            claheClipLimit=preprocessingClaheClipLimit,
            claheTileSize=preprocessingClaheTileSize,
            adaptiveBlockSizes=preprocessingAdaptiveBlockSizes,
            adaptiveC=preprocessingAdaptiveC,
            denoiseDiameter=preprocessingDenoiseDiameter,
            denoiseSigmaColor=preprocessingDenoiseSigmaColor,
            denoiseSigmaSpace=preprocessingDenoiseSigmaSpace,
            denoiseBlockSize=preprocessingDenoiseBlockSize,
            morphKernelSize=preprocessingMorphKernelSize,
            sharpenSigma=preprocessingSharpenSigma,
            sharpenAmount=preprocessingSharpenAmount,
            upscaleFactor=preprocessingUpscaleFactor,
            upscaleMaxDimension=preprocessingUpscaleMaxDimension,
            gammaValues=preprocessingGammaValues,
            combinedBlockSize=preprocessingCombinedBlockSize,
            moderateUpscaleFactor=preprocessingModerateUpscaleFactor,
            logger=self._logger
        )

        remapper = CoordinateRemapper(logger=self._logger)
        self._loader = RasterLoader(self._codec)
        self._orchestrator = FallbackOrchestrator(
            reader=self._qrReader,
            catalog=self._catalog,
            remapper=remapper,
            logger=self._logger
        )
        self._assembler = ResultAssembler(
            codec=self._codec,
            extractor=RegionExtractor(padding=regionPadding),
            remapper=remapper,
            includeImage=includeImage
        )

        self._backend = backend if qrReader is None else type(qrReader).__name__

        self._logger.info(
            f"Service '{self.getServiceName()}' initialized "
            f"(backend={self._backend}, strategies={len(self._catalog)}, "
            f"padding={regionPadding}, includeImage={includeImage})"
        )

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Public API (JSON-serializable dictionaries)
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def detectAndDecode(self, source: Optional[ImageSource] = None) -> Dict[str, Any]:
        return self.detectAndDecodeResult(source).toDict()

    def detectAndDecodeMultiple(self, source: Optional[ImageSource] = None) -> Dict[str, Any]:
        return self.detectAndDecodeMultipleResult(source).toDict()

    def hasQRCode(self, source: Optional[ImageSource] = None) -> Dict[str, Any]:
        return self.hasQRCodeResult(source).toDict()

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Typed API
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def detectAndDecodeResult(self, source: Optional[ImageSource] = None) -> SingleDetectionResult:
        """
        Detect and decode a single QR code.

        Raises:
            InvalidArgumentError: If source is missing or of the wrong type.
            ImageDecodeError: If the source cannot be decoded into pixels.
            CapabilityError: If the reader, a transform or PNG encoding fails.
        """
        frameId = self._newFrameId()
        startTime = self._startTimer()
        raster, outcome = self._run(frameId, source, PipelineMode.DECODE_SINGLE)
        result = self._guard(frameId, lambda: self._assembler.assembleSingle(raster, outcome))
        self._report(frameId, startTime, outcome, result.toDict())
        return result

    def detectAndDecodeMultipleResult(self, source: Optional[ImageSource] = None) -> MultiDetectionResult:
        """
        Detect and decode QR codes (at most one is reported).

        Raises:
            InvalidArgumentError, ImageDecodeError, CapabilityError
        """
        frameId = self._newFrameId()
        startTime = self._startTimer()
        raster, outcome = self._run(frameId, source, PipelineMode.DECODE_SINGLE)
        result = self._guard(frameId, lambda: self._assembler.assembleMultiple(raster, outcome))
        self._report(frameId, startTime, outcome, result.toDict())
        return result

    def hasQRCodeResult(self, source: Optional[ImageSource] = None) -> PresenceResult:
        """
        Check for a QR code without decoding it.

        Only the raw image and the cheap detect-only strategies are tried.

        Raises:
            InvalidArgumentError, ImageDecodeError, CapabilityError
        """
        frameId = self._newFrameId()
        startTime = self._startTimer()
        raster, outcome = self._run(frameId, source, PipelineMode.DETECT_ONLY)
        result = self._assembler.assemblePresence(raster, outcome)
        self._report(frameId, startTime, outcome, result.toDict())
        return result

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Accessors
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getBackend(self) -> str:
        """Get current QR reading backend."""
        return self._backend

    def getCatalog(self) -> PreprocessingCatalog:
        """Get the preprocessing catalog driving the fallback pipeline."""
        return self._catalog

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Internals
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @staticmethod
    def _newFrameId() -> str:
        return uuid.uuid4().hex[:12]

    def _run(
        self,
        frameId: str,
        source: Optional[ImageSource],
        mode: PipelineMode
    ) -> Tuple[RasterImage, PipelineOutcome]:
        """Load the image and run the pipeline, logging failures."""
        def work():
            raster = self._loader.load(source)
            self._logger.debug(
                f"[{frameId}] Loaded image {raster.width}x{raster.height} "
                f"({raster.channels} channels)"
            )
            return raster, self._orchestrator.runPipeline(raster, mode)

        return self._guard(frameId, work)

    def _guard(self, frameId: str, work):
        """Run work, logging pipeline errors before re-raising them."""
        try:
            return work()
        except CapabilityError as e:
            self._logger.error(f"[{frameId}] QR detection failed: {e}")
            raise
        except QrPipelineError as e:
            self._logger.warning(f"[{frameId}] Invalid input: {e}")
            raise

    def _report(
        self,
        frameId: str,
        startTime: float,
        outcome: PipelineOutcome,
        payload: Dict[str, Any]
    ) -> None:
        """Log timing and result, then save debug output (not timed)."""
        processingTimeMs = self._elapsedMs(startTime)

        if outcome.detected:
            self._logger.info(
                f"[{frameId}] QR found (strategy={outcome.strategyName}, "
                f"attempts={outcome.attemptCount}, time={processingTimeMs:.2f}ms)"
            )
        else:
            self._logger.warning(
                f"[{frameId}] No QR code detected "
                f"(attempts={outcome.attemptCount}, time={processingTimeMs:.2f}ms)"
            )

        if self.getDebugPath() is None:
            return

        if outcome.detected:
            self._saveCandidateImage(
                frameId,
                outcome.winningImage,
                outcome.strategyName,
                outcome.attempt.scaleFactor
            )
        self._saveSummary(frameId, {
            "strategy": outcome.strategyName,
            "attemptCount": outcome.attemptCount,
            "processingTimeMs": round(processingTimeMs, 2),
            "result": {k: v for k, v in payload.items() if k != "qrCodeImage"}
        })
