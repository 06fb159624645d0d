"""
Fallback Orchestrator Module.

Drives the QR reader through the unmodified image first and then through
the preprocessing catalog, one strategy at a time, until an attempt
succeeds or the catalog is exhausted.

Pipeline:
1. Original color image (scaleFactor = 1.0)
2. Grayscale base, computed once
3. Catalog strategies in canonical order, first success wins

Exhausting the catalog is a normal outcome (detected = False).
Any fault raised by the reader or a transform aborts the whole call.

Follows:
- SRP: Only sequences attempts, does not implement transforms
- DIP: Depends on IQrReader abstraction (injected)
- OCP: New strategies are added to the catalog, not here
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import numpy as np

from core.exceptions import CapabilityError
from core.geometry.coordinate_remapper import CoordinateRemapper
from core.interfaces.qr_reader_interface import IQrReader, QuadCorners
from core.preprocessor.image_transforms import toGrayscale
from core.preprocessor.preprocess_strategy import PreprocessStrategy
from core.preprocessor.preprocessing_catalog import PreprocessingCatalog
from core.raster.raster_image import RasterImage


class PipelineMode(Enum):
    """What counts as a successful attempt."""
    DECODE_SINGLE = "decodeSingle"  # non-empty decoded text
    DETECT_ONLY = "detectOnly"      # non-empty corner set


@dataclass
class DetectionAttempt:
    """
    Result of one QR reader call on one candidate image.

    Attributes:
        strategyName: Strategy that produced the candidate ("original" for raw).
        decodedText: Decoded content, None if nothing was decoded.
        corners: Corners in the candidate image's coordinate space.
        scaleFactor: Forward scale of the candidate relative to the original.
    """
    strategyName: str
    decodedText: Optional[str] = None
    corners: QuadCorners = field(default_factory=list)
    scaleFactor: float = 1.0

    def isSuccess(self, mode: PipelineMode) -> bool:
        """Check if this attempt ends the pipeline."""
        if mode == PipelineMode.DETECT_ONLY:
            return len(self.corners) > 0
        return bool(self.decodedText)


@dataclass
class PipelineOutcome:
    """
    Result of a pipeline run.

    Attributes:
        detected: Whether an attempt succeeded.
        attempt: The winning attempt (raw corners), None if not detected.
        corners: Winning corners remapped to original image space.
        attemptCount: Number of reader calls made.
        winningImage: Candidate image of the winning attempt (for debug output).
    """
    detected: bool
    attempt: Optional[DetectionAttempt] = None
    corners: QuadCorners = field(default_factory=list)
    attemptCount: int = 0
    winningImage: Optional[np.ndarray] = field(default=None, repr=False)

    @property
    def data(self) -> Optional[str]:
        """Decoded text of the winning attempt."""
        return self.attempt.decodedText if self.attempt is not None else None

    @property
    def strategyName(self) -> Optional[str]:
        """Name of the winning strategy."""
        return self.attempt.strategyName if self.attempt is not None else None


class FallbackOrchestrator:
    """
    Sequential multi-strategy QR detection.

    Strategies are never evaluated in parallel and none is retried
    after it failed once, so a run is fully deterministic.
    """

    ORIGINAL_STRATEGY = "original"

    def __init__(
        self,
        reader: IQrReader,
        catalog: PreprocessingCatalog,
        remapper: Optional[CoordinateRemapper] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize FallbackOrchestrator.

        Args:
            reader: QR reading capability.
            catalog: Ordered preprocessing strategies.
            remapper: Maps winning corners back to original image space.
            logger: Logger instance for debug output.
        """
        self._reader = reader
        self._catalog = catalog
        self._remapper = remapper or CoordinateRemapper()
        self._logger = logger or logging.getLogger(__name__)

    def runPipeline(
        self,
        raster: RasterImage,
        mode: PipelineMode = PipelineMode.DECODE_SINGLE
    ) -> PipelineOutcome:
        """
        Run the fallback cascade on an image.

        Args:
            raster: Original image (never modified).
            mode: DECODE_SINGLE or DETECT_ONLY.

        Returns:
            PipelineOutcome with the winning attempt, or detected=False.

        Raises:
            CapabilityError: If the reader or a transform fails.
        """
        attemptCount = 1
        attempt = self._attempt(raster.pixels, self.ORIGINAL_STRATEGY, 1.0, mode)
        if attempt.isSuccess(mode):
            return self._finish(attempt, raster.pixels, attemptCount)

        base = self._runStep("grayscale", toGrayscale, raster.pixels)

        for strategy in self._strategiesFor(mode):
            if not self._runStep(strategy.name, strategy.appliesTo, base):
                self._logger.debug(f"Strategy '{strategy.name}' not applicable, skipped")
                continue

            candidate = self._runStep(strategy.name, strategy.apply, base)
            attemptCount += 1
            attempt = self._attempt(candidate, strategy.name, strategy.scaleFactor, mode)
            if attempt.isSuccess(mode):
                return self._finish(attempt, candidate, attemptCount)

        self._logger.debug(
            f"No QR code found after {attemptCount} attempts (mode={mode.value})"
        )
        return PipelineOutcome(detected=False, attemptCount=attemptCount)

    def _strategiesFor(self, mode: PipelineMode) -> List[PreprocessStrategy]:
        """Strategies tried after the raw attempt."""
        if mode == PipelineMode.DETECT_ONLY:
            return self._catalog.detectOnlyStrategies()
        return list(self._catalog)

    def _attempt(
        self,
        image: np.ndarray,
        strategyName: str,
        scaleFactor: float,
        mode: PipelineMode
    ) -> DetectionAttempt:
        """Call the reader once."""
        try:
            if mode == PipelineMode.DETECT_ONLY:
                corners = self._reader.detect(image)
                attempt = DetectionAttempt(
                    strategyName=strategyName,
                    corners=list(corners or []),
                    scaleFactor=scaleFactor
                )
            else:
                result = self._reader.detectAndDecode(image)
                attempt = DetectionAttempt(
                    strategyName=strategyName,
                    decodedText=result.text or None,
                    corners=list(result.corners or []),
                    scaleFactor=scaleFactor
                )
        except CapabilityError:
            raise
        except Exception as e:
            self._logger.error(f"QR reader failed on '{strategyName}': {e}")
            raise CapabilityError(f"QR reader failed on '{strategyName}': {e}") from e

        self._logger.debug(
            f"Attempt '{strategyName}': "
            f"{'success' if attempt.isSuccess(mode) else 'no result'}"
        )
        return attempt

    def _runStep(self, strategyName: str, step, image: np.ndarray):
        """Run a transform or applicability gate, turning any fault into CapabilityError."""
        try:
            return step(image)
        except Exception as e:
            self._logger.error(f"Transform '{strategyName}' failed: {e}")
            raise CapabilityError(f"Transform '{strategyName}' failed: {e}") from e

    def _finish(
        self,
        attempt: DetectionAttempt,
        image: np.ndarray,
        attemptCount: int
    ) -> PipelineOutcome:
        """Build the outcome of a winning attempt."""
        corners = self._remapper.remap(attempt.corners, attempt.scaleFactor)
        self._logger.info(
            f"QR found by strategy '{attempt.strategyName}' "
            f"(attempt {attemptCount}, scale={attempt.scaleFactor:g})"
        )
        return PipelineOutcome(
            detected=True,
            attempt=attempt,
            corners=corners,
            attemptCount=attemptCount,
            winningImage=image
        )
