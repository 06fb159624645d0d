import numpy as np
import pytest

from core.exceptions import CapabilityError
from core.interfaces.qr_reader_interface import Point2D, QrReadResult
from core.pipeline import FallbackOrchestrator, PipelineMode
from core.preprocessor import PreprocessingCatalog, PreprocessStrategy
from core.preprocessor import image_transforms as transforms
from core.qr import OpenCvQrReader
from core.raster import RasterImage
from tests.conftest import QR_TEXT, FakeQrReader, makeQrImage, square


class StubCatalog:
    """Minimal catalog holding a fixed strategy list."""

    def __init__(self, strategies):
        self._strategies = list(strategies)

    def __iter__(self):
        return iter(self._strategies)

    def detectOnlyStrategies(self):
        return [s for s in self._strategies if s.detectOnly]


def _raster(height=300, width=400):
    return RasterImage(pixels=np.full((height, width, 3), 200, np.uint8))


def _succeedOnCall(n):
    return lambda image, index: index == n


def test_raw_attempt_wins_with_single_call():
    reader = FakeQrReader(_succeedOnCall(1))
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())

    assert outcome.detected
    assert outcome.attemptCount == 1
    assert outcome.strategyName == FallbackOrchestrator.ORIGINAL_STRATEGY
    assert outcome.data == QR_TEXT
    assert reader.callCount == 1
    assert reader.images[0].ndim == 3


def test_strategies_follow_raw_attempt_in_order():
    reader = FakeQrReader(_succeedOnCall(3))
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())

    assert outcome.strategyName == "clahe"
    assert outcome.attemptCount == 3
    assert all(image.ndim == 2 for image in reader.images[1:])


def test_exhaustion_is_not_an_error():
    reader = FakeQrReader()
    catalog = PreprocessingCatalog()
    outcome = FallbackOrchestrator(reader, catalog).runPipeline(_raster())

    assert not outcome.detected
    assert outcome.data is None
    assert outcome.corners == []
    assert outcome.attemptCount == 1 + len(catalog)
    assert reader.callCount == outcome.attemptCount


def test_upscale_skipped_for_large_images():
    reader = FakeQrReader()
    catalog = PreprocessingCatalog()
    outcome = FallbackOrchestrator(reader, catalog).runPipeline(_raster(800, 900))

    assert outcome.attemptCount == len(catalog)
    widths = {image.shape[1] for image in reader.images}
    assert 1800 not in widths


def test_corners_remapped_from_upscaled_image():
    raster = _raster(300, 400)
    internal = [Point2D(200, 100), Point2D(400, 100), Point2D(400, 300), Point2D(200, 300)]
    reader = FakeQrReader(lambda image, index: image.shape[1] == 800, corners=internal)

    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(raster)

    assert outcome.strategyName == "upscale_2x"
    assert outcome.attempt.corners == internal
    assert outcome.corners == [Point2D(p.x / 2.0, p.y / 2.0) for p in internal]
    assert outcome.winningImage.shape == (600, 800)


def test_moderate_upscale_remapped_by_its_own_factor():
    internal = square(15, 30, 150, 165)
    reader = FakeQrReader(lambda image, index: image.shape[1] == 600, corners=internal)

    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster(300, 400))

    assert outcome.strategyName == "upscale_1.5x_clahe"
    assert outcome.corners == square(10, 20, 100, 110)


def test_corner_order_is_preserved():
    corners = [Point2D(50, 50), Point2D(10, 50), Point2D(10, 10), Point2D(50, 10)]
    reader = FakeQrReader(_succeedOnCall(1), corners=corners)
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())
    assert outcome.corners == corners


def test_located_but_undecoded_is_not_success():
    class LocateOnly(FakeQrReader):
        def detectAndDecode(self, image):
            self.images.append(image)
            return QrReadResult(text=None, corners=square(0, 0, 5, 5))

    reader = LocateOnly()
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())
    assert not outcome.detected


def test_empty_text_is_not_success():
    reader = FakeQrReader(lambda image, index: True, text="")
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())
    assert not outcome.detected


def test_original_raster_untouched():
    raster = RasterImage(pixels=makeQrImage(foreground=120, background=140))
    before = raster.pixels.copy()
    FallbackOrchestrator(FakeQrReader(), PreprocessingCatalog()).runPipeline(raster)
    np.testing.assert_array_equal(raster.pixels, before)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Detect-only mode
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_detect_only_uses_detect_and_limited_strategies():
    reader = FakeQrReader()
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(
        _raster(), mode=PipelineMode.DETECT_ONLY
    )

    assert not outcome.detected
    assert outcome.attemptCount == 3
    assert reader.detectCalls == 3
    assert reader.decodeCalls == 0


def test_detect_only_success_carries_corners():
    reader = FakeQrReader(_succeedOnCall(2), corners=square(5, 5, 25, 25))
    outcome = FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(
        _raster(), mode=PipelineMode.DETECT_ONLY
    )
    assert outcome.detected
    assert outcome.strategyName == "grayscale"
    assert outcome.corners == square(5, 5, 25, 25)
    assert outcome.data is None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Faults
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_reader_fault_becomes_capability_error():
    reader = FakeQrReader(error=RuntimeError("backend crashed"))
    with pytest.raises(CapabilityError) as info:
        FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())
    assert isinstance(info.value.__cause__, RuntimeError)
    assert reader.callCount == 1


def test_capability_error_propagates_unchanged():
    error = CapabilityError("reader unavailable")
    reader = FakeQrReader(error=error)
    with pytest.raises(CapabilityError) as info:
        FallbackOrchestrator(reader, PreprocessingCatalog()).runPipeline(_raster())
    assert info.value is error


def test_transform_fault_aborts_pipeline():
    def broken(image):
        raise MemoryError("out of memory")

    catalog = StubCatalog([
        PreprocessStrategy("broken", broken),
        PreprocessStrategy("never_reached", transforms.equalizeHistogram),
    ])
    reader = FakeQrReader()

    with pytest.raises(CapabilityError):
        FallbackOrchestrator(reader, catalog).runPipeline(_raster())
    assert reader.callCount == 1


def test_applicability_gate_fault_aborts_pipeline():
    def brokenGate(image):
        raise ValueError("bad shape")

    catalog = StubCatalog([
        PreprocessStrategy("gated", transforms.equalizeHistogram, isApplicable=brokenGate),
        PreprocessStrategy("never_reached", transforms.equalizeHistogram),
    ])
    reader = FakeQrReader()

    with pytest.raises(CapabilityError) as info:
        FallbackOrchestrator(reader, catalog).runPipeline(_raster())
    assert isinstance(info.value.__cause__, ValueError)
    assert "gated" in str(info.value)
    assert reader.callCount == 1


def test_custom_catalog_with_scaled_strategy():
    catalog = StubCatalog([
        PreprocessStrategy(
            "triple",
            lambda image: transforms.resizeByFactor(image, 3.0),
            scaleFactor=3.0
        ),
    ])
    reader = FakeQrReader(_succeedOnCall(2), corners=square(30, 60, 90, 120))
    outcome = FallbackOrchestrator(reader, catalog).runPipeline(_raster(50, 50))
    assert outcome.corners == square(10, 20, 30, 40)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Real reader
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_clean_qr_decoded_on_raw_attempt(qrImage):
    outcome = FallbackOrchestrator(OpenCvQrReader(), PreprocessingCatalog()).runPipeline(
        RasterImage(pixels=qrImage)
    )
    assert outcome.detected
    assert outcome.data == QR_TEXT
    assert outcome.attemptCount == 1


def test_pipeline_is_deterministic(qrImage):
    orchestrator = FallbackOrchestrator(OpenCvQrReader(), PreprocessingCatalog())
    first = orchestrator.runPipeline(RasterImage(pixels=qrImage))
    second = orchestrator.runPipeline(RasterImage(pixels=qrImage))
    assert first.corners == second.corners
    assert first.strategyName == second.strategyName
