import numpy as np
import pytest

from core.geometry import BoundingBox, CoordinateRemapper, RegionExtractor
from core.interfaces.qr_reader_interface import Point2D
from core.raster import RasterImage
from tests.conftest import square


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CoordinateRemapper
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_remap_identity_keeps_corners():
    corners = square(1.5, 2.5, 30, 40)
    assert CoordinateRemapper().remap(corners, 1.0) == corners


def test_remap_divides_by_scale_factor():
    corners = [Point2D(200, 100), Point2D(400, 100), Point2D(400, 300), Point2D(200, 300)]
    remapped = CoordinateRemapper().remap(corners, 2.0)
    assert remapped == [Point2D(100, 50), Point2D(200, 50), Point2D(200, 150), Point2D(100, 150)]


def test_remap_preserves_order():
    corners = [Point2D(30, 0), Point2D(0, 0), Point2D(0, 30)]
    remapped = CoordinateRemapper().remap(corners, 1.5)
    assert [p.x for p in remapped] == [20, 0, 0]


@pytest.mark.parametrize("factor", [0, -1.0])
def test_remap_rejects_non_positive_factor(factor):
    with pytest.raises(ValueError):
        CoordinateRemapper().remap(square(0, 0, 1, 1), factor)


def test_clamp_limits_to_image():
    corners = [Point2D(-3.2, 5), Point2D(120.7, -1), Point2D(99.5, 80)]
    clamped = CoordinateRemapper().clamp(corners, width=100, height=60)
    assert clamped == [Point2D(0.0, 5), Point2D(99.0, 0.0), Point2D(99.0, 59.0)]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# RegionExtractor
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def test_bounding_box_with_padding():
    box = RegionExtractor(padding=10).computeBoundingBox(square(40, 30, 80, 70), 200, 200)
    assert box == BoundingBox(x=30, y=20, width=61, height=61)


def test_bounding_box_floors_fractional_corners():
    box = RegionExtractor(padding=0).computeBoundingBox(square(10.9, 20.2, 19.6, 29.99), 100, 100)
    assert box == BoundingBox(x=10, y=20, width=10, height=10)


def test_bounding_box_clamped_at_top_left():
    box = RegionExtractor(padding=10).computeBoundingBox(square(5, 5, 50, 50), 100, 100)
    assert box.x == 0 and box.y == 0
    assert box.width == 66 and box.height == 66


def test_bounding_box_clamped_at_bottom_right():
    box = RegionExtractor(padding=10).computeBoundingBox(square(90, 90, 99, 99), 100, 100)
    assert box == BoundingBox(x=80, y=80, width=20, height=20)


def test_bounding_box_needs_four_corners():
    extractor = RegionExtractor()
    assert extractor.computeBoundingBox(square(0, 0, 10, 10)[:3], 100, 100) is None
    assert extractor.computeBoundingBox([], 100, 100) is None


def test_bounding_box_outside_image_is_none():
    assert RegionExtractor(padding=0).computeBoundingBox(square(150, 150, 160, 160), 100, 100) is None


def test_negative_padding_rejected():
    with pytest.raises(ValueError):
        RegionExtractor(padding=-1)


def test_extract_crops_original_pixels():
    pixels = np.arange(100 * 100 * 3, dtype=np.uint32).reshape(100, 100, 3).astype(np.uint8)
    raster = RasterImage(pixels=pixels)

    region = RegionExtractor(padding=2).extract(raster, square(10, 20, 30, 40))

    assert region.shape == (25, 25, 3)
    np.testing.assert_array_equal(region, pixels[18:43, 8:33])
    region[:] = 0
    assert pixels[18:43, 8:33].any()


def test_extract_returns_none_without_box():
    raster = RasterImage(pixels=np.zeros((50, 50, 3), np.uint8))
    assert RegionExtractor().extract(raster, square(0, 0, 5, 5)[:2]) is None
