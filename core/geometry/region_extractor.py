"""
Region Extractor Module.

Computes a padded, image-clamped bounding box around QR corners and
crops that region from the original color image.
"""

import math
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.interfaces.qr_reader_interface import QuadCorners
from core.raster.raster_image import RasterImage


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box (left, top, width, height) in pixels.

    Always lies inside [0, imageWidth) × [0, imageHeight).
    """
    x: int
    y: int
    width: int
    height: int


class RegionExtractor:
    """
    Extracts the QR code region from the original image.

    The crop is always taken from the unscaled, unfiltered color
    raster so the exported image shows the real content.
    """

    MIN_CORNERS = 4

    def __init__(self, padding: int = 10):
        """
        Initialize RegionExtractor.

        Args:
            padding: Margin added on each side of the bounding rectangle.
        """
        if padding < 0:
            raise ValueError(f"Padding must be non-negative, got {padding}")
        self._padding = padding

    @property
    def padding(self) -> int:
        """Get padding in pixels."""
        return self._padding

    def computeBoundingBox(
        self,
        corners: QuadCorners,
        imageWidth: int,
        imageHeight: int
    ) -> Optional[BoundingBox]:
        """
        Compute the padded and clamped bounding box of the corners.

        The rectangle spans floor(min)..floor(max) inclusive on each axis,
        matching cv2.boundingRect on integer points.

        Args:
            corners: Corner points in original image space.
            imageWidth: Original image width.
            imageHeight: Original image height.

        Returns:
            BoundingBox, or None with fewer than 4 corners or when the
            box does not overlap the image.
        """
        if len(corners) < self.MIN_CORNERS:
            return None

        xs = [math.floor(p.x) for p in corners]
        ys = [math.floor(p.y) for p in corners]
        left, top = min(xs), min(ys)
        width = max(xs) - left + 1
        height = max(ys) - top + 1

        pad = self._padding
        x = max(0, left - pad)
        y = max(0, top - pad)
        width = min(imageWidth - x, width + 2 * pad)
        height = min(imageHeight - y, height + 2 * pad)

        if width <= 0 or height <= 0:
            logger.debug(f"Bounding box outside image: x={x}, y={y}, w={width}, h={height}")
            return None

        return BoundingBox(x=x, y=y, width=width, height=height)

    def extract(self, raster: RasterImage, corners: QuadCorners) -> Optional[np.ndarray]:
        """
        Crop the QR region from the original raster.

        Args:
            raster: Original (unscaled) color image.
            corners: Corner points in original image space.

        Returns:
            Cropped copy of the region, or None if no box could be computed.
        """
        box = self.computeBoundingBox(corners, raster.width, raster.height)
        if box is None:
            return None

        logger.debug(f"Extracting region: {box}")
        return raster.pixels[box.y:box.y + box.height, box.x:box.x + box.width].copy()
