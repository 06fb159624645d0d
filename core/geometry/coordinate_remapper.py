"""
Coordinate Remapper Module.

Maps QR corner coordinates detected on a resized intermediate image back
to the pixel space of the original image.
"""

import logging
from typing import Optional

from core.interfaces.qr_reader_interface import Point2D, QuadCorners


class CoordinateRemapper:
    """
    Inverse-maps corner coordinates through the scaling of a strategy.

    A strategy with scaleFactor s maps original pixel p to p × s, so
    corners found on its output are divided by s.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def remap(self, corners: QuadCorners, scaleFactor: float) -> QuadCorners:
        """
        Scale corners back to the original image.

        Args:
            corners: Corners in the scaled image's coordinate space.
            scaleFactor: Forward scale applied by the winning strategy.

        Returns:
            Corners in original image space (same order). The input list
            is returned unchanged when scaleFactor is 1.0.

        Raises:
            ValueError: If scaleFactor is not positive.
        """
        if scaleFactor <= 0:
            raise ValueError(f"Scale factor must be positive, got {scaleFactor}")

        if scaleFactor == 1.0:
            return corners

        self._logger.debug(f"Scaling back {len(corners)} corners by 1/{scaleFactor}")
        return [Point2D(p.x / scaleFactor, p.y / scaleFactor) for p in corners]

    def clamp(self, corners: QuadCorners, width: int, height: int) -> QuadCorners:
        """
        Limit corners to [0, width - 1] × [0, height - 1].

        Detectors may report points slightly outside the image when the
        symbol touches the border.
        """
        maxX = float(max(width - 1, 0))
        maxY = float(max(height - 1, 0))
        return [
            Point2D(min(max(p.x, 0.0), maxX), min(max(p.y, 0.0), maxY))
            for p in corners
        ]
