"""
Geometry Module

Coordinate bookkeeping for detected QR codes:
- CoordinateRemapper: Scaled image space -> original image space
- RegionExtractor: Padded, clamped crop of the original image
"""

from core.geometry.coordinate_remapper import CoordinateRemapper
from core.geometry.region_extractor import BoundingBox, RegionExtractor


__all__ = [
    "CoordinateRemapper",
    "BoundingBox",
    "RegionExtractor"
]
