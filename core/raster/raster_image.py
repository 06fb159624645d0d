"""
Raster Image Module

Immutable container for a decoded pixel buffer.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class RasterImage:
    """
    Decoded image owned by a single pipeline invocation.
    
    The pixel buffer is never modified in place; every preprocessing
    step produces a new array.
    
    Attributes:
        pixels: Image data (H, W) for grayscale or (H, W, 3) for BGR.
    """
    pixels: np.ndarray
    
    @property
    def width(self) -> int:
        """Image width in pixels."""
        return int(self.pixels.shape[1])
    
    @property
    def height(self) -> int:
        """Image height in pixels."""
        return int(self.pixels.shape[0])
    
    @property
    def channels(self) -> int:
        """Channel count (1 or 3)."""
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])
    
    def isEmpty(self) -> bool:
        """Check if the raster has no pixels."""
        return self.pixels is None or self.pixels.size == 0
