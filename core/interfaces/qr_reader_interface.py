"""
QR Reader Interface Module.

This module defines the interface and data classes for the QR reading
capability: a black box that locates (and optionally decodes) a QR code.
Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np


@dataclass(frozen=True)
class Point2D:
    """
    Pixel coordinate.
    
    Attributes:
        x: Horizontal position (pixels from the left edge)
        y: Vertical position (pixels from the top edge)
    """
    x: float
    y: float
    
    def toDict(self) -> Dict[str, float]:
        """Convert to {"x": ..., "y": ...}."""
        return {"x": self.x, "y": self.y}


# Corner points in detector order (never re-sorted)
QuadCorners = List[Point2D]


@dataclass
class QrReadResult:
    """
    Result of a single detectAndDecode call.
    
    Attributes:
        text: Decoded QR content, None when nothing could be decoded
        corners: Corner points reported by the reader (may be empty)
    """
    text: Optional[str] = None
    corners: QuadCorners = field(default_factory=list)


class IQrReader(ABC):
    """
    Interface for the QR reading capability.
    
    Implementations must be stateless per call and raise CapabilityError
    on unexpected faults. Not finding a QR code is not a fault.
    """
    
    @abstractmethod
    def detect(self, image: np.ndarray) -> Optional[QuadCorners]:
        """
        Locate a QR code without decoding it.
        
        Args:
            image: Input image (BGR or grayscale numpy array)
            
        Returns:
            Corner points if a QR code was located, None otherwise
        """
        pass
    
    @abstractmethod
    def detectAndDecode(self, image: np.ndarray) -> QrReadResult:
        """
        Locate and decode a QR code.
        
        Args:
            image: Input image (BGR or grayscale numpy array)
            
        Returns:
            QrReadResult (text is None when decoding failed)
        """
        pass
