"""
Preprocess Strategy Module.

Describes one named image transform tried by the fallback orchestrator.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np


@dataclass(frozen=True)
class PreprocessStrategy:
    """
    Named, parameterized preprocessing strategy.
    
    Attributes:
        name: Unique identifier (e.g. "adaptive_threshold_15").
        transform: Pure function of the grayscale base image.
        scaleFactor: Forward scale applied by the transform
                     (output pixel = input pixel × scaleFactor).
        isApplicable: Optional gate evaluated on the grayscale base image.
                      The strategy is skipped when it returns False.
        detectOnly: Whether the strategy is also tried in detect-only mode.
    """
    name: str
    transform: Callable[[np.ndarray], np.ndarray]
    scaleFactor: float = 1.0
    isApplicable: Optional[Callable[[np.ndarray], bool]] = None
    detectOnly: bool = False
    
    def appliesTo(self, image: np.ndarray) -> bool:
        """Check whether the strategy should run on this base image."""
        return self.isApplicable is None or bool(self.isApplicable(image))
    
    def apply(self, image: np.ndarray) -> np.ndarray:
        """Run the transform on the grayscale base image."""
        return self.transform(image)
