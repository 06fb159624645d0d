"""
Image Enhancement Module

Contains enhancers used by the preprocessing strategies:
- ContrastEnhancer: CLAHE-based local contrast enhancement
- SharpnessEnhancer: Unsharp Mask-based sharpness enhancement
"""

from core.enhancer.contrast_enhancer import ContrastEnhancer
from core.enhancer.sharpness_enhancer import SharpnessEnhancer


__all__ = [
    "ContrastEnhancer",
    "SharpnessEnhancer"
]
