"""
Image Transforms Module.

Primitive OpenCV operations used as building blocks for the
preprocessing strategies. Every function returns a new array and
never modifies its input.
"""

import cv2
import numpy as np


def toGrayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert a BGR image to single-channel grayscale.
    
    Grayscale input is returned as a copy.
    """
    if len(image.shape) == 3:
        if image.shape[2] == 1:
            return image[:, :, 0].copy()
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return image.copy()


def adaptiveThreshold(image: np.ndarray, blockSize: int, c: float = 2) -> np.ndarray:
    """
    Gaussian-weighted adaptive threshold, binary output.
    
    Args:
        image: Grayscale image.
        blockSize: Neighbourhood size (odd, >= 3).
        c: Constant subtracted from the weighted mean.
    """
    return cv2.adaptiveThreshold(
        image, 255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY,
        blockSize, c
    )


def otsuThreshold(image: np.ndarray, inverted: bool = False) -> np.ndarray:
    """
    Global Otsu threshold.
    
    Args:
        image: Grayscale image.
        inverted: Produce light-on-dark output (THRESH_BINARY_INV).
    """
    mode = cv2.THRESH_BINARY_INV if inverted else cv2.THRESH_BINARY
    _, binary = cv2.threshold(image, 0, 255, mode | cv2.THRESH_OTSU)
    return binary


def bilateralDenoise(
    image: np.ndarray,
    diameter: int = 9,
    sigmaColor: float = 75,
    sigmaSpace: float = 75
) -> np.ndarray:
    """Edge-preserving smoothing (bilateral filter)."""
    return cv2.bilateralFilter(image, diameter, sigmaColor, sigmaSpace)


def morphologicalClose(image: np.ndarray, kernelSize: int = 3) -> np.ndarray:
    """Morphological closing with a square kernel (fills small gaps)."""
    kernel = np.ones((kernelSize, kernelSize), np.uint8)
    return cv2.morphologyEx(image, cv2.MORPH_CLOSE, kernel)


def resizeByFactor(image: np.ndarray, factor: float) -> np.ndarray:
    """
    Resize by a uniform factor.
    
    Uses cubic interpolation for enlarging and area interpolation
    for shrinking.
    """
    interpolation = cv2.INTER_CUBIC if factor > 1.0 else cv2.INTER_AREA
    return cv2.resize(image, None, fx=factor, fy=factor, interpolation=interpolation)


def gammaCorrection(image: np.ndarray, gamma: float) -> np.ndarray:
    """
    Gamma correction through a 256-entry lookup table.
    
    gamma < 1 darkens, gamma > 1 brightens (out = 255 * (in / 255) ^ (1 / gamma)).
    """
    if gamma <= 0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    
    invGamma = 1.0 / gamma
    table = np.array(
        [((i / 255.0) ** invGamma) * 255 for i in range(256)]
    ).clip(0, 255).astype(np.uint8)
    return cv2.LUT(image, table)


def equalizeHistogram(image: np.ndarray) -> np.ndarray:
    """Global histogram equalization (grayscale only)."""
    return cv2.equalizeHist(image)
