"""
Preprocessing Catalog Module.

This module provides the ordered list of preprocessing strategies tried
when the QR reader fails on the unmodified image.

Order matters: it encodes which degradation is most likely, from cheap
global fixes to expensive combined ones. The first strategy that lets the
reader succeed wins and the remaining ones are skipped.

Canonical order:
 1. grayscale                           (the shared base image itself)
 2. clahe                               (local contrast enhancement)
 3. adaptive_threshold_<block>          (one attempt per block size)
 4. otsu_threshold
 5. inverted_otsu_threshold             (light-on-dark polarity)
 6. denoise_adaptive_threshold          (bilateral filter, then adaptive)
 7. morphological_close                 (closing of the Otsu binary)
 8. sharpen                             (unsharp mask)
 9. upscale_<factor>x                   (only for small images)
10. gamma_<value>                       (one attempt per gamma value)
11. histogram_equalization
12. clahe_denoise_adaptive_threshold
13. upscale_<factor>x_clahe

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from functools import partial
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from core.enhancer.contrast_enhancer import ContrastEnhancer
from core.enhancer.sharpness_enhancer import SharpnessEnhancer
from core.preprocessor import image_transforms as transforms
from core.preprocessor.preprocess_strategy import PreprocessStrategy


class PreprocessingCatalog:
    """
    Ordered, enumerable set of preprocessing strategies.
    
    Every strategy is a pure function of the grayscale base image;
    strategies never see each other's results.
    """
    
    DEFAULT_ADAPTIVE_BLOCK_SIZES = (11, 15, 21, 31, 51)
    DEFAULT_GAMMA_VALUES = (0.5, 0.7, 1.5, 2.0)
    
    def __init__(
        self,
        claheClipLimit: float = 3.0,
        claheTileSize: int = 8,
        adaptiveBlockSizes: Sequence[int] = DEFAULT_ADAPTIVE_BLOCK_SIZES,
        adaptiveC: float = 2,
        denoiseDiameter: int = 9,
        denoiseSigmaColor: float = 75,
        denoiseSigmaSpace: float = 75,
        denoiseBlockSize: int = 11,
        morphKernelSize: int = 3,
        sharpenSigma: float = 1.0,
        sharpenAmount: float = 1.5,
        upscaleFactor: float = 2.0,
        upscaleMaxDimension: int = 800,
        gammaValues: Sequence[float] = DEFAULT_GAMMA_VALUES,
        combinedBlockSize: int = 31,
        moderateUpscaleFactor: float = 1.5,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PreprocessingCatalog.
        
        Args:
            claheClipLimit: CLAHE clip limit.
            claheTileSize: CLAHE tile grid size (tiles per side).
            adaptiveBlockSizes: Block sizes for adaptive thresholding,
                                tried in increasing order.
            adaptiveC: Constant subtracted in adaptive thresholding.
            denoiseDiameter: Bilateral filter pixel neighbourhood diameter.
            denoiseSigmaColor: Bilateral filter sigma in color space.
            denoiseSigmaSpace: Bilateral filter sigma in coordinate space.
            denoiseBlockSize: Adaptive block size used after denoising.
            morphKernelSize: Kernel size for morphological closing.
            sharpenSigma: Gaussian sigma for unsharp mask.
            sharpenAmount: Unsharp mask strength.
            upscaleFactor: Factor of the small-image upscale strategy.
            upscaleMaxDimension: Upscale only when the smaller image side
                                 is below this value (pixels).
            gammaValues: Gamma values, each tried as its own strategy.
            combinedBlockSize: Adaptive block size of the combined strategy.
            moderateUpscaleFactor: Factor of the upscale + CLAHE strategy.
            logger: Logger instance for debug output.
        """
        for blockSize in list(adaptiveBlockSizes) + [denoiseBlockSize, combinedBlockSize]:
            if blockSize < 3 or blockSize % 2 == 0:
                raise ValueError(
                    f"Adaptive block size must be odd and >= 3, got {blockSize}"
                )
        if upscaleFactor <= 0 or moderateUpscaleFactor <= 0:
            raise ValueError("Upscale factors must be positive")
        
        self._logger = logger or logging.getLogger(__name__)
        self._contrastEnhancer = ContrastEnhancer(
            clipLimit=claheClipLimit,
            tileGridSize=(claheTileSize, claheTileSize)
        )
        self._sharpnessEnhancer = SharpnessEnhancer(
            sigma=sharpenSigma,
            amount=sharpenAmount
        )
        self._adaptiveBlockSizes = tuple(sorted(adaptiveBlockSizes))
        self._adaptiveC = adaptiveC
        self._denoiseParams = (denoiseDiameter, denoiseSigmaColor, denoiseSigmaSpace)
        self._denoiseBlockSize = denoiseBlockSize
        self._morphKernelSize = morphKernelSize
        self._upscaleFactor = upscaleFactor
        self._upscaleMaxDimension = upscaleMaxDimension
        self._gammaValues = tuple(gammaValues)
        self._combinedBlockSize = combinedBlockSize
        self._moderateUpscaleFactor = moderateUpscaleFactor
        
        self._strategies: Tuple[PreprocessStrategy, ...] = tuple(self._buildStrategies())
        
        self._logger.info(
            f"PreprocessingCatalog initialized ({len(self._strategies)} strategies)"
        )
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Enumeration
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def __iter__(self) -> Iterator[PreprocessStrategy]:
        return iter(self._strategies)
    
    def __len__(self) -> int:
        return len(self._strategies)
    
    def names(self) -> List[str]:
        """Strategy names in canonical order."""
        return [strategy.name for strategy in self._strategies]
    
    def get(self, name: str) -> PreprocessStrategy:
        """
        Look up a strategy by name.
        
        Raises:
            KeyError: If no strategy has this name.
        """
        for strategy in self._strategies:
            if strategy.name == name:
                return strategy
        raise KeyError(name)
    
    def detectOnlyStrategies(self) -> List[PreprocessStrategy]:
        """Strategies meaningful for detect-only mode."""
        return [strategy for strategy in self._strategies if strategy.detectOnly]
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Strategy Construction
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def _buildStrategies(self) -> List[PreprocessStrategy]:
        """Build the strategy list in canonical order."""
        strategies = [
            PreprocessStrategy("grayscale", self._identity, detectOnly=True),
            PreprocessStrategy("clahe", self._contrastEnhancer.enhanceContrast, detectOnly=True),
        ]
        
        for blockSize in self._adaptiveBlockSizes:
            strategies.append(PreprocessStrategy(
                f"adaptive_threshold_{blockSize}",
                partial(transforms.adaptiveThreshold, blockSize=blockSize, c=self._adaptiveC)
            ))
        
        strategies += [
            PreprocessStrategy("otsu_threshold", transforms.otsuThreshold),
            PreprocessStrategy(
                "inverted_otsu_threshold",
                partial(transforms.otsuThreshold, inverted=True)
            ),
            PreprocessStrategy("denoise_adaptive_threshold", self._denoiseThenThreshold),
            PreprocessStrategy("morphological_close", self._closeOtsu),
            PreprocessStrategy("sharpen", self._sharpnessEnhancer.enhanceSharpness),
            PreprocessStrategy(
                f"upscale_{self._upscaleFactor:g}x",
                partial(transforms.resizeByFactor, factor=self._upscaleFactor),
                scaleFactor=self._upscaleFactor,
                isApplicable=self._isSmallImage
            ),
        ]
        
        for gamma in self._gammaValues:
            strategies.append(PreprocessStrategy(
                f"gamma_{gamma:g}",
                partial(transforms.gammaCorrection, gamma=gamma)
            ))
        
        strategies += [
            PreprocessStrategy("histogram_equalization", transforms.equalizeHistogram),
            PreprocessStrategy("clahe_denoise_adaptive_threshold", self._combinedThreshold),
            PreprocessStrategy(
                f"upscale_{self._moderateUpscaleFactor:g}x_clahe",
                self._upscaleThenEnhance,
                scaleFactor=self._moderateUpscaleFactor
            ),
        ]
        
        return strategies
    
    @staticmethod
    def _identity(image: np.ndarray) -> np.ndarray:
        return image
    
    def _isSmallImage(self, image: np.ndarray) -> bool:
        return min(image.shape[:2]) < self._upscaleMaxDimension
    
    def _denoiseThenThreshold(self, image: np.ndarray) -> np.ndarray:
        denoised = transforms.bilateralDenoise(image, *self._denoiseParams)
        return transforms.adaptiveThreshold(
            denoised, self._denoiseBlockSize, self._adaptiveC
        )
    
    def _closeOtsu(self, image: np.ndarray) -> np.ndarray:
        binary = transforms.otsuThreshold(image)
        return transforms.morphologicalClose(binary, self._morphKernelSize)
    
    def _combinedThreshold(self, image: np.ndarray) -> np.ndarray:
        # CLAHE → denoise → adaptive threshold (wider block)
        enhanced = self._contrastEnhancer.enhanceContrast(image)
        denoised = transforms.bilateralDenoise(enhanced, *self._denoiseParams)
        return transforms.adaptiveThreshold(
            denoised, self._combinedBlockSize, self._adaptiveC
        )
    
    def _upscaleThenEnhance(self, image: np.ndarray) -> np.ndarray:
        scaled = transforms.resizeByFactor(image, self._moderateUpscaleFactor)
        return self._contrastEnhancer.enhanceContrast(scaled)
