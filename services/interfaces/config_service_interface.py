"""
Config Service Interface Module.

Defines the settings the QR detector reads at startup: the reading
backend, the preprocessing catalog parameters, region output and debug
output. main.createService maps each getter onto a QrDetectionService
parameter, so services never see the config object itself.
"""

from abc import ABC, abstractmethod
from typing import Any, List


class IConfigService(ABC):
    """
    Interface for QR detector configuration.

    Every getter returns a usable default when its key is absent.
    """

    @abstractmethod
    def loadConfig(self, configPath: str) -> bool:
        """
        Load configuration from a JSON file.

        Returns:
            bool: True if loaded successfully, False otherwise.
        """
        pass

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        "preprocessing.claheClipLimit" -> config["preprocessing"]["claheClipLimit"]
        """
        pass

    # QR reader

    @abstractmethod
    def getQrBackend(self) -> str:
        """Reading backend name ("opencv" or "zxing")."""
        pass

    @abstractmethod
    def isZxingTryRotate(self) -> bool:
        pass

    @abstractmethod
    def isZxingTryDownscale(self) -> bool:
        pass

    # Preprocessing catalog

    @abstractmethod
    def getClaheClipLimit(self) -> float:
        pass

    @abstractmethod
    def getClaheTileSize(self) -> int:
        pass

    @abstractmethod
    def getAdaptiveBlockSizes(self) -> List[int]:
        """Block sizes, one adaptive_threshold_<n> strategy each."""
        pass

    @abstractmethod
    def getAdaptiveC(self) -> float:
        pass

    @abstractmethod
    def getDenoiseDiameter(self) -> int:
        pass

    @abstractmethod
    def getDenoiseSigmaColor(self) -> float:
        pass

    @abstractmethod
    def getDenoiseSigmaSpace(self) -> float:
        pass

    @abstractmethod
    def getDenoiseBlockSize(self) -> int:
        pass

    @abstractmethod
    def getMorphKernelSize(self) -> int:
        pass

    @abstractmethod
    def getSharpenSigma(self) -> float:
        pass

    @abstractmethod
    def getSharpenAmount(self) -> float:
        pass

    @abstractmethod
    def getUpscaleFactor(self) -> float:
        pass

    @abstractmethod
    def getUpscaleMaxDimension(self) -> int:
        """Smaller-side limit below which upscale_2x applies."""
        pass

    @abstractmethod
    def getGammaValues(self) -> List[float]:
        """Gamma values, one gamma_<g> strategy each."""
        pass

    @abstractmethod
    def getCombinedBlockSize(self) -> int:
        """Block size of clahe_denoise_adaptive_threshold."""
        pass

    @abstractmethod
    def getModerateUpscaleFactor(self) -> float:
        """Factor of upscale_1.5x_clahe."""
        pass

    # Region output and debug

    @abstractmethod
    def getRegionPadding(self) -> int:
        pass

    @abstractmethod
    def getPngCompression(self) -> int:
        pass

    @abstractmethod
    def getDebugBasePath(self) -> str:
        pass

    @abstractmethod
    def isDebugEnabled(self) -> bool:
        pass
