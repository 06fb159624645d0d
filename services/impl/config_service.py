"""
Config Service Implementation.

Centralized configuration management for the QR Detector.
Loads configuration from application_config.json organized by section.

Every getter carries the default used when the key is absent, so a
partial config file is valid.

Follows:
- SRP: Only handles configuration management
- DIP: Provides configuration to other services via interface
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional


from services.interfaces.config_service_interface import IConfigService


logger = logging.getLogger(__name__)


class ConfigService(IConfigService):
    """
    Implementation of IConfigService.

    Loads and manages application configuration from application_config.json.
    Configuration is organized by section (qr_reader, preprocessing, region, debug).
    """

    def __init__(self, configPath: Optional[str] = None):
        """
        Initialize ConfigService.

        Args:
            configPath: Path to the configuration file. None runs on the
                        getter defaults without reading any file.

        Raises:
            RuntimeError: If a given file is missing or not valid JSON.
        """
        self._config: Dict[str, Any] = {}

        if configPath is None:
            logger.info("No configuration file given, using built-in defaults")
            return

        # Load config (required once a path is given)
        if not self.loadConfig(configPath):
            raise RuntimeError(f"Failed to load configuration from: {configPath}")

    def loadConfig(self, configPath: str) -> bool:
        """Load configuration from JSON file."""
        try:
            path = Path(configPath)
            if not path.exists():
                logger.error(f"Config file not found: {configPath}")
                return False

            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)

            if not isinstance(config, dict):
                logger.error(f"Config root must be an object: {configPath}")
                return False

            self._config = config

            logger.info(f"Configuration loaded from: {path.absolute()}")
            return True

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            return False

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Generic Config Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key with dot notation support.

        Examples:
            get("qr_reader.backend") -> "opencv"
            get("preprocessing.claheClipLimit") -> 3.0
            get("region.padding") -> 10
        """
        value = self._config
        for part in key.split('.'):
            if isinstance(value, dict):
                value = value.get(part)
                if value is None:
                    return default
            else:
                return default
        return value

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getDebugBasePath(self) -> str:
        """Get base path for debug output."""
        return self.get("debug.basePath", "output/debug")

    def isDebugEnabled(self) -> bool:
        """Check if debug mode is enabled."""
        return bool(self.get("debug.enabled", False))

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # QR Reader Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getQrBackend(self) -> str:
        """
        Get QR reader backend (opencv or zxing).

        Returns:
            str: Backend name, default "opencv".
        """
        return self.get("qr_reader.backend", "opencv").lower()

    def isZxingTryRotate(self) -> bool:
        """Check if zxing should try rotated symbols."""
        return self.get("qr_reader.zxingTryRotate", True)

    def isZxingTryDownscale(self) -> bool:
        """Check if zxing should try downscaled images."""
        return self.get("qr_reader.zxingTryDownscale", True)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Preprocessing Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getClaheClipLimit(self) -> float:
        """Get CLAHE clip limit."""
        return self.get("preprocessing.claheClipLimit", 3.0)

    def getClaheTileSize(self) -> int:
        """Get CLAHE tile grid size."""
        return self.get("preprocessing.claheTileSize", 8)

    def getAdaptiveBlockSizes(self) -> List[int]:
        """Get adaptive threshold block sizes."""
        return self.get("preprocessing.adaptiveBlockSizes", [11, 15, 21, 31, 51])

    def getAdaptiveC(self) -> float:
        """Get adaptive threshold constant."""
        return self.get("preprocessing.adaptiveC", 2)

    def getDenoiseDiameter(self) -> int:
        """Get bilateral filter diameter."""
        return self.get("preprocessing.denoiseDiameter", 9)

    def getDenoiseSigmaColor(self) -> float:
        """Get bilateral filter color sigma."""
        return self.get("preprocessing.denoiseSigmaColor", 75)

    def getDenoiseSigmaSpace(self) -> float:
        """Get bilateral filter space sigma."""
        return self.get("preprocessing.denoiseSigmaSpace", 75)

    def getDenoiseBlockSize(self) -> int:
        """Get adaptive block size used after denoising."""
        return self.get("preprocessing.denoiseBlockSize", 11)

    def getMorphKernelSize(self) -> int:
        """Get morphological closing kernel size."""
        return self.get("preprocessing.morphKernelSize", 3)

    def getSharpenSigma(self) -> float:
        """Get unsharp mask sigma."""
        return self.get("preprocessing.sharpenSigma", 1.0)

    def getSharpenAmount(self) -> float:
        """Get unsharp mask amount."""
        return self.get("preprocessing.sharpenAmount", 1.5)

    def getUpscaleFactor(self) -> float:
        """Get small-image upscale factor."""
        return self.get("preprocessing.upscaleFactor", 2.0)

    def getUpscaleMaxDimension(self) -> int:
        """Get size threshold below which small images are upscaled."""
        return self.get("preprocessing.upscaleMaxDimension", 800)

    def getGammaValues(self) -> List[float]:
        """Get gamma correction values."""
        return self.get("preprocessing.gammaValues", [0.5, 0.7, 1.5, 2.0])

    def getCombinedBlockSize(self) -> int:
        """Get block size of the combined CLAHE/denoise/threshold strategy."""
        return self.get("preprocessing.combinedBlockSize", 31)

    def getModerateUpscaleFactor(self) -> float:
        """Get factor of the upscale + CLAHE strategy."""
        return self.get("preprocessing.moderateUpscaleFactor", 1.5)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Region Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getRegionPadding(self) -> int:
        """Get padding around the extracted QR region."""
        return self.get("region.padding", 10)

    def getPngCompression(self) -> int:
        """Get PNG compression level of the extracted region."""
        return self.get("region.pngCompression", 9)
