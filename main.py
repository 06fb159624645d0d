"""
QR Detector Command Line Application

Main entry point: reads one image, runs the adaptive QR detection pipeline
and prints the result as JSON.

Architecture:
- ConfigService: Reads application_config.json
- QrDetectionService: Receives parameters, creates core components internally

Usage:
    python main.py samples/label.jpg
    python main.py samples/label.jpg --mode detect
    python main.py samples/label.jpg --backend zxing --debug --no-image

Exit codes:
    0: QR code found
    1: No QR code found
    2: Error (invalid input, unreadable image, reader failure, bad config)
"""

import sys
import os
import argparse
import json
import logging
from typing import List, Optional

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, PROJECT_ROOT)

from core.exceptions import QrPipelineError
from services.impl.config_service import ConfigService
from services.impl.qr_detection_service import QrDetectionService
from services.interfaces.config_service_interface import IConfigService


EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2

MODES = ("decode", "multi", "detect")

DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "application_config.json")


def setupLogging(debugMode: bool = False) -> None:
    """
    Setup application logging.

    Logs go to stderr so stdout carries only the JSON result.

    Args:
        debugMode: If True, set log level to DEBUG.
    """
    level = logging.DEBUG if debugMode else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def createService(
    configService: IConfigService,
    backend: Optional[str] = None,
    debugMode: bool = False,
    includeImage: bool = True
) -> QrDetectionService:
    """
    Create the QR detection service with parameters from config.

    Following DIP: the service receives parameters, not IConfigService.

    Args:
        configService: Loaded configuration.
        backend: Backend override ("opencv" or "zxing").
        debugMode: Force debug output on.
        includeImage: Whether to produce qrCodeImage.

    Returns:
        Configured QrDetectionService.
    """
    return QrDetectionService(
        backend=backend or configService.getQrBackend(),
        zxingTryRotate=configService.isZxingTryRotate(),
        zxingTryDownscale=configService.isZxingTryDownscale(),
        preprocessingClaheClipLimit=configService.getClaheClipLimit(),
        preprocessingClaheTileSize=configService.getClaheTileSize(),
        preprocessingAdaptiveBlockSizes=configService.getAdaptiveBlockSizes(),
        preprocessingAdaptiveC=configService.getAdaptiveC(),
        preprocessingDenoiseDiameter=configService.getDenoiseDiameter(),
        preprocessingDenoiseSigmaColor=configService.getDenoiseSigmaColor(),
        preprocessingDenoiseSigmaSpace=configService.getDenoiseSigmaSpace(),
        preprocessingDenoiseBlockSize=configService.getDenoiseBlockSize(),
        preprocessingMorphKernelSize=configService.getMorphKernelSize(),
        preprocessingSharpenSigma=configService.getSharpenSigma(),
        preprocessingSharpenAmount=configService.getSharpenAmount(),
        preprocessingUpscaleFactor=configService.getUpscaleFactor(),
        preprocessingUpscaleMaxDimension=configService.getUpscaleMaxDimension(),
        preprocessingGammaValues=configService.getGammaValues(),
        preprocessingCombinedBlockSize=configService.getCombinedBlockSize(),
        preprocessingModerateUpscaleFactor=configService.getModerateUpscaleFactor(),
        regionPadding=configService.getRegionPadding(),
        regionPngCompression=configService.getPngCompression(),
        includeImage=includeImage,
        debugBasePath=configService.getDebugBasePath(),
        debugEnabled=debugMode or configService.isDebugEnabled()
    )


def parseArgs(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Detect and decode a QR code in an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py samples/label.jpg
  python main.py samples/label.jpg --mode multi
  python main.py samples/label.jpg --mode detect --backend zxing

Output:
  Result JSON on stdout. When --debug is enabled, the winning
  preprocessed image and a JSON summary are saved to output/debug/.
        """
    )

    parser.add_argument(
        "image",
        type=str,
        help="Path to the input image"
    )

    parser.add_argument(
        "--mode", "-m",
        choices=MODES,
        default="decode",
        help="decode: single QR, multi: QR list, detect: presence only (default: decode)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to configuration file "
             "(default: config/application_config.json next to main.py, "
             "built-in defaults when that file is absent)"
    )

    parser.add_argument(
        "--backend", "-b",
        choices=("opencv", "zxing"),
        default=None,
        help="QR reading backend (default: from config)"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (saves output to output/debug/)"
    )

    parser.add_argument(
        "--no-image",
        dest="includeImage",
        action="store_false",
        help="Omit the qrCodeImage data URI from the result"
    )

    return parser.parse_args(argv)


def resolveConfigPath(configArg: Optional[str]) -> Optional[str]:
    """
    Pick the configuration file to load.

    An explicit --config path is always used (a missing file is an error).
    Otherwise the bundled config is used when present, else None so
    ConfigService falls back to its defaults.
    """
    if configArg:
        return configArg
    if os.path.isfile(DEFAULT_CONFIG_PATH):
        return DEFAULT_CONFIG_PATH
    return None


def runMode(service: QrDetectionService, mode: str, imagePath: str) -> dict:
    """Run one service operation and return its result dictionary."""
    if mode == "multi":
        return service.detectAndDecodeMultiple(imagePath)
    if mode == "detect":
        return service.hasQRCode(imagePath)
    return service.detectAndDecode(imagePath)


def isFound(result: dict) -> bool:
    """Check the found flag of any result shape."""
    return bool(result.get("detected", result.get("hasQRCode", False)))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code.
    """
    args = parseArgs(argv)

    setupLogging(debugMode=args.debug)
    logger = logging.getLogger(__name__)

    try:
        configService = ConfigService(resolveConfigPath(args.config))
        service = createService(
            configService,
            backend=args.backend,
            debugMode=args.debug,
            includeImage=args.includeImage
        )
        result = runMode(service, args.mode, args.image)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (QrPipelineError, RuntimeError, ValueError, ImportError) as e:
        logger.error(f"QR detection failed: {e}")
        return EXIT_ERROR

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return EXIT_FOUND if isFound(result) else EXIT_NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
