"""
Base Service Interface Module.

Shared plumbing of detector services: a named logger, per-call timing
and the optional debug dump of the candidate image that won the
fallback pipeline.

Debug layout (the image only when a code was found):
    <debugBasePath>/<serviceName>/<frameId>_<strategy>_x<scale>.png
    <debugBasePath>/<serviceName>/<frameId>_summary.json
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import time

import cv2
import numpy as np


class IBaseService(ABC):
    """Base interface for detector services."""

    @abstractmethod
    def getServiceName(self) -> str:
        """
        Get the service name used for the logger and debug folder.

        Returns:
            str: Service name (e.g., "qr_detection")
        """
        pass


class BaseService(IBaseService):
    """
    Helper base class holding logger, timing and debug output.

    Debug output is fixed at construction; a service that should write it
    is built with debugEnabled=True.
    """

    def __init__(
        self,
        serviceName: str,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        self._serviceName = serviceName
        self._debugDir = Path(debugBasePath) / serviceName
        self._debugEnabled = debugEnabled
        self._logger = logging.getLogger(serviceName)

        if debugEnabled:
            self._debugDir.mkdir(parents=True, exist_ok=True)
            self._logger.debug(f"Debug output goes to {self._debugDir}")

    def getServiceName(self) -> str:
        return self._serviceName

    def getDebugPath(self) -> Optional[Path]:
        """Folder receiving debug output, None while debug is off."""
        return self._debugDir if self._debugEnabled else None

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Timing
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    @staticmethod
    def _startTimer() -> float:
        return time.perf_counter()

    @staticmethod
    def _elapsedMs(startTime: float) -> float:
        """Milliseconds since a _startTimer() value."""
        return (time.perf_counter() - startTime) * 1000

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug output
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _saveCandidateImage(
        self,
        frameId: str,
        image: Optional[np.ndarray],
        strategyName: str,
        scaleFactor: float
    ) -> Optional[Path]:
        """
        Save the candidate image a strategy produced.

        Raw corners of the winning attempt are in this image's coordinate
        space, i.e. the original coordinates times scaleFactor.

        Returns:
            Saved file path, or None if debug is off or the write failed.
        """
        if not self._debugEnabled or image is None:
            return None

        filepath = self._debugDir / f"{frameId}_{strategyName}_x{scaleFactor:g}.png"
        try:
            if not cv2.imwrite(str(filepath), image):
                self._logger.warning(f"[{frameId}] Could not write debug image {filepath}")
                return None
        except cv2.error as e:
            self._logger.warning(f"[{frameId}] Could not write debug image {filepath}: {e}")
            return None

        self._logger.debug(f"[{frameId}] Saved candidate image: {filepath}")
        return filepath

    def _saveSummary(self, frameId: str, summary: Dict[str, Any]) -> Optional[Path]:
        """
        Save the per-call summary (strategy, attempts, timing, result).

        Returns:
            Saved file path, or None if debug is off or the write failed.
        """
        if not self._debugEnabled:
            return None

        filepath = self._debugDir / f"{frameId}_summary.json"
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(summary, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self._logger.warning(f"[{frameId}] Could not write debug summary {filepath}: {e}")
            return None

        self._logger.debug(f"[{frameId}] Saved summary: {filepath}")
        return filepath
