"""
Pipeline Module

Adaptive multi-strategy QR detection:
- FallbackOrchestrator: Sequential attempts with early exit
- ResultAssembler: Public result records
"""

from core.pipeline.fallback_orchestrator import (
    DetectionAttempt,
    FallbackOrchestrator,
    PipelineMode,
    PipelineOutcome
)
from core.pipeline.result_assembler import (
    MultiDetectionResult,
    PresenceResult,
    QrCodeEntry,
    ResultAssembler,
    SingleDetectionResult
)


__all__ = [
    "DetectionAttempt",
    "FallbackOrchestrator",
    "PipelineMode",
    "PipelineOutcome",
    "MultiDetectionResult",
    "PresenceResult",
    "QrCodeEntry",
    "ResultAssembler",
    "SingleDetectionResult"
]
