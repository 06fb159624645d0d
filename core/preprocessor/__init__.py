"""
Preprocessor Package

Contains the preprocessing strategies tried by the fallback orchestrator.
"""

from core.preprocessor.preprocess_strategy import PreprocessStrategy
from core.preprocessor.preprocessing_catalog import PreprocessingCatalog


__all__ = [
    'PreprocessStrategy',
    'PreprocessingCatalog',
]
