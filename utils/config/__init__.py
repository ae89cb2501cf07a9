"""
Configuration utilities for AnimeWatch.

This package provides configuration normalization and validation.
"""

from .config_normalizer import ConfigNormalizer
from .config_validator import ConfigValidator, validate_configuration
from .validation_models import ValidationResult, ValidationError, ErrorCode

__all__ = [
    'ConfigNormalizer',
    'ConfigValidator',
    'validate_configuration',
    'ValidationResult',
    'ValidationError',
    'ErrorCode',
]
