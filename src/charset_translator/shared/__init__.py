"""Shared utilities for charset translation.

This module provides the error taxonomy, configuration objects, result types,
and logging helpers used across the package.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    TranslationConfig,
)
from .errors import (
    InvalidArgumentError,
    InvalidEncodingNameError,
    MalformedInputError,
    ReadFailureError,
    TranslationError,
    UnknownEncodingError,
    UnmappableCharacterError,
    WriteFailureError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import TranslationMetrics

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "TranslationConfig",
    "InvalidArgumentError",
    "InvalidEncodingNameError",
    "MalformedInputError",
    "ReadFailureError",
    "TranslationError",
    "UnknownEncodingError",
    "UnmappableCharacterError",
    "WriteFailureError",
    "CorrelationLogger",
    "get_logger",
    "TranslationMetrics",
]
