"""Charset Translator.

Translates byte streams from one named character encoding to another with
strict decoding and encoding, optionally replacing characters the target
encoding cannot represent with decimal numeric character references.
"""

__version__ = "2.0.1"
__author__ = "Charset Translator Team"

from .charset.translator import CharsetTranslator
from .shared.config import TranslationConfig
from .shared.errors import (
    InvalidArgumentError,
    InvalidEncodingNameError,
    MalformedInputError,
    ReadFailureError,
    TranslationError,
    UnknownEncodingError,
    UnmappableCharacterError,
    WriteFailureError,
)
from .shared.result import TranslationMetrics

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Translation engine
    "CharsetTranslator",
    "TranslationConfig",
    "TranslationMetrics",

    # Failure categories
    "TranslationError",
    "InvalidArgumentError",
    "UnknownEncodingError",
    "InvalidEncodingNameError",
    "MalformedInputError",
    "UnmappableCharacterError",
    "ReadFailureError",
    "WriteFailureError",
]
