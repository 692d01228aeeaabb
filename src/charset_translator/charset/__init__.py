"""Charset layer for charset translator.

This module provides encoding resolution, numeric character reference
substitution, and the stream translator itself.
"""

from .lookup import (
    available_encodings,
    canonical_name,
    resolve_encoding,
    validate_encoding_name,
)
from .references import ReferenceScanner, numeric_character_reference
from .translator import CharsetTranslator

__all__ = [
    # Modules
    "lookup",
    "references",
    "translator",
    # Main classes for direct access
    "CharsetTranslator",
    "ReferenceScanner",
    # Functions
    "available_encodings",
    "canonical_name",
    "numeric_character_reference",
    "resolve_encoding",
    "validate_encoding_name",
]
