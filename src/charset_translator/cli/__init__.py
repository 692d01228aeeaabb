"""Command-line interface module for Charset Translator.

This module provides the charset-translator console tool with
category-specific error reporting and exit codes.
"""

from .main import main

__all__ = ["main"]
