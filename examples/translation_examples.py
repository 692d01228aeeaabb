#!/usr/bin/env python3
"""
Charset Translation Examples

This script demonstrates usage patterns for CharsetTranslator, including
strict translation, numeric character reference substitution, buffer sizes,
configuration objects, and handling each failure category.
"""

import io
import sys
from pathlib import Path

# Add src to path for running examples directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from charset_translator import (
    CharsetTranslator,
    MalformedInputError,
    TranslationConfig,
    UnmappableCharacterError,
)


def example_basic_usage():
    """Example 1: Translating between two encodings."""
    print("=== Example 1: Basic Usage ===")

    translator = CharsetTranslator("UTF-8", "ISO-8859-1")
    source = io.BytesIO("Crème brûlée".encode("utf-8"))
    sink = io.BytesIO()

    metrics = translator.translate(source, sink)
    print(f"Translator: {translator}")
    print(f"Output bytes: {sink.getvalue()!r}")
    print(f"Characters: {metrics.characters_processed}, bytes written: {metrics.bytes_written}")
    print()


def example_reference_substitution():
    """Example 2: Replacing unrepresentable characters with references."""
    print("=== Example 2: Reference Substitution ===")

    translator = CharsetTranslator("UTF-8", "ISO-8859-1").use_reference_substitution()
    result = translator.translate_bytes("Price: $5, ¥600, €4".encode("utf-8"))
    print(f"ISO-8859-1 output: {result!r}")

    ascii_translator = CharsetTranslator("UTF-8", "US-ASCII").use_reference_substitution()
    result = ascii_translator.translate_bytes("naïve \U0001f600".encode("utf-8"))
    print(f"US-ASCII output: {result!r}")
    print()


def example_buffer_sizes():
    """Example 3: Output is the same for every buffer size."""
    print("=== Example 3: Buffer Sizes ===")

    data = ("a€b€€c" * 20).encode("utf-8")
    outputs = set()
    for size in (1, 5, 4096):
        translator = CharsetTranslator("UTF-8", "ISO-8859-1").use_reference_substitution()
        translator.buffer_size = size
        output = translator.translate_bytes(data)
        outputs.add(output)
        print(f"  - buffer_size={size}: {len(output)} bytes")
    print(f"  - Results match: {len(outputs) == 1}")
    print()


def example_configuration():
    """Example 4: Building a translator from a JSON configuration."""
    print("=== Example 4: Configuration ===")

    config = TranslationConfig.from_json(
        '{"source_encoding": "windows-1252", "target_encoding": "UTF-8", '
        '"buffer_size": 256}'
    )
    translator = config.create_translator()
    result = translator.translate_bytes(b"Smart quotes: \x93hi\x94")
    print(f"Config: {config.to_dict()}")
    print(f"Output: {result!r}")
    print()


def example_error_handling():
    """Example 5: Reacting to each failure category."""
    print("=== Example 5: Error Handling ===")

    try:
        CharsetTranslator("US-ASCII", "UTF-8").translate_bytes("café".encode("utf-8"))
    except MalformedInputError as e:
        print(f"Malformed input ({e.category}) at byte {e.position}: {e.reason}")

    try:
        CharsetTranslator("UTF-8", "ISO-8859-1").translate_bytes("€".encode("utf-8"))
    except UnmappableCharacterError as e:
        print(f"Unmappable ({e.category}): {e.character!r} at character {e.position}")
    print()


def main():
    """Run all examples."""
    print("Charset Translation Examples")
    print("=" * 50)
    print()

    example_basic_usage()
    example_reference_substitution()
    example_buffer_sizes()
    example_configuration()
    example_error_handling()

    print("All examples completed successfully!")


if __name__ == "__main__":
    main()
