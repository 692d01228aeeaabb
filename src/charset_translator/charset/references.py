"""Numeric character reference substitution for unrepresentable characters.

The scanner tests each decoded character against a private probe encoder
for the target encoding and splits a chunk into verbatim runs and decimal
references (``&#8364;``). The probe never emits output, so the encoder that
writes to the sink is never disturbed by representability checks.
"""

import codecs
from typing import Dict, Iterator

REFERENCE_PREFIX = "&#"
REFERENCE_SUFFIX = ";"


def numeric_character_reference(char: str) -> str:
    """Return the decimal numeric character reference for a single character.

    Args:
        char: Exactly one code point

    Returns:
        Reference text such as ``"&#8364;"``
    """
    if len(char) != 1:
        raise ValueError(f"Expected a single character, got {len(char)}")
    return f"{REFERENCE_PREFIX}{ord(char)}{REFERENCE_SUFFIX}"


class ReferenceScanner:
    """Splits decoded chunks into verbatim runs and numeric references.

    One scanner belongs to one translation session. Python strings iterate
    by code point, so characters outside the Basic Multilingual Plane are
    probed and substituted as a single scalar value.

    Attributes:
        substitutions: Number of references produced so far
    """

    def __init__(self, codec_info: codecs.CodecInfo) -> None:
        self._probe = codec_info.incrementalencoder(errors="strict")
        self._representable: Dict[str, bool] = {}
        self.substitutions = 0

    def is_representable(self, char: str) -> bool:
        """Tell whether the target encoding can represent a character."""
        cached = self._representable.get(char)
        if cached is not None:
            return cached

        try:
            self._probe.encode(char, final=True)
            representable = True
        except UnicodeEncodeError:
            representable = False
        finally:
            self._probe.reset()

        self._representable[char] = representable
        return representable

    def scan(self, chunk: str) -> Iterator[str]:
        """Yield the output pieces for one chunk, in order.

        Verbatim runs are never empty: an unrepresentable character at the
        start of the chunk, or two in a row, yields only references.
        """
        start = 0
        for index, char in enumerate(chunk):
            if self.is_representable(char):
                continue
            if start < index:
                yield chunk[start:index]
            self.substitutions += 1
            yield numeric_character_reference(char)
            start = index + 1

        if start < len(chunk):
            yield chunk[start:]
