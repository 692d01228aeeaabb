"""Exception hierarchy for charset translation.

Every failure raised by the translation engine derives from
``TranslationError`` and carries a stable ``category`` string so that
calling layers can present a category-specific message without inspecting
exception types one by one.
"""

from typing import Optional


class TranslationError(Exception):
    """Base exception for all translation failures."""

    category = "translation_error"


class InvalidArgumentError(TranslationError, ValueError):
    """Raised for a missing/empty encoding name or a non-positive buffer size."""

    category = "invalid_argument"


class UnknownEncodingError(TranslationError, LookupError):
    """Raised when the codec registry does not know an encoding name."""

    category = "unknown_encoding"

    def __init__(self, message: str, encoding_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.encoding_name = encoding_name


class InvalidEncodingNameError(UnknownEncodingError):
    """Raised when an encoding name is syntactically illegal."""

    category = "invalid_encoding_name"


class MalformedInputError(TranslationError):
    """Raised when source bytes are not valid under the source encoding.

    Attributes:
        encoding: Canonical name of the source encoding
        position: Absolute byte offset of the offending sequence, if known
        reason: Reason reported by the decoder
    """

    category = "malformed_input"

    def __init__(
        self,
        message: str,
        encoding: Optional[str] = None,
        position: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.encoding = encoding
        self.position = position
        self.reason = reason


class UnmappableCharacterError(TranslationError):
    """Raised when a character has no representation in the target encoding.

    Attributes:
        encoding: Canonical name of the target encoding
        character: The character that could not be encoded
        position: Absolute character offset in the decoded stream, if known
    """

    category = "unmappable_character"

    def __init__(
        self,
        message: str,
        encoding: Optional[str] = None,
        character: Optional[str] = None,
        position: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.encoding = encoding
        self.character = character
        self.position = position


class _StreamFailureError(TranslationError, OSError):
    """Common base for source/sink I/O failures."""

    @property
    def interrupted(self) -> bool:
        """Whether the failure was caused by interrupted I/O (cancellation)."""
        return isinstance(self.__cause__, InterruptedError)


class ReadFailureError(_StreamFailureError):
    """Raised when reading from the source stream fails."""

    category = "read_failure"


class WriteFailureError(_StreamFailureError):
    """Raised when writing to or flushing the sink stream fails."""

    category = "write_failure"
