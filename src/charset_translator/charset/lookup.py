"""Encoding name validation and resolution against the Python codec registry.

Names are resolved once to a ``codecs.CodecInfo``. Only text encodings
(bytes <-> str) are accepted; bytes-to-bytes and str-to-str transforms such
as ``base64`` or ``rot13`` are reported as unknown encodings.
"""

import codecs
import encodings
import encodings.aliases
import pkgutil
import re
from typing import List, Union

from charset_translator.shared.errors import (
    InvalidArgumentError,
    InvalidEncodingNameError,
    UnknownEncodingError,
)

# First character alphanumeric, then alphanumerics and - + . : _
ENCODING_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9\-+.:_]*$")

EncodingSpec = Union[str, codecs.CodecInfo]


def validate_encoding_name(name: object) -> str:
    """Check that an encoding name is present and syntactically legal.

    Args:
        name: Candidate encoding name

    Returns:
        The name, unchanged

    Raises:
        InvalidArgumentError: If name is None, not a string, or blank
        InvalidEncodingNameError: If name contains illegal characters
    """
    if name is None:
        raise InvalidArgumentError("Encoding name must not be None")
    if not isinstance(name, str):
        raise InvalidArgumentError(
            f"Encoding name must be a string, got {type(name).__name__}"
        )
    if not name.strip():
        raise InvalidArgumentError("Encoding name must not be empty")
    if not ENCODING_NAME_PATTERN.match(name):
        raise InvalidEncodingNameError(
            f"Illegal encoding name: {name!r}", encoding_name=name
        )
    return name


def _is_text_encoding(info: codecs.CodecInfo) -> bool:
    try:
        encoded, _ = info.encode("")
        decoded, _ = info.decode(b"")
    except (TypeError, ValueError):
        return False
    return isinstance(encoded, bytes) and isinstance(decoded, str)


def resolve_encoding(encoding: EncodingSpec) -> codecs.CodecInfo:
    """Resolve an encoding name (or pass through a CodecInfo) to a text codec.

    Args:
        encoding: Encoding name or an already resolved ``codecs.CodecInfo``

    Returns:
        The resolved CodecInfo

    Raises:
        InvalidArgumentError: If encoding is None or an empty name
        InvalidEncodingNameError: If the name is syntactically illegal
        UnknownEncodingError: If the registry has no text codec for the name
    """
    if isinstance(encoding, codecs.CodecInfo):
        info = encoding
        name = encoding.name
    else:
        name = validate_encoding_name(encoding)
        try:
            info = codecs.lookup(name)
        except LookupError as e:
            raise UnknownEncodingError(
                f"Unknown encoding: {name!r}", encoding_name=name
            ) from e

    if not _is_text_encoding(info):
        raise UnknownEncodingError(
            f"Not a text encoding: {name!r}", encoding_name=name
        )
    return info


def canonical_name(encoding: EncodingSpec) -> str:
    """Return the registry's canonical spelling of an encoding.

    >>> canonical_name("Latin-1")
    'iso8859-1'
    """
    return resolve_encoding(encoding).name


def _candidate_names() -> List[str]:
    names = set(encodings.aliases.aliases.values())
    names.update(
        module.name for module in pkgutil.iter_modules(encodings.__path__)
        if not module.name.startswith("_")
    )
    names.discard("aliases")
    return sorted(names)


def available_encodings() -> List[str]:
    """List canonical names of all text encodings the registry can resolve."""
    found = set()
    for name in _candidate_names():
        try:
            found.add(resolve_encoding(name).name)
        except (UnknownEncodingError, ImportError):
            # Platform-specific codecs (e.g. mbcs) are absent elsewhere
            continue
    return sorted(found)
