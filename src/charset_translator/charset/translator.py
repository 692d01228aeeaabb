"""Byte stream translation between two character encodings.

``CharsetTranslator`` decodes a binary source stream under a strict error
policy, optionally replaces characters the target encoding cannot represent
with decimal numeric character references, and encodes the result to a
binary sink stream.

Decoding and encoding are strict: malformed source bytes raise
``MalformedInputError`` and, unless reference substitution is enabled,
unrepresentable characters raise ``UnmappableCharacterError``. Nothing is
ever silently replaced or skipped.

A translator keeps no memory between calls because each ``translate``
resets its decoder and encoder first, so one instance may be reused for any
number of sequential translations. It must not run two translations at
the same time.
"""

import codecs
import io
import time
import uuid
from typing import BinaryIO, Iterator, Optional

from charset_translator.shared.errors import (
    InvalidArgumentError,
    MalformedInputError,
    ReadFailureError,
    TranslationError,
    UnmappableCharacterError,
    WriteFailureError,
)
from charset_translator.shared.logging import get_logger
from charset_translator.shared.result import TranslationMetrics

from .lookup import EncodingSpec, resolve_encoding
from .references import ReferenceScanner

# Raw bytes requested from the source per read
READ_BLOCK_SIZE = 8192


def _buffered_byte_count(decoder: codecs.IncrementalDecoder) -> int:
    """Number of undecoded bytes the decoder is holding from earlier input."""
    state = decoder.getstate()
    buffered = state[0] if isinstance(state, tuple) and state else b""
    return len(buffered) if isinstance(buffered, (bytes, bytearray)) else 0


class CharsetTranslator:
    """Translates byte streams from one character encoding to another.

    Two translators are equal when they resolve to the same source and
    target encodings and agree on reference substitution. The buffer size
    is a tuning knob and takes no part in equality.
    """

    DEFAULT_BUFFER_SIZE = 4096

    def __init__(self, source_encoding: EncodingSpec, target_encoding: EncodingSpec) -> None:
        """Resolve both encodings.

        Args:
            source_encoding: Name (or CodecInfo) used to decode source bytes
            target_encoding: Name (or CodecInfo) used to encode output

        Raises:
            InvalidArgumentError: If either encoding is None or empty
            InvalidEncodingNameError: If either name is syntactically illegal
            UnknownEncodingError: If either name is not a known text encoding
        """
        self._source_codec = resolve_encoding(source_encoding)
        self._target_codec = resolve_encoding(target_encoding)
        self._decoder = self._source_codec.incrementaldecoder(errors="strict")
        self._encoder = self._target_codec.incrementalencoder(errors="strict")
        self._use_reference_substitution = False
        self._buffer_size = self.DEFAULT_BUFFER_SIZE
        self._logger = get_logger(__name__, component="translator")

    @property
    def source_codec(self) -> codecs.CodecInfo:
        return self._source_codec

    @property
    def target_codec(self) -> codecs.CodecInfo:
        return self._target_codec

    @property
    def source_encoding(self) -> str:
        """Canonical name of the source encoding."""
        return self._source_codec.name

    @property
    def target_encoding(self) -> str:
        """Canonical name of the target encoding."""
        return self._target_codec.name

    @property
    def uses_reference_substitution(self) -> bool:
        """Whether unrepresentable characters become ``&#N;`` references."""
        return self._use_reference_substitution

    def use_reference_substitution(self, enabled: bool = True) -> "CharsetTranslator":
        """Enable or disable numeric character reference substitution.

        Returns:
            This translator, for call chaining
        """
        self._use_reference_substitution = bool(enabled)
        return self

    @property
    def buffer_size(self) -> int:
        """Maximum number of characters decoded per chunk."""
        return self._buffer_size

    @buffer_size.setter
    def buffer_size(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidArgumentError(
                f"buffer size must be an integer, got {type(size).__name__}"
            )
        if size < 1:
            raise InvalidArgumentError(f"buffer size must be >= 1, got {size}")
        self._buffer_size = size

    def translate(self, source: BinaryIO, sink: BinaryIO) -> TranslationMetrics:
        """Translate the whole source stream into the sink stream.

        The source is read to exhaustion and the sink is flushed before
        returning. Neither stream is closed. On failure the sink may hold a
        truncated prefix of the output.

        Args:
            source: Readable binary stream
            sink: Writable binary stream

        Returns:
            TranslationMetrics describing the completed translation

        Raises:
            MalformedInputError: If the source is not valid in the source encoding
            UnmappableCharacterError: If a character cannot be encoded and
                reference substitution is disabled
            ReadFailureError: If reading the source fails
            WriteFailureError: If writing or flushing the sink fails
        """
        logger = self._logger.bind(uuid.uuid4().hex[:8])
        metrics = TranslationMetrics()
        start_time = time.time()

        self._decoder.reset()
        self._encoder.reset()
        buffer_size = self._buffer_size
        # The probe lives only for this call and never writes to the sink
        scanner = (
            ReferenceScanner(self._target_codec)
            if self._use_reference_substitution else None
        )

        logger.debug("Translation started", extra={
            "source_encoding": self.source_encoding,
            "target_encoding": self.target_encoding,
            "reference_substitution": scanner is not None,
            "buffer_size": buffer_size,
        })

        try:
            for chunk in self._read_chunks(source, buffer_size):
                offset = metrics.characters_processed
                metrics.chunks_processed += 1
                metrics.characters_processed += len(chunk)

                if scanner is None:
                    self._emit(sink, chunk, metrics, offset)
                else:
                    for piece in scanner.scan(chunk):
                        self._emit(sink, piece, metrics, None)

            self._flush(sink, metrics)
        except TranslationError as e:
            logger.debug("Translation failed", extra={
                "category": e.category,
                "characters_processed": metrics.characters_processed,
                "bytes_written": metrics.bytes_written,
            })
            raise

        if scanner is not None:
            metrics.references_substituted = scanner.substitutions
        metrics.processing_time_ms = (time.time() - start_time) * 1000

        logger.debug("Translation completed", extra={
            "characters_processed": metrics.characters_processed,
            "chunks_processed": metrics.chunks_processed,
            "references_substituted": metrics.references_substituted,
            "bytes_written": metrics.bytes_written,
            "processing_time_ms": metrics.processing_time_ms,
        })
        return metrics

    def translate_bytes(self, data: bytes) -> bytes:
        """Translate an in-memory byte string and return the translated bytes."""
        sink = io.BytesIO()
        self.translate(io.BytesIO(data), sink)
        return sink.getvalue()

    def _read_block(self, source: BinaryIO) -> bytes:
        try:
            block = source.read(READ_BLOCK_SIZE)
        except (OSError, ValueError) as e:
            raise ReadFailureError(f"Failed to read source: {e}") from e

        if block is None:
            raise ReadFailureError("Source stream returned no data (non-blocking stream)")
        if not isinstance(block, (bytes, bytearray)):
            raise InvalidArgumentError(
                f"Source stream must yield bytes, got {type(block).__name__}"
            )
        return bytes(block)

    def _read_chunks(self, source: BinaryIO, buffer_size: int) -> Iterator[str]:
        """Yield decoded chunks of at most ``buffer_size`` characters."""
        pending = ""
        consumed = 0
        at_eof = False

        while not at_eof:
            block = self._read_block(source)
            at_eof = not block
            buffered = _buffered_byte_count(self._decoder)
            try:
                text = self._decoder.decode(block, final=at_eof)
            except UnicodeDecodeError as e:
                position = consumed - buffered + e.start
                raise MalformedInputError(
                    f"Malformed {self.source_encoding} input at byte {position}: "
                    f"{e.reason}",
                    encoding=self.source_encoding,
                    position=position,
                    reason=e.reason,
                ) from e
            consumed += len(block)

            pending += text
            index = 0
            while len(pending) - index >= buffer_size:
                yield pending[index:index + buffer_size]
                index += buffer_size
            pending = pending[index:]

        if pending:
            yield pending

    def _emit(
        self,
        sink: BinaryIO,
        text: str,
        metrics: TranslationMetrics,
        offset: Optional[int],
    ) -> None:
        try:
            data = self._encoder.encode(text)
        except UnicodeEncodeError as e:
            char = e.object[e.start:e.end]
            position = None if offset is None else offset + e.start
            raise UnmappableCharacterError(
                f"Character {char!r} (U+{ord(char[0]):04X}) cannot be encoded "
                f"in {self.target_encoding}",
                encoding=self.target_encoding,
                character=char,
                position=position,
            ) from e
        self._write(sink, data, metrics)

    def _write(self, sink: BinaryIO, data: bytes, metrics: TranslationMetrics) -> None:
        if not data:
            return
        view = memoryview(data)
        # Raw streams may accept only part of the data per call
        while view:
            try:
                written = sink.write(view)
            except (OSError, ValueError) as e:
                raise WriteFailureError(f"Failed to write output: {e}") from e
            except TypeError as e:
                raise InvalidArgumentError(f"Sink stream must accept bytes: {e}") from e
            if written is None:
                raise WriteFailureError(
                    "Sink stream accepted no data (non-blocking stream)"
                )
            view = view[written:]
        metrics.bytes_written += len(data)

    def _flush(self, sink: BinaryIO, metrics: TranslationMetrics) -> None:
        # Stateful encoders (e.g. ISO-2022) may still owe a shift sequence
        try:
            tail = self._encoder.encode("", final=True)
        except UnicodeEncodeError as e:
            raise UnmappableCharacterError(
                f"Incomplete output for {self.target_encoding}",
                encoding=self.target_encoding,
            ) from e
        self._write(sink, tail, metrics)

        flush = getattr(sink, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError) as e:
            raise WriteFailureError(f"Failed to flush output: {e}") from e

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, CharsetTranslator):
            return NotImplemented
        return (
            self.source_encoding == other.source_encoding
            and self.target_encoding == other.target_encoding
            and self._use_reference_substitution == other._use_reference_substitution
        )

    def __hash__(self) -> int:
        return hash((
            self.source_encoding,
            self.target_encoding,
            self._use_reference_substitution,
        ))

    def __repr__(self) -> str:
        return (
            f"CharsetTranslator({self.source_encoding!r}, {self.target_encoding!r}, "
            f"use_reference_substitution={self._use_reference_substitution})"
        )

    def __str__(self) -> str:
        return f"{self.source_encoding} -> {self.target_encoding}"
