"""Result objects for translation operations."""

from dataclasses import dataclass


@dataclass
class TranslationMetrics:
    """Summary of a single ``translate`` call."""

    characters_processed: int = 0
    chunks_processed: int = 0
    references_substituted: int = 0
    bytes_written: int = 0
    processing_time_ms: float = 0.0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters decoded per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms
