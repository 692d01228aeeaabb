"""Configuration objects for charset translation.

``TranslationConfig`` carries everything the engine recognizes: the two
encoding names, the reference substitution flag and an optional buffer size
override. It can be loaded from and saved to JSON.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

if TYPE_CHECKING:
    from charset_translator.charset.translator import CharsetTranslator

DEFAULT_BUFFER_SIZE = 4096


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError, ValueError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class TranslationConfig:
    """Settings for one source/target translation."""

    source_encoding: str
    target_encoding: str
    use_reference_substitution: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        """Validate translation configuration."""
        for name in ("source_encoding", "target_encoding"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigValidationError(
                    f"{name} must be a non-empty string", field_name=name
                )
        if not isinstance(self.use_reference_substitution, bool):
            raise ConfigValidationError(
                "use_reference_substitution must be a boolean",
                field_name="use_reference_substitution",
            )
        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int):
            raise ConfigValidationError(
                "buffer_size must be an integer", field_name="buffer_size"
            )
        if self.buffer_size < 1:
            raise ConfigValidationError(
                "buffer_size must be >= 1", field_name="buffer_size"
            )

    def create_translator(self) -> "CharsetTranslator":
        """Build a translator configured from this object.

        Raises:
            UnknownEncodingError: If either encoding cannot be resolved
        """
        from charset_translator.charset.translator import CharsetTranslator

        translator = CharsetTranslator(self.source_encoding, self.target_encoding)
        translator.use_reference_substitution(self.use_reference_substitution)
        translator.buffer_size = self.buffer_size
        return translator

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationConfig":
        """Create configuration from dictionary.

        Args:
            data: Mapping of field names to values

        Returns:
            TranslationConfig built from the mapping

        Raises:
            ConfigValidationError: On unknown or missing fields, or invalid values
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration must be a JSON object")

        known = [f.name for f in fields(cls)]
        for key in data:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}",
                    field_name=key,
                    suggestions=known,
                )
        for required in ("source_encoding", "target_encoding"):
            if required not in data:
                raise ConfigValidationError(
                    f"Missing configuration field: {required}", field_name=required
                )
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "TranslationConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(parse_config_json(json_str))

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "TranslationConfig":
        """Load configuration from a JSON file."""
        return cls.from_dict(load_config_data(config_path))


def parse_config_json(json_str: str) -> Dict[str, Any]:
    """Parse a JSON document holding a configuration object.

    Raises:
        ConfigValidationError: If the text is not JSON or not a JSON object
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigValidationError("Configuration must be a JSON object")
    return data


def load_config_data(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Read the raw settings of a JSON configuration file.

    The result may hold only some fields, so callers can merge it with
    values from elsewhere before building a ``TranslationConfig``.

    Raises:
        ConfigError: If the file cannot be read
        ConfigValidationError: If the file does not hold a JSON object
    """
    path = Path(config_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    return parse_config_json(text)
