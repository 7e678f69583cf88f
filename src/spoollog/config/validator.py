"""JSON Schema validation for spoollog configuration files."""

from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import best_match

from spoollog.exceptions import ConfigurationError

SCHEMA_DIR = Path(__file__).parent
LOGGER_CONFIG_SCHEMA_PATH = SCHEMA_DIR / "logger_config.schema.json"


class ConfigValidator:
    """Validates configuration dictionaries against the bundled schema."""

    def __init__(self, schema_path: Path = LOGGER_CONFIG_SCHEMA_PATH) -> None:
        """Initialize validator with the loaded schema.

        Args:
            schema_path: Path to the JSON schema file

        """
        self._schema = self._load_schema(schema_path)
        self._validator = Draft7Validator(self._schema)

    @staticmethod
    def _load_schema(schema_path: Path) -> dict[str, Any]:
        """Load JSON schema from file.

        Raises:
            FileNotFoundError: If schema file doesn't exist
            ValueError: If schema JSON is invalid

        """
        if not schema_path.exists():
            msg = f"Schema file not found: {schema_path}"
            raise FileNotFoundError(msg)

        try:
            with schema_path.open("rb") as f:
                return orjson.loads(f.read())  # type: ignore[no-any-return]
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in schema file {schema_path}: {e}"
            raise ValueError(msg) from e

    @staticmethod
    def _format_validation_error(error: ValidationError) -> str:
        """Format validation error into a readable message."""
        path = (
            ".".join(str(p) for p in error.absolute_path)
            if error.absolute_path
            else "root"
        )

        message = error.message
        if error.validator == "additionalProperties":
            message = f"Unknown setting. {error.message}"
        elif error.validator == "type":
            expected_type = error.validator_value
            actual = type(error.instance).__name__
            message = f"Expected type '{expected_type}', got '{actual}'"

        return f"{message} (at '{path}')"

    def validate(
        self, config: dict[str, Any], source: str | None = None
    ) -> None:
        """Validate a configuration dictionary.

        Args:
            config: Parsed configuration
            source: Optional file name for better error messages

        Raises:
            ConfigurationError: If validation fails

        """
        error = best_match(self._validator.iter_errors(config))
        if error is not None:
            raise ConfigurationError(
                self._format_validation_error(error), target=source
            )
