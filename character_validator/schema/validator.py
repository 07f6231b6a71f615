"""
Character Validation
====================

Validates parsed JSON against the character schema and reports every
violation found in a single pass.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import ValidationError

from character_validator.config.models import ValidationRulesConfig
from .errors import CUSTOM, FieldError, translate_errors
from .models import CharacterConfig

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON format"
FILE_ERROR_PATH = "file"


@dataclass(frozen=True)
class Valid:
    """Successful validation result."""

    config: CharacterConfig

    is_valid = True

    @property
    def data(self) -> dict:
        """Validated document as plain JSON, limited to the keys that were present."""
        return self.config.model_dump(mode="json", by_alias=True, exclude_unset=True)

    @property
    def errors(self) -> list[FieldError]:
        return []


@dataclass(frozen=True)
class Invalid:
    """Failed validation result carrying every field error."""

    errors: list[FieldError] = field(default_factory=list)

    is_valid = False

    @property
    def paths(self) -> list[str]:
        return [error.path for error in self.errors]


ValidationOutcome = Union[Valid, Invalid]


def invalid_json() -> Invalid:
    """The single error reported when the input is not JSON at all."""
    return Invalid([FieldError(path=FILE_ERROR_PATH, message=INVALID_JSON_MESSAGE, code=CUSTOM)])


def validate_character(
    value: Any,
    rules: Optional[ValidationRulesConfig] = None,
) -> ValidationOutcome:
    """
    Validate an already-parsed JSON value.

    Args:
        value: Any JSON value (dict, list, str, number, bool or None)
        rules: Optional allow-lists for modelProvider and clients

    Returns:
        Valid with the normalized CharacterConfig, or Invalid with all
        field errors
    """
    try:
        config = CharacterConfig.model_validate(value, context={"rules": rules})
    except ValidationError as e:
        errors = translate_errors(e)
        logger.info(f"Character validation failed with {len(errors)} error(s)")
        for error in errors:
            logger.debug(f"  {error.path or '<root>'}: {error.message} [{error.code}]")
        return Invalid(errors)

    logger.info(f"Character '{config.name}' passed validation")
    return Valid(config)


def parse_character(source: Union[str, bytes]) -> Any:
    """
    Parse character file content.

    Raises:
        ValueError: If the content is not UTF-8 encoded JSON
        RecursionError: If the JSON nests deeper than the decoder allows
    """
    if isinstance(source, (bytes, bytearray)):
        # utf-8-sig tolerates a leading byte order mark
        source = bytes(source).decode("utf-8-sig")
    return json.loads(source)


def parse_and_validate(
    source: Union[str, bytes],
    rules: Optional[ValidationRulesConfig] = None,
) -> ValidationOutcome:
    """Parse raw file content and validate it.

    Malformed JSON is reported as a single ``file`` error instead of a
    schema error.
    """
    try:
        value = parse_character(source)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors; very deep
        # nesting exhausts the decoder stack
        logger.warning(f"Could not parse character file: {e}")
        return invalid_json()
    return validate_character(value, rules)
