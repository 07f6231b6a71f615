"""
Character Schema
================

Pydantic models for character files plus the validator that turns
pydantic errors into path-tagged field errors.
"""

from .errors import FieldError, json_type_name, translate_errors
from .models import (
    CharacterConfig,
    CharacterSettings,
    MessageContent,
    MessageTurn,
    StyleConfig,
    VoiceSettings,
)
from .validator import (
    Invalid,
    Valid,
    ValidationOutcome,
    parse_and_validate,
    parse_character,
    validate_character,
)

__all__ = [
    'CharacterConfig',
    'CharacterSettings',
    'MessageContent',
    'MessageTurn',
    'StyleConfig',
    'VoiceSettings',
    'FieldError',
    'json_type_name',
    'translate_errors',
    'Valid',
    'Invalid',
    'ValidationOutcome',
    'parse_and_validate',
    'parse_character',
    'validate_character',
]
