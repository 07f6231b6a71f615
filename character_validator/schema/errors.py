"""
Translation of pydantic validation errors into field errors.

Each pydantic error becomes one ``FieldError`` with a dotted path, a
readable message and one of a small set of stable codes.
"""

from dataclasses import asdict, dataclass
from typing import Any, Sequence, Union

from pydantic import ValidationError


# Stable error codes
INVALID_TYPE = "invalid_type"
TOO_SMALL = "too_small"
INVALID_ENUM_VALUE = "invalid_enum_value"
CUSTOM = "custom"

# pydantic error type -> JSON type the field expected
_TYPE_ERRORS = {
    "string_type": "string",
    "list_type": "array",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "bool_type": "boolean",
    "int_type": "number",
    "float_type": "number",
}

_PASSTHROUGH_TYPES = {INVALID_TYPE, INVALID_ENUM_VALUE}


@dataclass(frozen=True)
class FieldError:
    """A single violation: where it happened, what went wrong, and its code."""

    path: str
    message: str
    code: str

    def to_dict(self) -> dict:
        return asdict(self)


def json_type_name(value: Any) -> str:
    """Name of the JSON type of ``value`` as used in error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def format_path(loc: Sequence[Union[str, int]]) -> str:
    """Join a pydantic location tuple into a dotted field path."""
    return ".".join(str(part) for part in loc)


def translate_error(error: dict) -> FieldError:
    """Convert one entry of ``ValidationError.errors()``."""
    error_type = error["type"]
    path = format_path(error["loc"])

    if error_type == "missing":
        return FieldError(path=path, message="Required", code=INVALID_TYPE)

    if error_type in _TYPE_ERRORS:
        expected = _TYPE_ERRORS[error_type]
        received = json_type_name(error.get("input"))
        return FieldError(
            path=path,
            message=f"Expected {expected}, received {received}",
            code=INVALID_TYPE,
        )

    if error_type == "too_short":
        minimum = (error.get("ctx") or {}).get("min_length", 1)
        return FieldError(
            path=path,
            message=f"Array must contain at least {minimum} element(s)",
            code=TOO_SMALL,
        )

    if error_type in _PASSTHROUGH_TYPES:
        return FieldError(path=path, message=error["msg"], code=error_type)

    return FieldError(path=path, message=error["msg"], code=CUSTOM)


def translate_errors(exc: ValidationError) -> list[FieldError]:
    """Convert every error of a pydantic ``ValidationError``, in order."""
    return [translate_error(error) for error in exc.errors(include_url=False)]
