"""
Error Report
============

Rephrases validation errors for people: a readable field label, a
friendlier message and, where one applies, a short tip.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from character_validator.schema.errors import INVALID_TYPE, FieldError

GENERAL_FIELD = "General"

# Shown under every error report
COMMON_ISSUES = [
    "Missing required fields (name, modelProvider, etc.)",
    "Incorrect data types (string vs array)",
    "Invalid model provider name",
    "Arrays that should have at least one item",
]

# (path substring, tip) pairs checked in order after the code-based tip
PATH_SUGGESTIONS = [
    ("modelProvider", "Make sure the model provider is one of the allowed values"),
    ("plugins", "Ensure plugins are properly formatted"),
]


@dataclass(frozen=True)
class ReportEntry:
    """One line of the error panel."""

    field: str
    message: str
    suggestion: Optional[str]
    path: str
    code: str

    def to_dict(self) -> dict:
        return asdict(self)


def field_label(path: str) -> str:
    """Turn ``settings.voice.model`` into ``Settings → Voice → Model``."""
    if not path:
        return GENERAL_FIELD
    return " → ".join(part[:1].upper() + part[1:] for part in path.split("."))


def friendly_message(message: str) -> str:
    if "Required" in message:
        return "This field is required and cannot be empty"
    if "Expected" in message:
        return message.replace("Expected", "Should be")
    return message


def suggestion_for(path: str, code: str) -> Optional[str]:
    if code == INVALID_TYPE:
        return "Check the data type of this field"
    for fragment, tip in PATH_SUGGESTIONS:
        if fragment in path:
            return tip
    return None


def group_by_path(errors: Iterable[FieldError]) -> list[FieldError]:
    """
    Merge errors that share a path, keeping first-seen order.

    Messages are joined with `` - ``; the first error's code is kept.
    """
    grouped: dict[str, list[FieldError]] = {}
    for error in errors:
        grouped.setdefault(error.path, []).append(error)
    return [
        FieldError(
            path=path,
            message=" - ".join(error.message for error in group),
            code=group[0].code,
        )
        for path, group in grouped.items()
    ]


def build_report(errors: Iterable[FieldError], group: bool = False) -> list[ReportEntry]:
    """Build display entries for a list of field errors."""
    errors = list(errors)
    if group:
        errors = group_by_path(errors)
    return [
        ReportEntry(
            field=field_label(error.path),
            message=friendly_message(error.message),
            suggestion=suggestion_for(error.path, error.code),
            path=error.path,
            code=error.code,
        )
        for error in errors
    ]
