"""Services sitting between the validator and the user interfaces."""

from .error_report import COMMON_ISSUES, ReportEntry, build_report, field_label
from .session import BUNDLED_SAMPLE, ValidationInProgress, ValidationSession
from .summary import CharacterSummary

__all__ = [
    "COMMON_ISSUES",
    "ReportEntry",
    "build_report",
    "field_label",
    "BUNDLED_SAMPLE",
    "ValidationInProgress",
    "ValidationSession",
    "CharacterSummary",
]
