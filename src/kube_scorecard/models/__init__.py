"""Data models for graded resources and check outcomes."""

from .grade import Grade, GradeDisplay, grade_display
from .outcome import Check, CheckOutcome, OutcomeComment
from .resource import (
    IGNORED_CHECKS_ANNOTATION,
    ResourceIdentity,
    ResourceRecord,
    parse_ignored_checks,
)

__all__ = [
    "IGNORED_CHECKS_ANNOTATION",
    "Check",
    "CheckOutcome",
    "Grade",
    "GradeDisplay",
    "OutcomeComment",
    "ResourceIdentity",
    "ResourceRecord",
    "grade_display",
    "parse_ignored_checks",
]
