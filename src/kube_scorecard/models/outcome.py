"""Check definitions and the outcomes they produce for a resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .grade import Grade


@dataclass(frozen=True, slots=True)
class Check:
    """Human readable definition of a single check."""

    id: str
    name: str = ""
    target_type: str = "*"
    comment: str = ""
    optional: bool = False


@dataclass(frozen=True, slots=True)
class OutcomeComment:
    """Informational note attached to an outcome, never used for grading."""

    path: str
    summary: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class CheckOutcome:
    """A single check's verdict on one resource.

    Only ``comments`` grows after construction, through :meth:`add_comment`.
    """

    grade: Grade
    remark: str = ""
    check: Optional[Check] = None
    comments: List[OutcomeComment] = field(default_factory=list)

    def __post_init__(self) -> None:
        object.__setattr__(self, "grade", Grade(self.grade))

    def add_comment(self, path: str, summary: str, description: str = "") -> None:
        self.comments.append(OutcomeComment(path=path, summary=summary, description=description))
