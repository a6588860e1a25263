"""Grade scale shared by check outcomes, resource records and reporters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Grade(int, Enum):
    """Ordered health grades, lowest value is the most severe."""

    CRITICAL = 1
    WARNING = 5
    ALMOST_OK = 7
    ALL_OK = 10

    @property
    def label(self) -> str:
        return grade_display(self).label

    @property
    def glyph(self) -> str:
        return grade_display(self).glyph

    @property
    def color(self) -> str:
        return grade_display(self).color

    def is_at_or_below(self, threshold: "Grade") -> bool:
        """Return ``True`` when this grade is as bad as ``threshold`` or worse."""

        return self.value <= Grade(threshold).value

    @classmethod
    def parse(cls, text: str) -> "Grade":
        """Resolve a member name (``almost_ok``) or display label (``~ OK``)."""

        normalized = text.strip()
        for grade in cls:
            if normalized.upper() in {grade.name, grade.name.replace("_", "-")}:
                return grade
            if normalized.upper() == grade.label:
                return grade
        raise ValueError(f"Unknown grade: {text!r}")


@dataclass(frozen=True, slots=True)
class GradeDisplay:
    """Presentation metadata for a single grade."""

    label: str
    glyph: str
    color: str


_DISPLAY = {
    Grade.CRITICAL: GradeDisplay(label="CRITICAL", glyph="\U0001f4a5", color="red"),
    Grade.WARNING: GradeDisplay(label="WARNING", glyph="\u26a0\ufe0f", color="yellow"),
    Grade.ALMOST_OK: GradeDisplay(label="~ OK", glyph="\U0001f50a", color="yellow"),
    Grade.ALL_OK: GradeDisplay(label="OK", glyph="\U0001f49a", color="green"),
}


def grade_display(grade: Grade | int) -> GradeDisplay:
    """Return the label, glyph and colour hint for ``grade``.

    Integers outside the enumeration raise ``ValueError``; they can only come
    from a programming error and are not meant to be recovered from.
    """

    return _DISPLAY[Grade(grade)]
