from __future__ import annotations

import pytest

from kube_scorecard.models import Grade, grade_display


def test_grades_are_ordered_by_severity() -> None:
    assert Grade.CRITICAL < Grade.WARNING < Grade.ALMOST_OK < Grade.ALL_OK
    assert [grade.value for grade in Grade] == [1, 5, 7, 10]
    assert min(Grade.ALL_OK, Grade.WARNING, Grade.ALMOST_OK) is Grade.WARNING


@pytest.mark.parametrize(
    ("grade", "threshold", "expected"),
    [
        (Grade.CRITICAL, Grade.WARNING, True),
        (Grade.WARNING, Grade.WARNING, True),
        (Grade.ALMOST_OK, Grade.WARNING, False),
        (Grade.ALL_OK, Grade.CRITICAL, False),
    ],
)
def test_is_at_or_below(grade: Grade, threshold: Grade, expected: bool) -> None:
    assert grade.is_at_or_below(threshold) is expected


def test_display_metadata() -> None:
    assert Grade.CRITICAL.label == "CRITICAL"
    assert Grade.WARNING.label == "WARNING"
    assert Grade.ALMOST_OK.label == "~ OK"
    assert Grade.ALL_OK.label == "OK"

    assert Grade.CRITICAL.color == "red"
    assert Grade.ALMOST_OK.color == "yellow"
    assert Grade.ALL_OK.color == "green"
    assert Grade.ALL_OK.glyph == "\U0001f49a"

    display = grade_display(5)
    assert display.label == "WARNING"
    assert display.color == "yellow"


@pytest.mark.parametrize("value", [0, 3, 11, -1])
def test_values_outside_the_scale_fail_fast(value: int) -> None:
    with pytest.raises(ValueError):
        Grade(value)

    with pytest.raises(ValueError):
        grade_display(value)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("critical", Grade.CRITICAL),
        ("WARNING", Grade.WARNING),
        ("almost_ok", Grade.ALMOST_OK),
        ("~ ok", Grade.ALMOST_OK),
        (" OK ", Grade.ALL_OK),
    ],
)
def test_parse(text: str, expected: Grade) -> None:
    assert Grade.parse(text) is expected


def test_parse_rejects_unknown_text() -> None:
    with pytest.raises(ValueError):
        Grade.parse("fine")
