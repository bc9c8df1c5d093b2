# tests/test_grade_item.py

import pytest

from models.grade_item import GradeItem


def test_grade_item_to_dict(sample_grade):
    data = sample_grade.to_dict()

    assert data == {"id": "grade-1", "name": "Quiz 1", "score": 9.0, "max": 10.0}


def test_ungraded_item_to_dict(sample_ungraded_item):
    data = sample_ungraded_item.to_dict()

    assert data["score"] is None
    assert data["max"] == 100.0


def test_grade_item_from_dict():
    grade = GradeItem.from_dict(
        {"id": "grade-7", "name": "Midterm", "score": 45, "max": 50}
    )

    assert grade.id == "grade-7"
    assert grade.name == "Midterm"
    assert grade.score == 45.0
    assert grade.max == 50.0
    assert grade.is_valid


def test_grade_item_from_dict_with_missing_fields():
    grade = GradeItem.from_dict({"id": "grade-7"})

    assert grade.name == ""
    assert grade.score is None
    assert grade.max is None
    assert not grade.is_valid


@pytest.mark.parametrize("data", [None, [], "grade-1", {"name": "no id"}, {"id": 3}])
def test_grade_item_from_malformed_dict_raises(data):
    with pytest.raises((TypeError, ValueError)):
        GradeItem.from_dict(data)


def test_grade_item_to_str(sample_grade):
    assert str(sample_grade) == "GRADE: name: Quiz 1, score: 9.0/10.0, id: grade-1"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("abc", None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        (10**400, None),
        ("42", 42.0),
        (" 7.5 ", 7.5),
        (0, 0.0),
        (-3, -3.0),
    ],
)
def test_validate_points_input(raw, expected):
    assert GradeItem.validate_points_input(raw) == expected


def test_setters_normalize_input(sample_grade):
    sample_grade.score = ""
    sample_grade.max = "twenty"

    assert sample_grade.score is None
    assert sample_grade.max is None


@pytest.mark.parametrize(
    "score, max, valid",
    [
        (9, 10, True),
        (0, 10, True),
        (None, 10, False),
        (9, None, False),
        (9, 0, False),
        (9, -1, False),
    ],
)
def test_is_valid(score, max, valid):
    assert GradeItem("g", "", score, max).is_valid is valid
