# tests/test_aggregation.py

import math

import pytest

from core.aggregation import (
    build_grade_report,
    compute_category_average,
    compute_final_grade,
    map_to_letter_grade,
)
from models.grade_item import GradeItem

# === category average ===


def test_category_average_without_grades_is_none():
    assert compute_category_average([]) is None


def test_category_average_without_valid_grades_is_none():
    grades = [
        GradeItem("g1", "ungraded", None, 10),
        GradeItem("g2", "no max", 5, None),
        GradeItem("g3", "zero max", 5, 0),
        GradeItem("g4", "negative max", 5, -10),
    ]

    assert compute_category_average(grades) is None


def test_category_average_is_points_earned_over_points_possible():
    grades = [GradeItem("g1", "", 9, 10), GradeItem("g2", "", 40, 50)]

    average = compute_category_average(grades)

    assert math.isclose(average, 49 / 60 * 100)
    assert not math.isclose(average, 85.0)


def test_category_average_ignores_invalid_grades():
    grades = [
        GradeItem("g1", "", 9, 10),
        GradeItem("g2", "", None, 100),
        GradeItem("g3", "", 50, 0),
    ]

    assert math.isclose(compute_category_average(grades), 90.0)


def test_category_average_allows_extra_credit_above_100():
    assert math.isclose(compute_category_average([GradeItem("g1", "", 11, 10)]), 110.0)


# === final grade ===


def test_weighted_final_grade(category_factory):
    categories = [
        category_factory("cat-1", 50, (90, 100)),
        category_factory("cat-2", 50, (80, 100)),
    ]

    assert math.isclose(compute_final_grade(categories, True), 85.0)


def test_weighted_final_grade_uses_relative_weights(category_factory):
    categories = [
        category_factory("cat-1", 30, (100, 100)),
        category_factory("cat-2", 10, (60, 100)),
    ]

    assert math.isclose(compute_final_grade(categories, True), 90.0)


def test_weighted_final_grade_with_zero_total_weight_is_none(category_factory):
    categories = [
        category_factory("cat-1", 0, (90, 100)),
        category_factory("cat-2", 0, (80, 100)),
        category_factory("cat-3", 100),
    ]

    assert compute_final_grade(categories, True) is None


def test_zero_weight_category_does_not_affect_weighted_grade(category_factory):
    categories = [
        category_factory("cat-1", 100, (90, 100)),
        category_factory("cat-2", 0, (10, 100)),
    ]

    assert math.isclose(compute_final_grade(categories, True), 90.0)


def test_categories_without_data_do_not_dilute_weights(category_factory):
    categories = [
        category_factory("cat-1", 40, (80, 100)),
        category_factory("cat-2", 60, (None, 100)),
    ]

    assert math.isclose(compute_final_grade(categories, True), 80.0)


def test_unweighted_final_grade_ignores_weights(category_factory):
    categories = [
        category_factory("cat-1", 100, (90, 100)),
        category_factory("cat-2", 1, (70, 100)),
    ]

    assert math.isclose(compute_final_grade(categories, False), 80.0)


def test_unweighted_final_grade_with_zero_weights(category_factory):
    categories = [
        category_factory("cat-1", 0, (90, 100)),
        category_factory("cat-2", 0, (70, 100)),
    ]

    assert math.isclose(compute_final_grade(categories, False), 80.0)


@pytest.mark.parametrize("is_weighted", [True, False])
def test_final_grade_without_data_is_none(category_factory, is_weighted):
    assert compute_final_grade([], is_weighted) is None
    assert (
        compute_final_grade([category_factory("cat-1", 100, (None, 10))], is_weighted)
        is None
    )


# === letter grades ===


@pytest.mark.parametrize(
    "percentage, letter",
    [
        (100.0, "A"),
        (93.0, "A"),
        (92.999, "A-"),
        (90.0, "A-"),
        (89.99, "B+"),
        (87.0, "B+"),
        (83.0, "B"),
        (80.0, "B-"),
        (77.0, "C+"),
        (73.0, "C"),
        (70.0, "C-"),
        (67.0, "D+"),
        (63.0, "D"),
        (60.0, "D-"),
        (59.999, "F"),
        (0.0, "F"),
        (-5.0, "F"),
        (120.0, "A"),
    ],
)
def test_map_to_letter_grade(percentage, letter):
    assert map_to_letter_grade(percentage) == letter


def test_letter_grade_is_not_rounded_first():
    # 92.995 displays as 93.00% but is still an A-
    assert map_to_letter_grade(92.995) == "A-"


def test_letter_grade_of_none_is_none():
    assert map_to_letter_grade(None) is None


# === report ===


def test_build_grade_report(category_factory):
    categories = [
        category_factory("cat-1", 50, (9, 10), (40, 50)),
        category_factory("cat-2", 50),
    ]

    report = build_grade_report(categories, True)

    assert list(report["category_averages"]) == ["cat-1", "cat-2"]
    assert math.isclose(report["category_averages"]["cat-1"], 49 / 60 * 100)
    assert report["category_averages"]["cat-2"] is None
    assert math.isclose(report["final_grade"], 49 / 60 * 100)
    assert report["letter_grade"] == "B-"
    assert report["is_weighted"] is True


def test_build_grade_report_without_data():
    report = build_grade_report([], False)

    assert report["category_averages"] == {}
    assert report["final_grade"] is None
    assert report["letter_grade"] is None
    assert report["is_weighted"] is False
