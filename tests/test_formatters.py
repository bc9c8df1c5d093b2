# tests/test_formatters.py

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.aggregation import map_to_letter_grade
from models.grade_item import GradeItem


def test_format_percentage():
    assert formatters.format_percentage(49 / 60 * 100) == "81.67%"
    assert formatters.format_percentage(100) == "100.00%"
    assert formatters.format_percentage(None) == "--"


def test_display_rounding_happens_after_letter_mapping():
    percentage = 92.996

    assert formatters.format_percentage(percentage) == "93.00%"
    assert map_to_letter_grade(percentage) == "A-"


def test_format_letter_grade():
    assert formatters.format_letter_grade("B+") == "B+"
    assert formatters.format_letter_grade(None) == "--"


def test_format_points():
    assert formatters.format_points(9.0) == "9"
    assert formatters.format_points(9.5) == "9.5"
    assert formatters.format_points(None) == "--"


def test_format_banner_text():
    banner = formatters.format_banner_text("TITLE", 11)

    assert banner == "===========\n   TITLE   \n==========="


def test_format_grade_oneline():
    assert model_formatters.format_grade_oneline(GradeItem("g", "Quiz", 9, 10)).endswith(
        "| 9 / 10"
    )
    assert model_formatters.format_grade_oneline(GradeItem("g", "Quiz")).endswith(
        "| -- / 100 [NOT COUNTED]"
    )


def test_format_category_oneline(sample_category):
    weighted = model_formatters.format_category_oneline(sample_category, 90.0, True)
    unweighted = model_formatters.format_category_oneline(sample_category, None, False)

    assert "(weight 40)" in weighted
    assert weighted.endswith("| 90.00%")
    assert "weight" not in unweighted
    assert unweighted.endswith("| --")


def test_format_final_grade():
    report = {"final_grade": 85.0, "letter_grade": "B"}
    empty = {"final_grade": None, "letter_grade": None}

    assert model_formatters.format_final_grade(report) == "Final Grade: 85.00% (B)"
    assert model_formatters.format_final_grade(empty) == "Final Grade: -- (--)"
