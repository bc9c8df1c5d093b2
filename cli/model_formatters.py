# cli/model_formatters.py

"""
Display formatters for calculator records.

Averages are passed in rather than computed here; callers obtain them from the `GradeStore`.
"""

from textwrap import dedent

import core.formatters as formatters
from models.category import Category
from models.grade_item import GradeItem


def format_category_oneline(
    category: Category, average: float | None, is_weighted: bool = True
) -> str:
    name = category.name or "[UNNAMED]"
    weight = f" (weight {category.weight:g})" if is_weighted else ""
    return f"{name:<20}{weight} | {formatters.format_percentage(average)}"


def format_category_multiline(
    category: Category, average: float | None, is_weighted: bool = True
) -> str:
    weight = f"{category.weight:g}" if is_weighted else "[IGNORED]"

    return dedent(
        f"""\
        Name: {category.name or '[UNNAMED]'}
        Weight: {weight}
        Grades: {len(category.grades)} ({len(category.valid_grades)} counted)
        Average: {formatters.format_percentage(average)}"""
    )


def format_grade_oneline(grade: GradeItem) -> str:
    name = grade.name or "[UNNAMED]"
    points = f"{formatters.format_points(grade.score)} / {formatters.format_points(grade.max)}"
    status = "" if grade.is_valid else " [NOT COUNTED]"
    return f"{name:<20} | {points}{status}"


def format_final_grade(report: dict) -> str:
    percentage = formatters.format_percentage(report["final_grade"])
    letter = formatters.format_letter_grade(report["letter_grade"])
    return f"Final Grade: {percentage} ({letter})"
