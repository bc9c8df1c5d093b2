# core/aggregation.py

"""
Grade aggregation: category averages, the final grade, and letter-grade mapping.

Every function here is pure. "No data" is represented by None, never by 0.0 and never by an
exception; the display layer renders None as a placeholder.

A category average is points earned over points possible across its valid items, not the
mean of per-item percentages. 9/10 and 40/50 average to 49/60 (81.67%), not 85%.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence


class Gradeable(Protocol):
    @property
    def score(self) -> float | None: ...

    @property
    def max(self) -> float | None: ...


class Weighted(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def weight(self) -> float: ...

    @property
    def grades(self) -> Sequence[Gradeable]: ...


# closed lower bounds, checked highest first
LETTER_GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (93.0, "A"),
    (90.0, "A-"),
    (87.0, "B+"),
    (83.0, "B"),
    (80.0, "B-"),
    (77.0, "C+"),
    (73.0, "C"),
    (70.0, "C-"),
    (67.0, "D+"),
    (63.0, "D"),
    (60.0, "D-"),
)
FAILING_LETTER_GRADE = "F"


def is_valid_grade(grade: Gradeable) -> bool:
    return grade.score is not None and grade.max is not None and grade.max > 0


def compute_category_average(grades: Iterable[Gradeable]) -> float | None:
    """
    Computes a category percentage as total points earned over total points possible.

    Args:
        grades (Iterable[Gradeable]): Items exposing `score` and `max`.

    Returns:
        The percentage (0-100 for ordinary input, unbounded otherwise), or None if no item is valid.
    """
    valid_grades = [grade for grade in grades if is_valid_grade(grade)]

    if not valid_grades:
        return None

    total_score = 0.0
    total_max = 0.0

    for grade in valid_grades:
        total_score += grade.score
        total_max += grade.max

    return (total_score / total_max) * 100


def compute_final_grade(
    categories: Iterable[Weighted], is_weighted: bool
) -> float | None:
    """
    Combines category averages into a final percentage.

    Args:
        categories (Iterable[Weighted]): Categories exposing `weight` and `grades`.
        is_weighted (bool): Use the weighted formula if True, a plain mean of averages otherwise.

    Returns:
        The final percentage, or None when no category has data or, in weighted mode, when the
        weights of the categories with data sum to exactly zero.

    Notes:
        - Categories without data are dropped entirely; they neither count as zero nor dilute the weights.
        - In unweighted mode the weights are ignored completely.
    """
    averaged: list[tuple[float, float]] = []

    for category in categories:
        average = compute_category_average(category.grades)

        if average is not None:
            averaged.append((average, category.weight))

    if not averaged:
        return None

    if not is_weighted:
        return sum(average for average, _ in averaged) / len(averaged)

    total_weight = sum(weight for _, weight in averaged)

    if total_weight == 0:
        return None

    weighted_sum = sum(average * weight for average, weight in averaged)

    return weighted_sum / total_weight


def map_to_letter_grade(percentage: float | None) -> str | None:
    """
    Maps a raw percentage to a letter grade. No rounding is applied before comparison.
    """
    if percentage is None:
        return None

    for lower_bound, letter in LETTER_GRADE_THRESHOLDS:
        if percentage >= lower_bound:
            return letter

    return FAILING_LETTER_GRADE


def build_grade_report(categories: Sequence[Weighted], is_weighted: bool) -> dict:
    """
    Collects everything a display layer needs in a single pass.

    Returns:
        dict: A payload with the following keys:
            - "category_averages" (dict[str, float | None]): Average per category ID, in category order.
            - "final_grade" (float | None): The final percentage.
            - "letter_grade" (str | None): The letter for the unrounded final percentage.
            - "is_weighted" (bool): The mode used for the final grade.
    """
    final_grade = compute_final_grade(categories, is_weighted)

    return {
        "category_averages": {
            category.id: compute_category_average(category.grades)
            for category in categories
        },
        "final_grade": final_grade,
        "letter_grade": map_to_letter_grade(final_grade),
        "is_weighted": is_weighted,
    }
