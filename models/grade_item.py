# models/grade_item.py

"""
The GradeItem model represents a single graded component (assignment, quiz, test) inside a `Category`.

A `GradeItem` counts toward its category average only when it is valid: both `score` and `max`
are present and `max` is greater than zero. Incomplete items are kept (and persisted) so the user
can fill them in later.
"""

from __future__ import annotations

import math
from typing import Any

from core.aggregation import is_valid_grade


class GradeItem:

    def __init__(
        self,
        id: str,
        name: str = "",
        score: float | str | None = None,
        max: float | str | None = 100.0,
    ):
        self._id = id
        self._name = name
        # score and max use setter methods for input normalization
        self.score = score
        self.max = max

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name

    @property
    def score(self) -> float | None:
        return self._score

    @score.setter
    def score(self, score: Any) -> None:
        self._score = GradeItem.validate_points_input(score)

    @property
    def max(self) -> float | None:
        return self._max

    @max.setter
    def max(self, max: Any) -> None:
        self._max = GradeItem.validate_points_input(max)

    @property
    def is_valid(self) -> bool:
        return is_valid_grade(self)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "score": self._score,
            "max": self._max,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeItem:
        """
        Builds a `GradeItem` from its serialized form.

        Raises:
            TypeError: If `data` is not a dictionary.
            ValueError: If the `id` is missing or not a non-empty string.

        Notes:
            - A missing or non-string `name` becomes "".
            - Missing or unparseable `score`/`max` values become None.
        """
        if not isinstance(data, dict):
            raise TypeError("Grade record must be a dictionary.")

        id = data.get("id")
        if not isinstance(id, str) or not id:
            raise ValueError("Grade record is missing a valid id.")

        name = data.get("name")

        return cls(
            id=id,
            name=name if isinstance(name, str) else "",
            score=data.get("score"),
            max=data.get("max"),
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"GradeItem({self._id}, {self._name}, {self._score}, {self._max})"

    def __str__(self) -> str:
        return f"GRADE: name: {self._name}, score: {self._score}/{self._max}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_points_input(points: Any) -> float | None:
        """
        Normalizes input for a `GradeItem` score or max value.

        Never raises. Anything that is not a usable number is treated as absent:
            - None, blank strings, and booleans become None.
            - Strings are stripped and cast to float; unparseable strings become None.
            - Non-finite numbers (nan, inf) and ints too large for a float become None.

        Args:
            points (Any): The raw input value, typically from a display layer or a persisted record.

        Returns:
            The normalized value (float or None).
        """
        if points is None or isinstance(points, bool):
            return None

        if isinstance(points, str):
            points = points.strip()
            if points == "":
                return None

        try:
            points = float(points)

        except (TypeError, ValueError, OverflowError):
            return None

        if not math.isfinite(points):
            return None

        return points
