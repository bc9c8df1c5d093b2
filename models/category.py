# models/category.py

"""
Represents a grade category within the calculator.

Each `Category` owns an ordered list of `GradeItem` records and carries a weight used when the
calculator is in weighted mode. Weights are free-form: there is no enforced range and no
requirement that the weights of all categories sum to 100.

Key behaviors:
- `weight`: Always a float. Blank, non-numeric, or non-finite input is stored as 0.0.
- `grades`: Insertion order is display order; it has no effect on aggregation.
- `add_grade()` / `find_grade()` / `remove_grade()`: Grade membership is managed here, ID minting is not.
- `to_dict()` / `from_dict()`: Used for serialization and persistence.
"""

from __future__ import annotations

import math
from typing import Any

from core.logging_utils import create_logger
from models.grade_item import GradeItem

logger = create_logger(__name__)


class Category:

    def __init__(
        self,
        id: str,
        name: str,
        weight: float | str | None = 0.0,
        grades: list[GradeItem] | None = None,
    ):
        self._id = id
        self._name = name
        # weight uses setter method for input normalization
        self.weight = weight
        self._grades: list[GradeItem] = list(grades or [])

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
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: Any) -> None:
        self._weight = Category.validate_weight_input(weight)

    @property
    def grades(self) -> list[GradeItem]:
        return self._grades

    @property
    def valid_grades(self) -> list[GradeItem]:
        return [grade for grade in self._grades if grade.is_valid]

    # === grade membership ===

    def add_grade(self, grade: GradeItem) -> None:
        self._grades.append(grade)

    def find_grade(self, grade_id: str) -> GradeItem | None:
        return next((grade for grade in self._grades if grade.id == grade_id), None)

    def remove_grade(self, grade_id: str) -> GradeItem | None:
        """
        Removes and returns the grade with the given ID, or None if no such grade exists.
        """
        grade = self.find_grade(grade_id)

        if grade is not None:
            self._grades.remove(grade)

        return grade

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "weight": self._weight,
            "grades": [grade.to_dict() for grade in self._grades],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Category:
        """
        Builds a `Category` and its grades from serialized form.

        Raises:
            TypeError: If `data` is not a dictionary.
            ValueError: If the `id` is missing or not a non-empty string.

        Notes:
            - A missing or non-string `name` becomes "", an unusable `weight` becomes 0.0.
            - A `grades` value that is not a list is treated as empty.
            - Individual grade entries that cannot be parsed, or that repeat an earlier grade ID,
              are skipped with a warning rather than failing the whole category.
        """
        if not isinstance(data, dict):
            raise TypeError("Category record must be a dictionary.")

        id = data.get("id")
        if not isinstance(id, str) or not id:
            raise ValueError("Category record is missing a valid id.")

        name = data.get("name")
        grade_data = data.get("grades")

        grades: list[GradeItem] = []
        seen_ids: set[str] = set()

        for entry in grade_data if isinstance(grade_data, list) else []:
            try:
                grade = GradeItem.from_dict(entry)

            except (TypeError, ValueError) as e:
                logger.warning("grade_record_skipped", category_id=id, error=str(e))
                continue

            if grade.id in seen_ids:
                logger.warning(
                    "grade_record_skipped",
                    category_id=id,
                    error=f"Duplicate grade id: {grade.id}",
                )
                continue

            seen_ids.add(grade.id)
            grades.append(grade)

        return cls(
            id=id,
            name=name if isinstance(name, str) else "",
            weight=data.get("weight"),
            grades=grades,
        )

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Category({self._id}, {self._name}, {self._weight}, {len(self._grades)} grades)"

    def __str__(self) -> str:
        return f"CATEGORY: name: {self._name}, weight: {self._weight}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_weight_input(weight: Any) -> float:
        """
        Normalizes input for a `Category` weight.

        Never raises. Accepts any input, and then:
            - Treats None, blank strings, and booleans as 0.0.
            - Casts to float, falling back to 0.0 if the cast fails.
            - Replaces non-finite numbers and ints too large for a float with 0.0.

        Args:
            weight (Any): The input value to normalize.

        Returns:
            The normalized weight value (float).

        Notes:
            - Negative weights and weights above 100 are accepted as entered.
        """
        if weight is None or isinstance(weight, bool):
            return 0.0

        if isinstance(weight, str):
            weight = weight.strip()

        try:
            weight = float(weight)

        except (TypeError, ValueError, OverflowError):
            return 0.0

        if not math.isfinite(weight):
            return 0.0

        return weight
