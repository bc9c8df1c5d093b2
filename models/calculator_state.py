# models/calculator_state.py

"""
The CalculatorState model is the in-memory source of truth for a calculator session.

It owns every `Category` (and, through them, every `GradeItem`), the weighted/unweighted flag,
and the two counters used to mint record IDs. Counters only ever move forward, so an ID is
never handed out twice within the lineage of a persisted state, even after deletions.

Serialization uses the camelCase layout of the persisted record:
    {"categories": [...], "isWeighted": bool, "nextCategoryId": int, "nextGradeId": int}
"""

from __future__ import annotations

from typing import Any

from core.logging_utils import create_logger
from core.utils import (
    CATEGORY_ID_PREFIX,
    GRADE_ID_PREFIX,
    format_record_id,
    parse_record_number,
)
from models.category import Category

logger = create_logger(__name__)

DEFAULT_IS_WEIGHTED = True
DEFAULT_COUNTER = 1


class CalculatorState:

    def __init__(
        self,
        categories: list[Category] | None = None,
        is_weighted: bool = DEFAULT_IS_WEIGHTED,
        next_category_id: int = DEFAULT_COUNTER,
        next_grade_id: int = DEFAULT_COUNTER,
    ):
        self._categories: list[Category] = list(categories or [])
        self._is_weighted = is_weighted
        self._next_category_id = next_category_id
        self._next_grade_id = next_grade_id

    # === properties ===

    @property
    def categories(self) -> list[Category]:
        return self._categories

    @property
    def is_weighted(self) -> bool:
        return self._is_weighted

    @is_weighted.setter
    def is_weighted(self, is_weighted: bool) -> None:
        self._is_weighted = bool(is_weighted)

    @property
    def next_category_id(self) -> int:
        return self._next_category_id

    @property
    def next_grade_id(self) -> int:
        return self._next_grade_id

    # === id minting ===

    def mint_category_id(self) -> str:
        record_id = format_record_id(CATEGORY_ID_PREFIX, self._next_category_id)
        self._next_category_id += 1
        return record_id

    def mint_grade_id(self) -> str:
        record_id = format_record_id(GRADE_ID_PREFIX, self._next_grade_id)
        self._next_grade_id += 1
        return record_id

    def reconcile_counters(self) -> None:
        """
        Raises each counter past the highest number already used by an existing record ID.

        Notes:
            - Counters are never lowered.
            - IDs that were not minted by this program (no `cat-`/`grade-` prefix) are ignored.
        """
        category_numbers = [
            parse_record_number(c.id, CATEGORY_ID_PREFIX) for c in self._categories
        ]
        grade_numbers = [
            parse_record_number(g.id, GRADE_ID_PREFIX)
            for c in self._categories
            for g in c.grades
        ]

        highest_category = max((n for n in category_numbers if n is not None), default=0)
        highest_grade = max((n for n in grade_numbers if n is not None), default=0)

        self._next_category_id = max(self._next_category_id, highest_category + 1)
        self._next_grade_id = max(self._next_grade_id, highest_grade + 1)

    def reset(self) -> None:
        """
        Drops all categories and rewinds both counters.

        Notes:
            - The weighted/unweighted flag is a display preference and survives a reset.
        """
        self._categories = []
        self._next_category_id = DEFAULT_COUNTER
        self._next_grade_id = DEFAULT_COUNTER

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "categories": [category.to_dict() for category in self._categories],
            "isWeighted": self._is_weighted,
            "nextCategoryId": self._next_category_id,
            "nextGradeId": self._next_grade_id,
        }

    @classmethod
    def from_dict(cls, data: Any) -> CalculatorState:
        """
        Builds a `CalculatorState` from a persisted record, substituting defaults field by field.

        Args:
            data (Any): The deserialized record. Anything other than a dictionary yields a fresh state.

        Returns:
            A new `CalculatorState`. This method never raises.

        Notes:
            - `categories` that is missing or not a list becomes an empty list.
            - Category entries that cannot be parsed, or that repeat an earlier category ID, are skipped.
            - `isWeighted` that is missing or not a boolean becomes True.
            - Counters that are missing, non-integer, or below 1 become 1, and are then reconciled
              against the IDs actually present.
        """
        if not isinstance(data, dict):
            return cls()

        category_data = data.get("categories")
        categories: list[Category] = []
        seen_ids: set[str] = set()

        if category_data is not None and not isinstance(category_data, list):
            logger.warning(
                "category_records_discarded",
                error=f"Expected a list, got {type(category_data).__name__}",
            )

        for entry in category_data if isinstance(category_data, list) else []:
            try:
                category = Category.from_dict(entry)

            except (TypeError, ValueError) as e:
                logger.warning("category_record_skipped", error=str(e))
                continue

            if category.id in seen_ids:
                logger.warning(
                    "category_record_skipped",
                    error=f"Duplicate category id: {category.id}",
                )
                continue

            seen_ids.add(category.id)
            categories.append(category)

        is_weighted = data.get("isWeighted")

        state = cls(
            categories=categories,
            is_weighted=is_weighted if isinstance(is_weighted, bool) else DEFAULT_IS_WEIGHTED,
            next_category_id=CalculatorState.validate_counter_input(
                data.get("nextCategoryId")
            ),
            next_grade_id=CalculatorState.validate_counter_input(data.get("nextGradeId")),
        )
        state.reconcile_counters()

        return state

    # === dunder methods ===

    def __repr__(self) -> str:
        return (
            f"CalculatorState({len(self._categories)} categories, {self._is_weighted}, "
            f"{self._next_category_id}, {self._next_grade_id})"
        )

    # === data validators ===

    @staticmethod
    def validate_counter_input(counter: Any) -> int:
        if isinstance(counter, bool):
            return DEFAULT_COUNTER

        if isinstance(counter, float) and counter.is_integer():
            counter = int(counter)

        if not isinstance(counter, int) or counter < DEFAULT_COUNTER:
            return DEFAULT_COUNTER

        return counter
