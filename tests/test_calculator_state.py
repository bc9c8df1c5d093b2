# tests/test_calculator_state.py

import pytest

from models.calculator_state import CalculatorState
from models.category import Category


def test_new_state_defaults():
    state = CalculatorState()

    assert state.categories == []
    assert state.is_weighted is True
    assert state.next_category_id == 1
    assert state.next_grade_id == 1


def test_mint_ids_are_sequential():
    state = CalculatorState()

    assert state.mint_category_id() == "cat-1"
    assert state.mint_category_id() == "cat-2"
    assert state.mint_grade_id() == "grade-1"
    assert state.next_category_id == 3
    assert state.next_grade_id == 2


def test_to_dict_uses_persisted_layout(sample_category):
    state = CalculatorState([sample_category], False, 2, 3)

    data = state.to_dict()

    assert set(data) == {"categories", "isWeighted", "nextCategoryId", "nextGradeId"}
    assert data["isWeighted"] is False
    assert data["nextCategoryId"] == 2
    assert data["nextGradeId"] == 3
    assert data["categories"][0]["id"] == "cat-1"


def test_round_trip_preserves_state(sample_category):
    other = Category("cat-4", "Exams", 60.0)
    state = CalculatorState([sample_category, other], False, 5, 9)

    restored = CalculatorState.from_dict(state.to_dict())

    assert restored.to_dict() == state.to_dict()
    assert [c.id for c in restored.categories] == ["cat-1", "cat-4"]


@pytest.mark.parametrize("data", [None, [], "corrupt", 42])
def test_from_non_dict_yields_defaults(data):
    state = CalculatorState.from_dict(data)

    assert state.to_dict() == CalculatorState().to_dict()


def test_missing_fields_fall_back_to_defaults():
    state = CalculatorState.from_dict({})

    assert state.categories == []
    assert state.is_weighted is True
    assert state.next_category_id == 1
    assert state.next_grade_id == 1


def test_missing_is_weighted_defaults_to_true():
    state = CalculatorState.from_dict({"categories": [], "nextCategoryId": 4})

    assert state.is_weighted is True
    assert state.next_category_id == 4


def test_false_is_weighted_is_kept():
    assert CalculatorState.from_dict({"isWeighted": False}).is_weighted is False


@pytest.mark.parametrize("categories", ["corrupt", 17, {"id": "cat-1"}])
def test_corrupt_categories_yield_empty_list(categories):
    state = CalculatorState.from_dict({"categories": categories, "isWeighted": False})

    assert state.categories == []
    assert state.is_weighted is False


def test_bad_and_duplicate_categories_are_skipped():
    state = CalculatorState.from_dict(
        {
            "categories": [
                {"id": "cat-1", "name": "Homework", "weight": 30},
                None,
                {"id": "cat-1", "name": "Duplicate", "weight": 70},
                {"id": "cat-2", "name": "Exams", "weight": 70},
            ]
        }
    )

    assert [(c.id, c.name) for c in state.categories] == [
        ("cat-1", "Homework"),
        ("cat-2", "Exams"),
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1), ("7", 1), (True, 1), (0, 1), (-4, 1), (2.5, 1), (3.0, 3), (12, 12)],
)
def test_validate_counter_input(raw, expected):
    assert CalculatorState.validate_counter_input(raw) == expected


def test_counters_are_reconciled_with_existing_ids():
    state = CalculatorState.from_dict(
        {
            "categories": [
                {
                    "id": "cat-3",
                    "grades": [{"id": "grade-8"}, {"id": "imported"}],
                },
                {"id": "legacy"},
            ]
        }
    )

    assert state.next_category_id == 4
    assert state.next_grade_id == 9
    assert state.mint_category_id() == "cat-4"


def test_reconcile_never_lowers_counters():
    state = CalculatorState.from_dict(
        {"categories": [{"id": "cat-1"}], "nextCategoryId": 10, "nextGradeId": 20}
    )

    assert state.next_category_id == 10
    assert state.next_grade_id == 20


def test_reset_keeps_weighting_flag(sample_category):
    state = CalculatorState([sample_category], False, 5, 9)

    state.reset()

    assert state.categories == []
    assert state.next_category_id == 1
    assert state.next_grade_id == 1
    assert state.is_weighted is False
