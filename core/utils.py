# core/utils.py

"""
Repository for program-wide utilities.

Record IDs take the form `<prefix>-<n>` (e.g. `cat-3`, `grade-12`), where `n` comes
from a monotonically increasing counter held by `CalculatorState`.
"""

CATEGORY_ID_PREFIX = "cat"
GRADE_ID_PREFIX = "grade"


def format_record_id(prefix: str, number: int) -> str:
    return f"{prefix}-{number}"


def parse_record_number(record_id: str, prefix: str) -> int | None:
    """
    Extracts the counter value from a record ID, or None if the ID was not minted with `prefix`.
    """
    head, sep, tail = record_id.rpartition("-")

    if not sep or head != prefix or not (tail.isascii() and tail.isdigit()):
        return None

    return int(tail)
