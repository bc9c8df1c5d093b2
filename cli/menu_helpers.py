# cli/menu_helpers.py

"""
Helper functions for CLI menus and user interaction in the grade calculator.

This module provides utilities for:
- Displaying interactive menus and result lists
- Prompting for user input and confirmation
- Selecting categories and grades from numbered lists
- Displaying standard system messages and error feedback

These functions are shared across all menu modules to maintain consistent behavior.
"""

from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

import cli.model_formatters as model_formatters
import core.formatters as formatters
from core.response import Response
from models.category import Category
from models.grade_item import GradeItem
from models.grade_store import GradeStore

RecordType = TypeVar("RecordType", Category, GradeItem)


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Displays a numbered CLI menu and returns the selected action.

    Args:
        title (str): The heading displayed above the menu options.
        options (list[tuple[str, Callable[..., Any]]]): A list of (label, action) pairs to present.
        zero_option (str, optional): The label for the "cancel" or "exit" option. Defaults to "Return".

    Returns:
        MenuSignal.EXIT if the user selects the zero option.
        Callable[..., Any]: The function associated with the selected menu item.

    Notes:
        - Menu selection is repeated until a valid choice is made.
        - User input is matched by menu index, not by label.
    """
    while True:
        print(f"\n{title}")

        for i, (label, _) in enumerate(options, 1):
            print(f"{i}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option:")

        if choice == "0":
            return MenuSignal.EXIT

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError(choice)
            return options[index][1]

        except (ValueError, IndexError):
            print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = lambda x: str(x),
) -> None:
    for i, result in enumerate(results, 1):
        prefix = f"{i:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


def display_grade_summary(store: GradeStore) -> None:
    """
    Prints every category average followed by the final percentage and letter grade.
    """
    report = store.report()
    banner = formatters.format_banner_text(
        f"Grade Summary {formatters.format_weighting_status(report['is_weighted'])}"
    )
    print(f"\n{banner}")

    if not store.categories:
        print("There are no categories.")

    for category in store.categories:
        average = report["category_averages"].get(category.id)
        print(
            model_formatters.format_category_oneline(
                category, average, report["is_weighted"]
            )
        )

    print(f"\n{model_formatters.format_final_grade(report)}")


# === prompt user input methods ===


# Prompt Helpers
#
# Conventions:
# - `prompt_user_input()` is the base function, used by all others to standardize the UI format.
# - Empty string responses are overloaded for control signals:
#     - `prompt_user_input_or_cancel()` returns `MenuSignal.CANCEL` on blank input.
#     - `prompt_user_input_or_none()` returns `None`.
# - `confirm_action()` loops until the user enters a valid yes/no response.


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice == "y" or choice == "yes":
            return True

        elif choice == "n" or choice == "no":
            return False

        else:
            print("Invalid selection. Please try again.")


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    response = prompt_user_input(prompt)
    return MenuSignal.CANCEL if response == "" else response


def prompt_user_input_or_none(prompt: str) -> str | None:
    response = prompt_user_input(prompt)
    return None if response == "" else response


# === select methods ===


def prompt_selection_from_list(
    list_data: list[RecordType],
    list_description: str,
    formatter: Callable[[RecordType], str] = lambda x: str(x),
) -> RecordType | None:
    """
    Prompts the user to select an item from a list of records.

    Args:
        list_data (list[RecordType]): The records to choose from, shown in their stored order.
        list_description (str): A short description used in prompts and headings (e.g. "categories").
        formatter (Callable[[RecordType], str], optional): Converts each record to a display string. Defaults to str().

    Returns:
        RecordType: The selected record if a valid index is chosen.
        None: If the list is empty or the user cancels with "0".
    """
    if not list_data:
        print(f"\nThere are no {list_description.lower()}.")
        return None

    while True:
        print(f"\n{formatters.format_banner_text(list_description)}")

        display_results(list_data, True, formatter)

        choice = prompt_user_input("Select an option (0 to cancel):")

        if choice == "0":
            return None

        try:
            index = int(choice) - 1
            if index < 0:
                raise IndexError(choice)
            return list_data[index]

        except (ValueError, IndexError):
            print("\nInvalid selection. Please try again.")


def find_category_from_list(store: GradeStore) -> Category | MenuSignal:
    category = prompt_selection_from_list(
        store.categories,
        "Categories",
        lambda x: model_formatters.format_category_oneline(
            x, store.category_average(x.id), store.is_weighted
        ),
    )

    return MenuSignal.CANCEL if category is None else category


def find_grade_from_list(category: Category) -> GradeItem | MenuSignal:
    grade = prompt_selection_from_list(
        category.grades,
        f"Grades in {category.name or '[UNNAMED]'}",
        model_formatters.format_grade_oneline,
    )

    return MenuSignal.CANCEL if grade is None else grade


# === often used messages ===


def returning_without_changes() -> None:
    print("\nReturning without changes.")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


def caution_banner() -> None:
    caution_banner = formatters.format_banner_text("CAUTION!")
    print(f"\n{caution_banner}")


def display_response_failure(response: Response) -> None:
    """
    Displays a formatted error message based on a failed `Response`.

    Notes:
        - Does nothing if the response was successful.
        - Enum error codes are printed by name; string errors are printed as-is.
    """
    if response.success:
        return

    error_label = (
        response.error.name if isinstance(response.error, Enum) else str(response.error)
    )

    print(f"\n[ERROR: {error_label}] {response.detail}")
