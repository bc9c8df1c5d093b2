# cli/menus/grades_menu.py

"""
Manage Grades menu for the grade calculator CLI.

The user first picks a category, then adds, edits, removes, or views the grades inside it.
Blank or non-numeric scores are stored as absent and simply do not count toward the average.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.category import Category
from models.grade_item import GradeItem
from models.grade_store import NEW_GRADE_MAX, GradeStore


def run(store: GradeStore) -> None:
    """
    Prompts for a category, then loops the Manage Grades menu for it.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    category = helpers.find_category_from_list(store)

    if category is MenuSignal.CANCEL:
        helpers.returning_to("Grade Calculator menu")
        return
    category = cast(Category, category)

    title = formatters.format_banner_text(f"Grades: {category.name or '[UNNAMED]'}")
    options = [
        ("Add Grade", add_grade),
        ("Edit Grade", find_and_edit_grade),
        ("Remove Grade", find_and_remove_grade),
        ("View Grades", view_grades),
    ]
    zero_option = "Return to Grade Calculator menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break
            elif callable(menu_response):
                menu_response(store, category)
            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        store.on_visibility_lost()

    helpers.returning_to("Grade Calculator menu")


# === add grade ===


def add_grade(store: GradeStore, category: Category) -> None:
    name = helpers.prompt_user_input("Enter the grade name (optional):")
    score = helpers.prompt_user_input_or_none("Enter the score (leave blank if not graded yet):")
    max_input = helpers.prompt_user_input_or_none(
        f"Enter the maximum score (leave blank for {NEW_GRADE_MAX:g}):"
    )

    grade = store.create_grade(
        category.id,
        name,
        score,
        max_input if max_input is not None else NEW_GRADE_MAX,
    )

    if grade is None:
        print("\nThis category no longer exists. The grade was not added.")
        return

    print(f"\nGrade added: {model_formatters.format_grade_oneline(grade)}")
    print(
        f"{category.name or '[UNNAMED]'} average: "
        f"{formatters.format_percentage(store.category_average(category.id))}"
    )


# === edit grade ===


def find_and_edit_grade(store: GradeStore, category: Category) -> None:
    grade = helpers.find_grade_from_list(category)

    if grade is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    grade = cast(GradeItem, grade)

    title = formatters.format_banner_text("Edit Grade")
    options = [
        ("Name", lambda: edit_name(store, category, grade)),
        ("Score", lambda: edit_score(store, category, grade)),
        ("Maximum Score", lambda: edit_max(store, category, grade)),
    ]

    while True:
        print(f"\n{model_formatters.format_grade_oneline(grade)}")

        menu_response = helpers.display_menu(title, options, "Finish editing")

        if menu_response is MenuSignal.EXIT:
            break
        elif callable(menu_response):
            menu_response()
        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def edit_name(store: GradeStore, category: Category, grade: GradeItem) -> None:
    name = helpers.prompt_user_input("Enter the new name:")
    response = store.rename_grade(category.id, grade.id, name)

    if not response.success:
        helpers.display_response_failure(response)


def edit_score(store: GradeStore, category: Category, grade: GradeItem) -> None:
    score = helpers.prompt_user_input("Enter the new score (leave blank to clear):")
    response = store.update_grade_score(category.id, grade.id, score)

    if not response.success:
        helpers.display_response_failure(response)


def edit_max(store: GradeStore, category: Category, grade: GradeItem) -> None:
    max_input = helpers.prompt_user_input("Enter the new maximum score (leave blank to clear):")
    response = store.update_grade_max(category.id, grade.id, max_input)

    if not response.success:
        helpers.display_response_failure(response)


# === remove grade ===


def find_and_remove_grade(store: GradeStore, category: Category) -> None:
    grade = helpers.find_grade_from_list(category)

    if grade is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    grade = cast(GradeItem, grade)

    if not helpers.confirm_action(
        f"Do you want to remove {grade.name or '[UNNAMED]'}?"
    ):
        helpers.returning_without_changes()
        return

    response = store.remove_grade(category.id, grade.id)

    if not response.success:
        helpers.display_response_failure(response)
    else:
        print(f"\n{response.detail}")


# === view grades ===


def view_grades(store: GradeStore, category: Category) -> None:
    print(f"\n{formatters.format_banner_text(category.name or '[UNNAMED]')}")

    if not category.grades:
        print("There are no grades in this category.")
    else:
        helpers.display_results(category.grades, True, model_formatters.format_grade_oneline)

    print(f"\nAverage: {formatters.format_percentage(store.category_average(category.id))}")
