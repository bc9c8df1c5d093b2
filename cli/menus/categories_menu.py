# cli/menus/categories_menu.py

"""
Manage Categories menu for the grade calculator CLI.

This module defines the interface for managing `Category` records:
- Adding new categories
- Renaming categories and changing their weights
- Removing categories (and all of their grades)
- Viewing categories with their current averages

All operations are routed through the `GradeStore`, which schedules persistence on every change.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from models.category import Category
from models.grade_store import NEW_CATEGORY_NAME, NEW_CATEGORY_WEIGHT, GradeStore


def run(store: GradeStore) -> None:
    """
    Top-level loop with dispatch for the Manage Categories menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block writes pending changes when the user leaves the menu.
    """
    title = formatters.format_banner_text("Manage Categories")
    options = [
        ("Add Category", add_category),
        ("Rename Category", find_and_rename_category),
        ("Change Category Weight", find_and_reweight_category),
        ("Remove Category", find_and_remove_category),
        ("View Categories", view_categories),
    ]
    zero_option = "Return to Grade Calculator menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break
            elif callable(menu_response):
                menu_response(store)
            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        store.on_visibility_lost()

    helpers.returning_to("Grade Calculator menu")


# === add category ===


def add_category(store: GradeStore) -> None:
    name = helpers.prompt_user_input_or_none(
        f"Enter the category name (leave blank for '{NEW_CATEGORY_NAME}'):"
    )

    weight_input = helpers.prompt_user_input_or_none(
        f"Enter the category weight (leave blank for {NEW_CATEGORY_WEIGHT:g}):"
    )

    category = store.create_category(
        name if name is not None else NEW_CATEGORY_NAME,
        weight_input if weight_input is not None else NEW_CATEGORY_WEIGHT,
    )

    print(f"\nCategory added: {category.name} (weight {category.weight:g}).")


# === edit category ===


def find_and_rename_category(store: GradeStore) -> None:
    category = helpers.find_category_from_list(store)

    if category is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    category = cast(Category, category)

    name = helpers.prompt_user_input_or_cancel(
        f"Enter a new name for {category.name or '[UNNAMED]'} (leave blank to cancel):"
    )

    if name is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    response = store.rename_category(category.id, cast(str, name))

    if not response.success:
        helpers.display_response_failure(response)
    else:
        print(f"\n{response.detail}")


def find_and_reweight_category(store: GradeStore) -> None:
    if not store.is_weighted:
        print("\nWeighted mode is off. Weights are kept but ignored until it is turned back on.")

    category = helpers.find_category_from_list(store)

    if category is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    category = cast(Category, category)

    weight = helpers.prompt_user_input_or_cancel(
        f"Enter a new weight for {category.name or '[UNNAMED]'} "
        f"(current: {category.weight:g}, leave blank to cancel):"
    )

    if weight is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return

    response = store.update_category_weight(category.id, weight)

    if not response.success:
        helpers.display_response_failure(response)
    else:
        print(f"\n{response.detail}")


# === remove category ===


def find_and_remove_category(store: GradeStore) -> None:
    category = helpers.find_category_from_list(store)

    if category is MenuSignal.CANCEL:
        helpers.returning_without_changes()
        return
    category = cast(Category, category)

    helpers.caution_banner()
    print(
        f"Removing {category.name or '[UNNAMED]'} also removes its "
        f"{len(category.grades)} grade(s). This cannot be undone."
    )

    if not helpers.confirm_action("Do you want to remove this category?"):
        helpers.returning_without_changes()
        return

    response = store.remove_category(category.id)

    if not response.success:
        helpers.display_response_failure(response)
    else:
        print(f"\n{response.detail}")


# === view categories ===


def view_categories(store: GradeStore) -> None:
    if not store.categories:
        print("\nThere are no categories.")
        return

    for category in store.categories:
        print(f"\n{formatters.format_banner_text(category.id, 20)}")
        print(
            model_formatters.format_category_multiline(
                category, store.category_average(category.id), store.is_weighted
            )
        )
