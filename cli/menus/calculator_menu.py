# cli/menus/calculator_menu.py

"""
Grade Calculator menu for the CLI.

Provides calls to the Manage Categories and Manage Grades menus, the grade summary, the weighted
mode toggle, an explicit save, and the confirmation-gated "clear all data" action.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import categories_menu, grades_menu
from models.grade_store import GradeStore


def run(store: GradeStore) -> None:
    """
    Top-level loop with dispatch for the Grade Calculator menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("GRADE CALCULATOR")
    options = [
        ("View Grade Summary", lambda: helpers.display_grade_summary(store)),
        ("Manage Categories", lambda: categories_menu.run(store)),
        ("Manage Grades", lambda: grades_menu.run(store)),
        ("Toggle Weighted Mode", lambda: toggle_weighted_mode(store)),
        ("Save Now", lambda: save_now(store)),
        ("Clear All Data", lambda: confirm_and_clear_data(store)),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def toggle_weighted_mode(store: GradeStore) -> None:
    response = store.toggle_weighted_mode()

    if not response.success:
        helpers.display_response_failure(response)
        return

    print(f"\n{response.detail}")
    helpers.display_grade_summary(store)


def save_now(store: GradeStore) -> None:
    response = store.save()

    if not response.success:
        helpers.display_response_failure(response)
        print("Your changes are still available for this session.")
    else:
        print(f"\n{response.detail}")


def confirm_and_clear_data(store: GradeStore) -> bool:
    """
    Clears every category and grade after explicit confirmation, then seeds the default category.

    Returns:
        True if the data was cleared, False if the user declined.
    """
    helpers.caution_banner()

    if not helpers.confirm_action(
        "Are you sure you want to clear all data? This cannot be undone."
    ):
        helpers.returning_without_changes()
        return False

    response = store.reset_to_default()

    if not response.success:
        helpers.display_response_failure(response)

    print("\nAll data cleared.")
    return True
