# cli/main.py

"""
Entry point for the grade calculator CLI.

Loads settings, configures logging, opens the persisted calculator state, and hands control to
the Grade Calculator menu. State is written synchronously on the way out regardless of how the
menu loop ends.
"""

import cli.menu_helpers as helpers
import core.formatters as formatters
from cli.menus import calculator_menu
from cli.path_utils import resolve_storage_dir
from core.config import Settings, get_settings
from core.logging_utils import configure_logging, create_logger
from core.storage import InMemoryStorage, JsonFileStorage, StorageBackend
from models.grade_store import GradeStore

logger = create_logger(__name__)


def build_store(settings: Settings) -> GradeStore:
    """
    Creates a `GradeStore` backed by a JSON file in the configured storage directory.

    Notes:
        - If the storage directory cannot be created, the store falls back to in-memory storage
          and the session continues without persistence.
    """
    storage: StorageBackend

    try:
        storage = JsonFileStorage(resolve_storage_dir(settings.STORAGE_DIR))

    except OSError as e:
        logger.warning("storage_unavailable", storage_dir=settings.STORAGE_DIR, error=str(e))
        print("\nStorage is unavailable. Changes will not be saved after you exit.")
        storage = InMemoryStorage()

    return GradeStore(
        storage,
        storage_key=settings.STORAGE_KEY,
        save_delay=settings.SAVE_DEBOUNCE_SECONDS,
    )


def run_cli() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    store = build_store(settings)

    if store.start_session():
        print("\nLoaded saved grades.")

    helpers.display_grade_summary(store)

    try:
        calculator_menu.run(store)

    except (KeyboardInterrupt, EOFError):
        print()

    finally:
        store.shutdown()

    exit_program()


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.

    Notes:
        - Should only be called after the store has been shut down.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
