# cli/path_utils.py

import os


def resolve_storage_dir(configured_dir: str, user_input: str | None = None) -> str:
    """
    Produces and ensures a usable storage directory for the calculator record.

    Args:
        configured_dir (str): The directory from settings, e.g. `~/Documents/GradeCalculator`.
        user_input (str | None): An optional override. If None or blank, `configured_dir` is used.

    Returns:
        An absolute, user-expanded directory path.

    Raises:
        OSError: If the directory does not exist and cannot be created.

    Notes:
        - Creates the directory path on disk (including parent directories) if it does not exist.
    """
    chosen = user_input.strip() if user_input and user_input.strip() else configured_dir
    storage_dir = os.path.abspath(os.path.expanduser(chosen))

    os.makedirs(storage_dir, exist_ok=True)

    return storage_dir
