# core/storage.py

"""
Key-value persistence backends for the calculator record.

Each backend stores opaque text under a string key. Backends raise `OSError` when the
underlying medium is unavailable; callers (the `GradeStore`) are responsible for catching
and logging failures. Serialization to and from JSON happens in the store, not here.
"""

from __future__ import annotations

import os
import tempfile
from typing import Protocol


class StorageBackend(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, payload: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """
    Holds records in a plain dictionary. Nothing survives the process.
    """

    def __init__(self, records: dict[str, str] | None = None):
        self._records: dict[str, str] = dict(records or {})

    @property
    def records(self) -> dict[str, str]:
        return self._records

    def read(self, key: str) -> str | None:
        return self._records.get(key)

    def write(self, key: str, payload: str) -> None:
        self._records[key] = payload

    def remove(self, key: str) -> None:
        self._records.pop(key, None)


class JsonFileStorage:
    """
    Stores each record as `<dir_path>/<key>.json`.

    Writes go to a temporary file in the same directory and are moved into place with
    `os.replace()`, so an interrupted write never leaves a truncated record behind.

    Notes:
        - The caller is responsible for ensuring that `dir_path` exists and is writable.
    """

    def __init__(self, dir_path: str):
        self._dir_path = dir_path

    @property
    def dir_path(self) -> str:
        return self._dir_path

    def path_for(self, key: str) -> str:
        return os.path.join(self._dir_path, f"{key}.json")

    def read(self, key: str) -> str | None:
        try:
            with open(self.path_for(key), "r", encoding="utf-8") as f:
                return f.read()

        except FileNotFoundError:
            return None

    def write(self, key: str, payload: str) -> None:
        fd, tmp_path = tempfile.mkstemp(
            dir=self._dir_path, prefix=f".{key}.", suffix=".tmp"
        )

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)

            os.replace(tmp_path, self.path_for(key))

        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove(self, key: str) -> None:
        try:
            os.remove(self.path_for(key))

        except FileNotFoundError:
            pass
