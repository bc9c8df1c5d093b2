# models/grade_store.py

"""
The GradeStore is the single owner of a `CalculatorState` and the only path through which it changes.

Every mutation goes through a store method, which updates the state, notifies subscribers with a
`StoreEvent`, and schedules a debounced write to the storage backend. Display layers subscribe to
change notifications and re-query averages through the store instead of holding references into
the state tree.

Persistence contract:
- The state is written as one JSON record under `storage_key`.
- `save()`, `load()`, and `clear()` never raise. Storage failures are logged as warnings and the
  session continues on in-memory state.
- Writes are debounced (trailing edge). `shutdown()` and `on_visibility_lost()` write synchronously
  and never rely on the timer.

Stale references (IDs that no longer exist) are silent no-ops reported through `Response.not_found()`.
"""

from __future__ import annotations

import json
import threading
from enum import Enum
from typing import Any, Callable

from core.aggregation import (
    build_grade_report,
    compute_category_average,
    compute_final_grade,
    map_to_letter_grade,
)
from core.logging_utils import create_logger
from core.response import ErrorCode, Response
from core.scheduler import DebouncedTask, TimerFactory, daemon_timer
from core.storage import StorageBackend
from models.calculator_state import CalculatorState
from models.category import Category
from models.grade_item import GradeItem

logger = create_logger(__name__)

DEFAULT_STORAGE_KEY = "gradeCalculatorData"
DEFAULT_SAVE_DELAY = 0.3

DEFAULT_CATEGORY_NAME = "Assignments"
DEFAULT_CATEGORY_WEIGHT = 100.0
NEW_CATEGORY_NAME = "New Category"
NEW_CATEGORY_WEIGHT = 25.0
NEW_GRADE_MAX = 100.0


class ChangeKind(Enum):
    CATEGORY_ADDED = "CATEGORY_ADDED"
    CATEGORY_REMOVED = "CATEGORY_REMOVED"
    CATEGORY_UPDATED = "CATEGORY_UPDATED"
    GRADE_ADDED = "GRADE_ADDED"
    GRADE_REMOVED = "GRADE_REMOVED"
    GRADE_UPDATED = "GRADE_UPDATED"
    MODE_CHANGED = "MODE_CHANGED"
    STATE_LOADED = "STATE_LOADED"
    STATE_CLEARED = "STATE_CLEARED"


class StoreEvent:

    def __init__(
        self,
        kind: ChangeKind,
        category_id: str | None = None,
        grade_id: str | None = None,
    ):
        self._kind = kind
        self._category_id = category_id
        self._grade_id = grade_id

    @property
    def kind(self) -> ChangeKind:
        return self._kind

    @property
    def category_id(self) -> str | None:
        return self._category_id

    @property
    def grade_id(self) -> str | None:
        return self._grade_id

    @property
    def affects_category_average(self) -> bool:
        return self._kind in (
            ChangeKind.GRADE_ADDED,
            ChangeKind.GRADE_REMOVED,
            ChangeKind.GRADE_UPDATED,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoreEvent):
            return NotImplemented
        return (self._kind, self._category_id, self._grade_id) == (
            other._kind,
            other._category_id,
            other._grade_id,
        )

    def __repr__(self) -> str:
        return f"StoreEvent({self._kind.name}, {self._category_id}, {self._grade_id})"


Listener = Callable[[StoreEvent], None]


class GradeStore:

    def __init__(
        self,
        storage: StorageBackend,
        storage_key: str = DEFAULT_STORAGE_KEY,
        save_delay: float = DEFAULT_SAVE_DELAY,
        timer_factory: TimerFactory = daemon_timer,
    ):
        self._storage = storage
        self._storage_key = storage_key
        self._state = CalculatorState()
        self._categories_by_id: dict[str, Category] = {}
        self._listeners: list[Listener] = []
        # guards the state tree against the debounced writer thread
        self._lock = threading.RLock()
        self._save_task = DebouncedTask(self.save, save_delay, timer_factory)

    # === properties ===

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def categories(self) -> list[Category]:
        """
        A snapshot of the categories in display order. Mutate through the store methods.
        """
        return list(self._state.categories)

    @property
    def is_weighted(self) -> bool:
        return self._state.is_weighted

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def has_pending_save(self) -> bool:
        return self._save_task.pending

    # === change notifications ===

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Registers a listener for `StoreEvent` notifications.

        Returns:
            A callable that removes the listener. Calling it more than once is harmless.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(
        self,
        kind: ChangeKind,
        category_id: str | None = None,
        grade_id: str | None = None,
    ) -> None:
        event = StoreEvent(kind, category_id, grade_id)

        for listener in list(self._listeners):
            try:
                listener(event)

            except Exception as e:
                logger.warning("store_listener_failed", change=kind.name, error=str(e))

    def _changed(
        self,
        kind: ChangeKind,
        category_id: str | None = None,
        grade_id: str | None = None,
    ) -> None:
        self._notify(kind, category_id, grade_id)
        self._save_task.schedule()

    # === lookups and derived values ===

    def find_category(self, category_id: str) -> Category | None:
        return self._categories_by_id.get(category_id)

    def find_grade(self, category_id: str, grade_id: str) -> GradeItem | None:
        category = self.find_category(category_id)
        return category.find_grade(grade_id) if category is not None else None

    def category_average(self, category_id: str) -> float | None:
        category = self.find_category(category_id)
        return compute_category_average(category.grades) if category is not None else None

    def final_grade(self) -> float | None:
        return compute_final_grade(self._state.categories, self._state.is_weighted)

    def letter_grade(self) -> str | None:
        return map_to_letter_grade(self.final_grade())

    def report(self) -> dict:
        return build_grade_report(self._state.categories, self._state.is_weighted)

    # === category methods ===

    def create_category(
        self, name: str = NEW_CATEGORY_NAME, weight: Any = NEW_CATEGORY_WEIGHT
    ) -> Category:
        with self._lock:
            category = Category(
                id=self._state.mint_category_id(), name=name, weight=weight
            )
            self._state.categories.append(category)
            self._categories_by_id[category.id] = category

        self._changed(ChangeKind.CATEGORY_ADDED, category.id)

        return category

    def remove_category(self, category_id: str) -> Response:
        """
        Removes a `Category` and all of its grades.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the category was removed.
                    - False if no category has this ID. State is left untouched.
                - error (ErrorCode | None): `ErrorCode.NOT_FOUND` on failure.
                - status_code (int): 200 on success, 404 on failure.
                - data (dict): On success, "record" (Category) holds the removed category.
        """
        with self._lock:
            category = self._categories_by_id.pop(category_id, None)

            if category is None:
                return Response.not_found(
                    f"No category with id {category_id}. No changes made."
                )

            self._state.categories.remove(category)

        self._changed(ChangeKind.CATEGORY_REMOVED, category_id)

        return Response.succeed(
            detail=f"Category {category.name!r} removed.", data={"record": category}
        )

    def rename_category(self, category_id: str, name: str) -> Response:
        category = self.find_category(category_id)

        if category is None:
            return Response.not_found(f"No category with id {category_id}. No changes made.")

        with self._lock:
            category.name = name

        self._changed(ChangeKind.CATEGORY_UPDATED, category_id)

        return Response.succeed(detail=f"Category renamed to {name!r}.")

    def update_category_weight(self, category_id: str, weight: Any) -> Response:
        """
        Sets a category weight. Input that is blank or not a finite number is stored as 0.0.
        """
        category = self.find_category(category_id)

        if category is None:
            return Response.not_found(f"No category with id {category_id}. No changes made.")

        with self._lock:
            category.weight = weight

        self._changed(ChangeKind.CATEGORY_UPDATED, category_id)

        return Response.succeed(
            detail=f"Category weight updated to {category.weight:g}.",
            data={"weight": category.weight},
        )

    def ensure_default_category(self) -> Category | None:
        """
        Seeds the default "Assignments" category if the calculator has no categories.

        Returns:
            The new `Category`, or None if categories already existed.
        """
        if self._state.categories:
            return None

        return self.create_category(DEFAULT_CATEGORY_NAME, DEFAULT_CATEGORY_WEIGHT)

    # === grade methods ===

    def create_grade(
        self,
        category_id: str,
        name: str = "",
        score: Any = None,
        max: Any = NEW_GRADE_MAX,
    ) -> GradeItem | None:
        """
        Appends a new `GradeItem` to a category.

        Returns:
            The new `GradeItem`, or None if the category does not exist. No ID is consumed in that case.
        """
        category = self.find_category(category_id)

        if category is None:
            return None

        with self._lock:
            grade = GradeItem(
                id=self._state.mint_grade_id(), name=name, score=score, max=max
            )
            category.add_grade(grade)

        self._changed(ChangeKind.GRADE_ADDED, category_id, grade.id)

        return grade

    def remove_grade(self, category_id: str, grade_id: str) -> Response:
        category = self.find_category(category_id)

        if category is None:
            return Response.not_found(f"No category with id {category_id}. No changes made.")

        with self._lock:
            grade = category.remove_grade(grade_id)

        if grade is None:
            return Response.not_found(
                f"No grade with id {grade_id} in category {category_id}. No changes made."
            )

        self._changed(ChangeKind.GRADE_REMOVED, category_id, grade_id)

        return Response.succeed(
            detail=f"Grade {grade.name!r} removed.", data={"record": grade}
        )

    def rename_grade(self, category_id: str, grade_id: str, name: str) -> Response:
        return self._update_grade(category_id, grade_id, "name", name)

    def update_grade_score(self, category_id: str, grade_id: str, score: Any) -> Response:
        return self._update_grade(category_id, grade_id, "score", score)

    def update_grade_max(self, category_id: str, grade_id: str, max: Any) -> Response:
        return self._update_grade(category_id, grade_id, "max", max)

    def _update_grade(
        self, category_id: str, grade_id: str, field: str, value: Any
    ) -> Response:
        grade = self.find_grade(category_id, grade_id)

        if grade is None:
            return Response.not_found(
                f"No grade with id {grade_id} in category {category_id}. No changes made."
            )

        with self._lock:
            setattr(grade, field, value)

        self._changed(ChangeKind.GRADE_UPDATED, category_id, grade_id)

        return Response.succeed(
            detail=f"Grade {field} updated.", data={field: getattr(grade, field)}
        )

    # === mode methods ===

    def set_weighted_mode(self, is_weighted: bool) -> Response:
        with self._lock:
            self._state.is_weighted = is_weighted

        self._changed(ChangeKind.MODE_CHANGED)

        return Response.succeed(
            detail=f"Weighted mode is now {'on' if self._state.is_weighted else 'off'}.",
            data={"is_weighted": self._state.is_weighted},
        )

    def toggle_weighted_mode(self) -> Response:
        return self.set_weighted_mode(not self._state.is_weighted)

    # === persistence ===

    def save(self) -> Response:
        """
        Serializes the state and writes it to the storage backend.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was written.
                    - False if serialization or the storage write failed.
                - error (ErrorCode | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the state cannot be serialized.
                    - `ErrorCode.STORAGE_UNAVAILABLE` if the backend raises `OSError`.
                    - `ErrorCode.INTERNAL_ERROR` for unexpected errors.

        Notes:
            - Never raises. Failures are logged as warnings and in-memory state is unaffected.
        """
        try:
            # serialize and write as one step; a timer write never lands after a flush or clear
            with self._lock:
                payload = json.dumps(self._state.to_dict(), allow_nan=False)
                self._storage.write(self._storage_key, payload)

        except (TypeError, ValueError) as e:
            logger.warning("grade_state_save_failed", key=self._storage_key, error=str(e))
            return Response.fail(
                detail=f"State could not be serialized: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        except OSError as e:
            logger.warning("grade_state_save_failed", key=self._storage_key, error=str(e))
            return Response.fail(
                detail=f"Failed to write state to storage: {e}",
                error=ErrorCode.STORAGE_UNAVAILABLE,
            )

        except Exception as e:
            logger.warning("grade_state_save_failed", key=self._storage_key, error=str(e))
            return Response.fail(
                detail=f"Unexpected error: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            logger.debug("grade_state_saved", key=self._storage_key, size=len(payload))
            return Response.succeed(detail="State saved.")

    def load(self) -> bool:
        """
        Replaces the live state with the persisted record, if one exists.

        Returns:
            True if a usable record was found, False if the session starts fresh (no record,
            unreadable storage, or a record that is not a JSON object or cannot be built).

        Notes:
            - Never raises. When nothing usable is found the state is reset to defaults.
            - Individual fields of a found record fall back to defaults as described in
              `CalculatorState.from_dict()`.
            - Any pending debounced write is canceled; it would describe the state being replaced.
        """
        self._save_task.cancel()

        found = False
        state = CalculatorState()

        try:
            payload = self._storage.read(self._storage_key)

            if payload is not None:
                data = json.loads(payload)

                if isinstance(data, dict):
                    state = CalculatorState.from_dict(data)
                    found = True
                else:
                    logger.warning(
                        "grade_state_load_failed",
                        key=self._storage_key,
                        error=f"Expected a JSON object, got {type(data).__name__}",
                    )

        except Exception as e:
            logger.warning("grade_state_load_failed", key=self._storage_key, error=str(e))

        with self._lock:
            self._state = state
            self._rebuild_index()

        self._notify(ChangeKind.STATE_LOADED)

        return found

    def clear(self) -> Response:
        """
        Erases the persisted record and resets the live state to its empty form.

        Returns:
            Response: success is False with `ErrorCode.STORAGE_UNAVAILABLE` if the record could not
            be removed. The live state is reset either way.

        Notes:
            - The caller is responsible for seeding a default category afterward, see `reset_to_default()`.
            - The weighted/unweighted flag is kept.
        """
        self._save_task.cancel()

        with self._lock:
            self._state.reset()
            self._rebuild_index()

            try:
                self._storage.remove(self._storage_key)

            except Exception as e:
                logger.warning(
                    "grade_state_clear_failed", key=self._storage_key, error=str(e)
                )
                response = Response.fail(
                    detail=f"Failed to remove stored state: {e}",
                    error=ErrorCode.STORAGE_UNAVAILABLE,
                )

            else:
                response = Response.succeed(detail="All data cleared.")

        self._notify(ChangeKind.STATE_CLEARED)

        return response

    def _rebuild_index(self) -> None:
        self._categories_by_id = {c.id: c for c in self._state.categories}

    # === lifecycle signals ===

    def start_session(self) -> bool:
        """
        Loads persisted state and seeds the default category if nothing usable was stored.

        Returns:
            Whether persisted data was found.
        """
        found = self.load()
        self.ensure_default_category()
        return found

    def reset_to_default(self) -> Response:
        """
        Clears everything and seeds the default category. Callers must confirm with the user first.
        """
        response = self.clear()
        self.ensure_default_category()
        return response

    def on_visibility_lost(self) -> Response:
        return self._save_task.flush()

    def shutdown(self) -> Response:
        """
        Writes the current state synchronously and discards any pending debounced write.
        """
        return self._save_task.flush()
