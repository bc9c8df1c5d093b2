# tests/conftest.py

import threading

import pytest

from core.storage import InMemoryStorage
from models.category import Category
from models.grade_item import GradeItem
from models.grade_store import GradeStore


class FakeTimer:
    """
    Stands in for `threading.Timer`. Nothing fires until the test calls `fire()`.
    """

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.canceled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.canceled = True

    def fire(self):
        if self.started and not self.canceled:
            self.function()


class FakeTimerFactory:
    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def live_timers(self) -> list[FakeTimer]:
        return [t for t in self.timers if t.started and not t.canceled]

    def fire_all(self):
        for timer in list(self.live_timers):
            timer.fire()


class FailingStorage:
    """
    A backend that behaves like disabled or full storage.
    """

    def read(self, key):
        raise OSError("storage is disabled")

    def write(self, key, payload):
        raise OSError("quota exceeded")

    def remove(self, key):
        raise OSError("storage is disabled")


class CountingStorage(InMemoryStorage):
    def __init__(self, records=None):
        super().__init__(records)
        self.writes = 0

    def write(self, key, payload):
        self.writes += 1
        super().write(key, payload)


class BlockingStorage(InMemoryStorage):
    """
    Holds the first write open until the test sets `release`.
    """

    def __init__(self, records=None):
        super().__init__(records)
        self.entered = threading.Event()
        self.release = threading.Event()

    def write(self, key, payload):
        if not self.entered.is_set():
            self.entered.set()
            self.release.wait(timeout=5)
        super().write(key, payload)


@pytest.fixture
def timer_factory():
    return FakeTimerFactory()


@pytest.fixture
def storage():
    return CountingStorage()


@pytest.fixture
def sample_store(storage, timer_factory):
    return GradeStore(storage, timer_factory=timer_factory)


@pytest.fixture
def blocking_storage():
    return BlockingStorage()


@pytest.fixture
def failing_store(timer_factory):
    return GradeStore(FailingStorage(), timer_factory=timer_factory)


@pytest.fixture
def sample_grade():
    return GradeItem("grade-1", "Quiz 1", 9.0, 10.0)


@pytest.fixture
def sample_ungraded_item():
    return GradeItem("grade-2", "Quiz 2")


@pytest.fixture
def sample_category(sample_grade, sample_ungraded_item):
    return Category(
        "cat-1", "Quizzes", 40.0, [sample_grade, sample_ungraded_item]
    )


def make_category(id, weight, *points, name="test_category"):
    """
    Builds a category from (score, max) pairs.
    """
    grades = [
        GradeItem(f"{id}-grade-{i}", f"item {i}", score, max)
        for i, (score, max) in enumerate(points, 1)
    ]
    return Category(id, name, weight, grades)


@pytest.fixture
def category_factory():
    return make_category
