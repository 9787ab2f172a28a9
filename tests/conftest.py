"""Shared fixtures for PatternHub tests."""

from datetime import date, datetime, timedelta

import pytest

from patternhub.classroom import InMemoryProgressStorage, ProgressStore, load_catalog
from patternhub.schemas import PatternCatalog


class FakeClock:
    """Settable calendar and wall clock."""

    def __init__(self, start: datetime = datetime(2024, 3, 1, 9, 0)):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture(scope="session")
def catalog() -> PatternCatalog:
    """The packaged catalog."""
    return load_catalog()


@pytest.fixture
def small_catalog() -> PatternCatalog:
    return PatternCatalog.model_validate({
        "patterns": [
            {
                "id": "singleton",
                "name": "Singleton",
                "category": "creational",
                "difficulty": "beginner",
                "lesson_file": "lessons/creational/singleton.md",
                "challenges": [
                    {"id": "singleton-debug", "title": "Debug", "difficulty": "beginner", "points": 100},
                    {"id": "singleton-threadsafe", "title": "Thread-safe", "difficulty": "intermediate", "points": 200},
                ],
            },
            {
                "id": "builder",
                "name": "Builder",
                "category": "creational",
                "difficulty": "intermediate",
                "challenges": [
                    {"id": "meal-builder", "title": "Meal", "difficulty": "beginner", "points": 150},
                ],
            },
            {
                "id": "adapter",
                "name": "Adapter",
                "category": "structural",
                "difficulty": "intermediate",
                "challenges": [
                    {"id": "adapter-api", "title": "API", "difficulty": "intermediate", "points": 250},
                ],
            },
        ]
    })


@pytest.fixture
def storage() -> InMemoryProgressStorage:
    return InMemoryProgressStorage()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(small_catalog, storage, clock) -> ProgressStore:
    return ProgressStore(small_catalog, storage, today=clock.today, now=clock.now)
