"""
Shared fixtures: in-memory store, fixed clock and wired-up components.
"""
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from study_buddy.db.interfaces import InMemoryKeyValueStore
from study_buddy.exceptions import StorageError
from study_buddy.repositories.flashcards import FlashcardsRepository
from study_buddy.schemas.flashcards import Difficulty, Flashcard
from study_buddy.services.stats import StatsTracker

START = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)

SAMPLE_TEXT = (
    "Cells have membranes. Membranes control transport. "
    "DNA stores genetic information."
)


class FixedClock:
    """Manually driven clock for deterministic day-rollover and timing."""

    def __init__(self, start: datetime):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now


class FailingStore:
    """Store whose every operation fails like an unreachable backend."""

    async def get(self, key):
        raise StorageError("store unavailable")

    async def set(self, key, value):
        raise StorageError("store unavailable")

    async def delete(self, key):
        raise StorageError("store unavailable")


class FlakyStore(InMemoryKeyValueStore):
    """In-memory store whose first `read_failures` reads fail; writes always work."""

    def __init__(self, initial=None, read_failures: int = 1):
        super().__init__(initial)
        self.read_failures = read_failures

    async def get(self, key):
        if self.read_failures > 0:
            self.read_failures -= 1
            raise StorageError("read timed out")
        return await super().get(key)


def make_card(question: str, answer: str, **kwargs) -> Flashcard:
    kwargs.setdefault("created_at", START)
    kwargs.setdefault("difficulty", Difficulty.EASY)
    return Flashcard(question=question, answer=answer, **kwargs)


@pytest.fixture
def clock():
    return FixedClock(START)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def deck():
    return [
        make_card("What do cells have?", "Cells have membranes"),
        make_card("What do membranes control?", "Membranes control transport"),
        make_card("What stores genetic information?", "DNA stores genetic information"),
    ]


@pytest_asyncio.fixture
async def repo(store, deck):
    repository = FlashcardsRepository(store)
    await repository.save(deck)
    return repository


@pytest.fixture
def tracker(store, repo, clock):
    return StatsTracker(store, repo, clock=clock)
