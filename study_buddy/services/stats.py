import logging
from datetime import date, timedelta

from pydantic import ValidationError

from study_buddy.clock import Clock, SystemClock, today
from study_buddy.db.interfaces import KeyValueStore
from study_buddy.exceptions import StorageError
from study_buddy.repositories.flashcards import FlashcardsRepository
from study_buddy.schemas.stats import Stats
from study_buddy.schemas.study import StudySession

logger = logging.getLogger(__name__)

STATS_KEY = "ai-study-buddy-stats"


class StatsTracker:
    """Derives aggregate study statistics and keeps them in the store.

    Stats are a projection: ``total_cards`` always comes from the repository,
    ``studied_today`` rolls over on calendar-day change and the streak counts
    consecutive days with at least one completed session.
    """

    def __init__(
        self,
        store: KeyValueStore,
        repo: FlashcardsRepository,
        clock: Clock | None = None,
        key: str = STATS_KEY,
    ):
        self.store = store
        self.repo = repo
        self.clock = clock or SystemClock()
        self.key = key
        self.current: Stats | None = None
        self._read_failed = False

    def _defaults(self, day: date) -> Stats:
        return Stats(
            total_cards=0,
            studied_today=0,
            correct_answers=0,
            streak_days=1,
            last_study_date=day,
        )

    async def _read(self, day: date) -> Stats:
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.error(f"Error loading study stats: {e}")
            self._read_failed = True
            return self._defaults(day)

        self._read_failed = False

        if raw is None:
            return self._defaults(day)

        try:
            return Stats.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed stats under {self.key}: {e}")
            return self._defaults(day)

    async def _write(self, stats: Stats) -> bool:
        if self._read_failed:
            logger.warning("Stored stats were unreadable, leaving them untouched")
            return False
        try:
            await self.store.set(self.key, stats.model_dump_json(by_alias=True))
        except StorageError as e:
            logger.error(f"Error saving study stats: {e}")
            return False
        return True

    async def refresh(self) -> Stats:
        day = today(self.clock)
        stats = await self._read(day)

        if stats.last_study_date != day:
            logger.info(f"New study day {day.isoformat()}, resetting daily counters")
            stats.studied_today = 0
            stats.last_study_date = day

        lapsed = stats.last_active_date is not None and (
            stats.last_active_date < day - timedelta(days=1)
        )
        if lapsed:
            stats.streak_days = 0

        stats.total_cards = self.repo.count
        await self._write(stats)
        self.current = stats
        return stats

    async def apply_session_result(self, session: StudySession) -> Stats:
        """Fold a completed session into the aggregate counters and persist."""
        stats = await self.refresh()
        day = today(self.clock)

        stats.studied_today += session.cards_studied
        stats.correct_answers += session.correct_answers

        if stats.last_active_date != day:
            consecutive = stats.last_active_date == day - timedelta(days=1)
            stats.streak_days = stats.streak_days + 1 if consecutive else 1
        stats.last_active_date = day

        await self._write(stats)
        self.current = stats
        logger.info(
            f"Session folded into stats: studied={session.cards_studied}, "
            f"correct={session.correct_answers}, streak={stats.streak_days}"
        )
        return stats
