import logging
from typing import Optional

from study_buddy.clock import Clock, SystemClock
from study_buddy.exceptions import NoActiveSessionError
from study_buddy.repositories.flashcards import FlashcardsRepository
from study_buddy.schemas.stats import Stats
from study_buddy.schemas.study import StudySession, StudySessionState
from study_buddy.services.stats import StatsTracker
from study_buddy.services.study_session import StudySessionEngine

logger = logging.getLogger(__name__)


class StudyService:
    """Keeps the active study session and folds its result into stats."""

    def __init__(
        self,
        repo: FlashcardsRepository,
        stats: StatsTracker,
        clock: Clock | None = None,
    ):
        self.repo = repo
        self.stats = stats
        self.clock = clock or SystemClock()
        self.engine: Optional[StudySessionEngine] = None

    def _active(self) -> StudySessionEngine:
        if self.engine is None:
            raise NoActiveSessionError("No study session has been started")
        return self.engine

    def start(self) -> StudySessionState:
        """Begin a session over the current collection snapshot."""
        self.engine = StudySessionEngine(self.repo.cards, ledger=self.repo, clock=self.clock)
        logger.info(f"Study session started with {len(self.engine.cards)} cards")
        return self.engine.snapshot()

    def state(self) -> StudySessionState:
        return self._active().snapshot()

    def flip(self) -> StudySessionState:
        engine = self._active()
        engine.flip()
        return engine.snapshot()

    def reveal(self) -> StudySessionState:
        engine = self._active()
        engine.reveal()
        return engine.snapshot()

    def navigate(self, direction: int) -> StudySessionState:
        engine = self._active()
        engine.advance(direction)
        return engine.snapshot()

    def reset(self) -> StudySessionState:
        engine = self._active()
        engine.reset()
        return engine.snapshot()

    async def answer(
        self, correct: bool
    ) -> tuple[StudySessionState, Optional[StudySession], Optional[Stats]]:
        """Record a judgment; returns (state, summary, stats) with summary/stats on completion."""
        engine = self._active()
        summary = engine.record_answer(correct)
        await self.repo.save()

        stats = None
        if summary is not None:
            stats = await self.stats.apply_session_result(summary)
        return engine.snapshot(), summary, stats

    def end(self) -> None:
        if self.engine is not None:
            logger.info("Active study session discarded")
        self.engine = None
