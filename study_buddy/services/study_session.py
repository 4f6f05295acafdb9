import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol, Sequence

from study_buddy.clock import Clock, SystemClock
from study_buddy.exceptions import InvalidSessionStateError
from study_buddy.schemas.flashcards import Flashcard
from study_buddy.schemas.study import SessionState, StudySession, StudySessionState
from study_buddy.utils import percent

logger = logging.getLogger(__name__)

SummaryListener = Callable[[StudySession], None]


class AttemptLedger(Protocol):
    """Where answered cards get their counters bumped (the repository)."""

    def record_attempt(
        self, card_id: str, correct: bool, reviewed_at: datetime
    ) -> Flashcard: ...


class StudySessionEngine:
    """One pass over a fixed, ordered list of flashcards.

    BROWSING shows the question, REVEALED shows the answer and waits for a
    judgment, COMPLETE is reached once the last card is judged. An empty deck
    starts (and stays) in EMPTY. Calls that are not valid in the current state
    raise InvalidSessionStateError and leave every counter untouched.
    """

    def __init__(
        self,
        cards: Sequence[Flashcard],
        ledger: AttemptLedger,
        clock: Clock | None = None,
    ):
        self.cards: List[Flashcard] = list(cards)
        self.ledger = ledger
        self.clock = clock or SystemClock()
        self._listeners: List[SummaryListener] = []
        self._start()

    def _start(self) -> None:
        self.index = 0
        self.state = SessionState.BROWSING if self.cards else SessionState.EMPTY
        self.started_at = self.clock.now()
        self.session = StudySession(date=self.started_at)
        self.summary: Optional[StudySession] = None

    @property
    def current_card(self) -> Optional[Flashcard]:
        if not self.cards:
            return None
        return self.cards[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.cards) - 1

    @property
    def accuracy(self) -> int:
        return percent(self.session.correct_answers, self.session.cards_studied)

    @property
    def progress(self) -> float:
        if not self.cards:
            return 0.0
        return (self.index + 1) / len(self.cards) * 100

    def on_complete(self, listener: SummaryListener) -> None:
        self._listeners.append(listener)

    def _require(self, operation: str, *states: SessionState) -> None:
        if self.state not in states:
            raise InvalidSessionStateError(operation, self.state.value)

    def reveal(self) -> None:
        self._require("reveal", SessionState.BROWSING)
        self.state = SessionState.REVEALED

    def flip(self) -> None:
        """Toggle between question and answer sides."""
        self._require("flip", SessionState.BROWSING, SessionState.REVEALED)
        if self.state is SessionState.BROWSING:
            self.state = SessionState.REVEALED
        else:
            self.state = SessionState.BROWSING

    def advance(self, direction: int) -> bool:
        """Move one card forward (+1) or back (-1). Returns False at a boundary."""
        if direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {direction}")
        self._require("navigate", SessionState.BROWSING, SessionState.REVEALED)

        target = self.index + direction
        if target < 0 or target >= len(self.cards):
            return False

        self.index = target
        self.state = SessionState.BROWSING
        return True

    def record_answer(self, correct: bool) -> Optional[StudySession]:
        """Judge the revealed card. Returns the summary when this ends the session."""
        self._require("record an answer", SessionState.REVEALED)
        card = self.current_card
        now = self.clock.now()

        self.ledger.record_attempt(card.id, correct, now)
        self.session = self.session.model_copy(
            update={
                "cards_studied": self.session.cards_studied + 1,
                "correct_answers": self.session.correct_answers + (1 if correct else 0),
            }
        )

        if not self.is_last:
            self.index += 1
            self.state = SessionState.BROWSING
            return None

        self.state = SessionState.COMPLETE
        elapsed = int((now - self.started_at).total_seconds())
        self.summary = self.session.model_copy(update={"time_spent": max(elapsed, 0)})
        logger.info(
            f"Study session complete: {self.summary.correct_answers}/"
            f"{self.summary.cards_studied} correct in {self.summary.time_spent}s"
        )
        for listener in self._listeners:
            listener(self.summary)
        return self.summary

    def reset(self) -> None:
        """Back to the first card with a fresh tally; card counters are kept."""
        self._start()

    def snapshot(self) -> StudySessionState:
        return StudySessionState(
            state=self.state,
            current_index=self.index,
            total_cards=len(self.cards),
            current_card=self.current_card,
            show_answer=self.state is SessionState.REVEALED,
            accuracy=self.accuracy,
            progress=self.progress,
            session=self.session,
        )
