from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from study_buddy.schemas.flashcards import Flashcard


class SessionState(str, Enum):
    BROWSING = "browsing"
    REVEALED = "revealed"
    COMPLETE = "complete"
    EMPTY = "empty"


class StudySession(BaseModel):
    """Tally for one pass through a card list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    cards_studied: int = Field(0, ge=0)
    correct_answers: int = Field(0, ge=0)
    time_spent: int = Field(0, ge=0, description="Whole seconds, set on completion")
    date: datetime

    @model_validator(mode="after")
    def _check_tally(self) -> "StudySession":
        if self.correct_answers > self.cards_studied:
            raise ValueError("correctAnswers cannot exceed cardsStudied")
        return self


class StudySessionState(BaseModel):
    """Read-only view of the engine for rendering."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    state: SessionState
    current_index: int
    total_cards: int
    current_card: Optional[Flashcard] = None
    show_answer: bool
    accuracy: int
    progress: float
    session: StudySession
