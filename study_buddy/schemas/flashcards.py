from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from study_buddy.utils import percent


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def new_card_id() -> str:
    return uuid4().hex


def to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def iso_millis(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Flashcard(BaseModel):
    """Question/answer pair with study-performance counters.

    Persisted with camelCase keys (createdAt, correctCount, ...).
    Timestamps are kept at millisecond precision, matching what is persisted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, validate_assignment=True
    )

    id: str = Field(default_factory=new_card_id, frozen=True)
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = None
    difficulty: Optional[Difficulty] = Field(None, frozen=True)
    created_at: datetime = Field(..., frozen=True)
    last_reviewed: Optional[datetime] = None
    correct_count: int = Field(0, ge=0)
    total_attempts: int = Field(0, ge=0)

    @field_validator("created_at", "last_reviewed")
    @classmethod
    def _truncate_to_millis(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_millis(value) if value is not None else None

    @field_serializer("created_at", "last_reviewed")
    def _serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return iso_millis(value) if value is not None else None

    @model_validator(mode="after")
    def _check_counters(self) -> "Flashcard":
        if self.correct_count > self.total_attempts:
            raise ValueError("correctCount cannot exceed totalAttempts")
        return self

    @property
    def accuracy(self) -> int:
        return percent(self.correct_count, self.total_attempts)


class GenerationOptions(BaseModel):
    """Parameters controlling how many cards are produced and how hard they are."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    card_count: int = Field(10, ge=1, description="Upper bound on cards produced")
    difficulty: Difficulty = Difficulty.MEDIUM
    focus_areas: List[str] = Field(
        default_factory=list,
        description="Accepted for forward compatibility; not applied by the heuristic",
    )
