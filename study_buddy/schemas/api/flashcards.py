from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from study_buddy.schemas.flashcards import Difficulty, Flashcard, GenerationOptions


class FlashcardDTO(BaseModel):
    """Serialized flashcard returned by the API/UI."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Opaque card identifier")
    question: str
    answer: str
    category: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    created_at: datetime
    last_reviewed: Optional[datetime] = None
    correct_count: int
    total_attempts: int
    accuracy: int = Field(..., description="Rounded percentage of correct attempts")

    @classmethod
    def from_card(cls, card: Flashcard) -> "FlashcardDTO":
        return cls(
            id=card.id,
            question=card.question,
            answer=card.answer,
            category=card.category,
            difficulty=card.difficulty,
            created_at=card.created_at,
            last_reviewed=card.last_reviewed,
            correct_count=card.correct_count,
            total_attempts=card.total_attempts,
            accuracy=card.accuracy,
        )


class FlashcardsResponse(BaseModel):
    """Response envelope for the flashcard collection."""

    cards: List[FlashcardDTO]
    total: int


class GenerateRequest(BaseModel):
    """Text to turn into flashcards plus generation options."""

    text: str = Field(..., description="Study material; sentences become cards")
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class GenerateResponse(BaseModel):
    generated: List[FlashcardDTO]
    total: int = Field(..., description="Collection size after appending")


class EstimateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    characters: int
    estimated_cards: int
