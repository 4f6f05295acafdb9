from typing import List, Protocol

from study_buddy.schemas.flashcards import Flashcard, GenerationOptions


class CardGenerator(Protocol):
    """Turns raw study text into new flashcards.

    Implementations must return fully populated cards with zeroed counters and
    fresh ids, and must not touch the repository.
    """

    async def generate(self, text: str, options: GenerationOptions) -> List[Flashcard]: ...
