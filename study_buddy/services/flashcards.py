import logging
from typing import List

from study_buddy.exceptions import GenerationError
from study_buddy.repositories.flashcards import FlashcardsRepository
from study_buddy.schemas.flashcards import Flashcard, GenerationOptions
from study_buddy.services.generation.base import CardGenerator
from study_buddy.services.stats import StatsTracker

logger = logging.getLogger(__name__)


class FlashcardService:
    """Orchestrates flashcard generation and the collection lifecycle."""

    def __init__(
        self,
        repo: FlashcardsRepository,
        generator: CardGenerator,
        stats: StatsTracker,
    ):
        self.repo = repo
        self.generator = generator
        self.stats = stats

    def list_cards(self) -> List[Flashcard]:
        return self.repo.cards

    async def generate(self, text: str, options: GenerationOptions) -> List[Flashcard]:
        """Generate cards from text, append them to the collection and persist.

        Nothing is committed when the generator fails.
        """
        try:
            new_cards = await self.generator.generate(text, options)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Flashcard generation failed: {e}")
            raise GenerationError(f"Failed to generate flashcards: {e}") from e

        if new_cards:
            saved = await self.repo.append_and_persist(new_cards)
            if not saved:
                logger.warning("Generated flashcards kept in memory only; persisting failed")
        await self.stats.refresh()
        return new_cards

    async def reset_all(self) -> None:
        await self.repo.reset_all()
        await self.stats.refresh()
