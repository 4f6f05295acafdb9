import logging
from datetime import datetime
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from study_buddy.db.interfaces import KeyValueStore
from study_buddy.exceptions import FlashcardNotFoundError, StorageError
from study_buddy.schemas.flashcards import Flashcard

logger = logging.getLogger(__name__)

FLASHCARDS_KEY = "ai-study-buddy-flashcards"

_cards_adapter = TypeAdapter(List[Flashcard])


class FlashcardsRepository:
    """Owns the flashcard collection and its persisted copy in the store."""

    def __init__(self, store: KeyValueStore, key: str = FLASHCARDS_KEY):
        self.store = store
        self.key = key
        self._cards: List[Flashcard] = []
        self._load_failed = False

    @property
    def cards(self) -> List[Flashcard]:
        """Snapshot of the collection in insertion order."""
        return list(self._cards)

    @property
    def count(self) -> int:
        return len(self._cards)

    def _parse(self, raw: Optional[str]) -> List[Flashcard]:
        if raw is None:
            return []
        try:
            return _cards_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed flashcard data under {self.key}: {e}")
            return []

    async def load(self) -> List[Flashcard]:
        """Read the persisted collection; absence or bad data yields an empty list.

        A failed read also yields an empty list, but the stored blob is left
        alone: later saves first re-read it and merge instead of overwriting.
        """
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.error(f"Error loading flashcards: {e}")
            self._cards = []
            self._load_failed = True
            return []

        self._cards = self._parse(raw)
        self._load_failed = False
        return self.cards

    async def _recover(self) -> bool:
        """Re-read after a failed load and put persisted cards ahead of in-memory ones."""
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.warning(f"Flashcards still unreadable, skipping write: {e}")
            return False

        persisted = self._parse(raw)
        known = {card.id for card in persisted}
        self._cards = persisted + [card for card in self._cards if card.id not in known]
        self._load_failed = False
        logger.info(f"Recovered {len(persisted)} persisted flashcards before saving")
        return True

    async def save(self, cards: Optional[Iterable[Flashcard]] = None) -> bool:
        """Write the full collection; failure is reported, not raised.

        Passing ``cards`` replaces the collection outright. Without it, the
        in-memory collection is written, merged with the stored one if the
        last load failed; if the store is still unreadable nothing is written.
        """
        if cards is not None:
            self._cards = list(cards)
            self._load_failed = False
        elif self._load_failed and not await self._recover():
            return False

        payload = _cards_adapter.dump_json(self._cards, by_alias=True).decode()
        try:
            await self.store.set(self.key, payload)
        except StorageError as e:
            logger.error(f"Error saving flashcards: {e}")
            return False
        return True
    async def append_and_persist(self, new_cards: Iterable[Flashcard]) -> bool:
        new_cards = list(new_cards)
        self._cards.extend(new_cards)
        logger.info(f"Appended {len(new_cards)} flashcards, collection size {self.count}")
        return await self.save()

    async def reset_all(self) -> bool:
        logger.info("Flashcard collection cleared")
        return await self.save([])

    def get(self, card_id: str) -> Flashcard:
        for card in self._cards:
            if card.id == card_id:
                return card
        raise FlashcardNotFoundError(f"Flashcard {card_id} not found")

    def record_attempt(
        self, card_id: str, correct: bool, reviewed_at: datetime
    ) -> Flashcard:
        """Count one study answer against a card. Not persisted until save()."""
        card = self.get(card_id)
        card.total_attempts += 1
        if correct:
            card.correct_count += 1
        card.last_reviewed = reviewed_at
        return card
