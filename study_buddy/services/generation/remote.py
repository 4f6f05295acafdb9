import logging
from typing import List

from study_buddy.schemas.flashcards import Flashcard, GenerationOptions

logger = logging.getLogger(__name__)


class RemoteCardGenerator:
    """Placeholder for a model-backed generator.

    Holds the ``CardGenerator`` signature so a hosted backend can be wired in
    through ``GENERATOR_BACKEND=remote`` and ``REMOTE_GENERATOR_URL`` without
    touching the services. It currently produces no cards.
    """

    def __init__(self, endpoint: str | None = None):
        self.endpoint = endpoint

    async def generate(self, text: str, options: GenerationOptions) -> List[Flashcard]:
        logger.warning(
            f"Remote generation backend is not configured (endpoint={self.endpoint}); "
            "no flashcards generated"
        )
        return []
