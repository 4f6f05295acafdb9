from functools import lru_cache

from study_buddy.clock import make_clock
from study_buddy.config import get_settings
from study_buddy.services.generation.base import CardGenerator
from study_buddy.services.generation.heuristic import HeuristicCardGenerator
from study_buddy.services.generation.remote import RemoteCardGenerator


@lru_cache(maxsize=1)
def make_card_generator() -> CardGenerator:
    """
    Create the singleton card generator selected by GENERATOR_BACKEND.
    """
    settings = get_settings()
    if settings.generator_backend == "remote":
        return RemoteCardGenerator(endpoint=settings.remote_generator_url)
    return HeuristicCardGenerator(
        clock=make_clock(),
        min_sentence_length=settings.min_sentence_length,
    )
