from study_buddy.services.generation.base import CardGenerator
from study_buddy.services.generation.heuristic import (
    HeuristicCardGenerator,
    build_question,
    estimate_card_count,
    split_sentences,
)
from study_buddy.services.generation.remote import RemoteCardGenerator

__all__ = [
    "CardGenerator",
    "HeuristicCardGenerator",
    "RemoteCardGenerator",
    "build_question",
    "estimate_card_count",
    "split_sentences",
]
