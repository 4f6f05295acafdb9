import logging
import re
from typing import List, Optional, assert_never

from study_buddy.clock import Clock, SystemClock
from study_buddy.schemas.flashcards import Difficulty, Flashcard, GenerationOptions

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
DEFAULT_MIN_SENTENCE_LENGTH = 20
EASY_PREVIEW_CHARS = 50
KEY_WORD_LENGTH = 6
BLANK = "_____"


def split_sentences(text: str, min_length: int = DEFAULT_MIN_SENTENCE_LENGTH) -> List[str]:
    """Trimmed sentences longer than ``min_length`` characters, in order."""
    sentences = []
    for fragment in SENTENCE_BOUNDARY.split(text):
        sentence = fragment.strip()
        if len(sentence) > min_length:
            sentences.append(sentence)
    return sentences


def _key_word(sentence: str) -> str:
    words = sentence.split(" ")
    for word in words:
        if len(word) > KEY_WORD_LENGTH:
            return word
    return words[len(words) // 2]


def build_question(sentence: str, difficulty: Optional[Difficulty]) -> str:
    if difficulty is None:
        return "What is described in this statement?"
    if difficulty is Difficulty.EASY:
        return f'What does this statement describe: "{sentence[:EASY_PREVIEW_CHARS]}..."?'
    if difficulty is Difficulty.MEDIUM:
        blanked = sentence.replace(_key_word(sentence), BLANK, 1)
        return f'Complete this statement: "{blanked}"'
    if difficulty is Difficulty.HARD:
        return f'Analyze and explain the significance of: "{sentence}"'
    assert_never(difficulty)


def estimate_card_count(text: str) -> int:
    """Rough number of cards a text will yield, shown before generating."""
    if not text:
        return 0
    return max(1, len(text) // 100)


class HeuristicCardGenerator:
    """Sentence-splitting generator: one card per qualifying sentence."""

    def __init__(
        self,
        clock: Clock | None = None,
        min_sentence_length: int = DEFAULT_MIN_SENTENCE_LENGTH,
    ):
        self.clock = clock or SystemClock()
        self.min_sentence_length = min_sentence_length

    async def generate(self, text: str, options: GenerationOptions) -> List[Flashcard]:
        if not text or not text.strip():
            return []

        sentences = split_sentences(text, self.min_sentence_length)
        selected = sentences[: options.card_count]
        created_at = self.clock.now()

        cards = [
            Flashcard(
                question=build_question(sentence, options.difficulty),
                answer=sentence,
                difficulty=options.difficulty,
                created_at=created_at,
                correct_count=0,
                total_attempts=0,
            )
            for sentence in selected
        ]
        logger.info(
            f"Generated {len(cards)} cards from {len(sentences)} qualifying sentences "
            f"(difficulty={options.difficulty.value}, requested={options.card_count})"
        )
        return cards
