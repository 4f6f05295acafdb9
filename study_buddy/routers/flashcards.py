import logging

from fastapi import APIRouter, HTTPException, Query, status

from study_buddy.dependencies import FlashcardsServiceDep, SettingsDep, StudyServiceDep
from study_buddy.exceptions import GenerationError
from study_buddy.schemas.api.flashcards import (
    EstimateResponse,
    FlashcardDTO,
    FlashcardsResponse,
    GenerateRequest,
    GenerateResponse,
)
from study_buddy.services.generation import estimate_card_count

router = APIRouter(prefix="/flashcards", tags=["flashcards"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=FlashcardsResponse)
async def list_flashcards(service: FlashcardsServiceDep):
    """Return the whole flashcard collection in insertion order."""
    cards = service.list_cards()
    return FlashcardsResponse(
        cards=[FlashcardDTO.from_card(card) for card in cards],
        total=len(cards),
    )


@router.post("/generate", response_model=GenerateResponse)
async def generate_flashcards(
    request: GenerateRequest,
    service: FlashcardsServiceDep,
    settings: SettingsDep,
):
    """Generate flashcards from text and append them to the collection."""
    if request.options.card_count > settings.max_card_count:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"cardCount may not exceed {settings.max_card_count}",
        )

    try:
        new_cards = await service.generate(request.text, request.options)
    except GenerationError as e:
        logger.error(f"Failed to generate flashcards: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate flashcards. Please try again.",
        )

    return GenerateResponse(
        generated=[FlashcardDTO.from_card(card) for card in new_cards],
        total=len(service.list_cards()),
    )


@router.get("/estimate", response_model=EstimateResponse)
async def estimate(text: str = Query("", description="Study material to be submitted")):
    """Rough card count for a text before generating."""
    return EstimateResponse(characters=len(text), estimated_cards=estimate_card_count(text))


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def reset_all(service: FlashcardsServiceDep, study: StudyServiceDep):
    """Delete every flashcard and discard the active study session."""
    study.end()
    await service.reset_all()
