import logging

from fastapi import APIRouter, HTTPException, status

from study_buddy.dependencies import StudyServiceDep
from study_buddy.exceptions import (
    FlashcardNotFoundError,
    InvalidSessionStateError,
    NoActiveSessionError,
)
from study_buddy.schemas.api.study import AnswerRequest, AnswerResponse, NavigateRequest
from study_buddy.schemas.study import StudySessionState

router = APIRouter(prefix="/study", tags=["study"])
logger = logging.getLogger(__name__)


def _to_http(e: Exception) -> HTTPException:
    if isinstance(e, NoActiveSessionError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, FlashcardNotFoundError):
        return HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/start", response_model=StudySessionState)
async def start_session(study: StudyServiceDep):
    """Start a new pass over the current collection."""
    return study.start()


@router.get("/", response_model=StudySessionState)
async def get_session(study: StudyServiceDep):
    try:
        return study.state()
    except NoActiveSessionError as e:
        raise _to_http(e)


@router.post("/flip", response_model=StudySessionState)
async def flip_card(study: StudyServiceDep):
    try:
        return study.flip()
    except (NoActiveSessionError, InvalidSessionStateError) as e:
        raise _to_http(e)


@router.post("/reveal", response_model=StudySessionState)
async def reveal_answer(study: StudyServiceDep):
    try:
        return study.reveal()
    except (NoActiveSessionError, InvalidSessionStateError) as e:
        raise _to_http(e)


@router.post("/answer", response_model=AnswerResponse)
async def answer(request: AnswerRequest, study: StudyServiceDep):
    """Record whether the revealed card was answered correctly."""
    try:
        state, summary, stats = await study.answer(request.correct)
    except (NoActiveSessionError, InvalidSessionStateError, FlashcardNotFoundError) as e:
        logger.warning(f"Rejected answer: {e}")
        raise _to_http(e)
    return AnswerResponse(state=state, summary=summary, stats=stats)


@router.post("/navigate", response_model=StudySessionState)
async def navigate(request: NavigateRequest, study: StudyServiceDep):
    try:
        return study.navigate(request.direction)
    except (NoActiveSessionError, InvalidSessionStateError) as e:
        raise _to_http(e)


@router.post("/reset", response_model=StudySessionState)
async def reset_session(study: StudyServiceDep):
    """Restart the deck from the first card with a fresh tally."""
    try:
        return study.reset()
    except NoActiveSessionError as e:
        raise _to_http(e)
