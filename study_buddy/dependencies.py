from typing import Annotated

from fastapi import Depends, Request

from study_buddy.config import Settings, get_settings
from study_buddy.services.flashcards import FlashcardService
from study_buddy.services.stats import StatsTracker
from study_buddy.services.study import StudyService


def get_flashcard_service(request: Request) -> FlashcardService:
    return request.app.state.flashcard_service


def get_study_service(request: Request) -> StudyService:
    return request.app.state.study_service


def get_stats_tracker(request: Request) -> StatsTracker:
    return request.app.state.stats_tracker


SettingsDep = Annotated[Settings, Depends(get_settings)]
FlashcardsServiceDep = Annotated[FlashcardService, Depends(get_flashcard_service)]
StudyServiceDep = Annotated[StudyService, Depends(get_study_service)]
StatsTrackerDep = Annotated[StatsTracker, Depends(get_stats_tracker)]
