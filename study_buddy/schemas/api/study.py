from typing import Literal, Optional

from pydantic import BaseModel, Field

from study_buddy.schemas.stats import Stats
from study_buddy.schemas.study import StudySession, StudySessionState


class AnswerRequest(BaseModel):
    correct: bool


class NavigateRequest(BaseModel):
    direction: Literal[-1, 1] = Field(..., description="-1 for previous, 1 for next")


class AnswerResponse(BaseModel):
    """Session state after an answer; summary and stats are set on completion."""

    state: StudySessionState
    summary: Optional[StudySession] = None
    stats: Optional[Stats] = None
