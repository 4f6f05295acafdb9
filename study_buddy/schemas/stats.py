from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Date.prototype.toDateString() layout, e.g. "Mon Oct 19 2026"
LEGACY_DATE_FORMAT = "%a %b %d %Y"


class Stats(BaseModel):
    """Cross-session aggregate counters.

    Fields missing from a stored blob take these defaults; a missing
    last_study_date counts as a new day.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_cards: int = Field(0, ge=0)
    studied_today: int = Field(0, ge=0)
    correct_answers: int = Field(0, ge=0)
    streak_days: int = Field(1, ge=0)
    last_study_date: Optional[date] = None
    last_active_date: Optional[date] = None

    @field_validator("last_study_date", "last_active_date", mode="before")
    @classmethod
    def _accept_legacy_dates(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return datetime.strptime(value, LEGACY_DATE_FORMAT).date()
            except ValueError:
                return value
        return value
