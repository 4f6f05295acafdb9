from fastapi import APIRouter

from study_buddy.dependencies import StatsTrackerDep
from study_buddy.schemas.stats import Stats

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/", response_model=Stats)
async def get_stats(tracker: StatsTrackerDep):
    """Refresh day rollover and card totals, then return aggregate stats."""
    return await tracker.refresh()
