from fastapi import APIRouter

from study_buddy.dependencies import SettingsDep

router = APIRouter(tags=["health"])


@router.get("/ping")
async def ping(settings: SettingsDep) -> dict:
    return {"status": "ok", "version": settings.app_version}
