from fastapi import APIRouter, Depends

from azfinance.core.config import Settings, get_settings


router = APIRouter(tags=["health"])


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    return {"status": "ok", "service": settings.app_name, "version": settings.app_version}
