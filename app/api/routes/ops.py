from __future__ import annotations
from fastapi import APIRouter
from app.core.config import settings

router = APIRouter()

VERSION = "0.1.0"


@router.get("/config", summary="Non-sensitive configuration")
async def config_info():
    return {
        "app_env": settings.APP_ENV,
        "business_name": settings.BUSINESS_NAME,
        "business_timezone": settings.BUSINESS_TIMEZONE,
        "default_hours": {"open": settings.DEFAULT_OPEN_TIME, "close": settings.DEFAULT_CLOSE_TIME},
        "version": VERSION,
    }
