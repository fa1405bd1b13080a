"""
Meta/Configuration API endpoints
"""

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings

router = APIRouter(prefix="/meta", tags=["meta"])


class PublicConfig(BaseModel):
    """Public configuration exposed to frontend"""

    login_path: str
    login_prompt_message: str
    guard_session_cookie: str
    default_blur_nsfw: bool


@router.get("/config", response_model=PublicConfig)
async def get_public_config() -> PublicConfig:
    """
    Get public configuration settings.
    """
    return PublicConfig(
        login_path=settings.LOGIN_PATH,
        login_prompt_message=settings.LOGIN_PROMPT_MESSAGE,
        guard_session_cookie=settings.GUARD_SESSION_COOKIE,
        default_blur_nsfw=settings.DEFAULT_BLUR_NSFW,
    )
