"""
Theme API endpoints
Lists the predefined word lists a room can use
"""

from fastapi import APIRouter

from impostor.schemas.room import ThemeListResponse
from impostor.services.theme_catalog import theme_catalog

router = APIRouter()


@router.get("", response_model=ThemeListResponse)
async def list_themes():
    """
    Predefined theme names and the fallback theme
    """
    return ThemeListResponse(themes=theme_catalog.names(), default=theme_catalog.default_key)
