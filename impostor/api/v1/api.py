"""
API v1 router
Mounts the v1 endpoint modules
"""

from fastapi import APIRouter

from impostor.api.v1.endpoints import health, rooms, themes

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
api_router.include_router(themes.router, prefix="/themes", tags=["themes"])
