"""
Health check endpoints
Liveness and dependency checks
"""

from fastapi import APIRouter

from impostor.core.config import settings
from impostor.core.database import health_check as db_health_check
from impostor.core.redis_client import redis_health_check
from impostor.services.room_locks import room_locks

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint
    """
    return {
        "status": "healthy",
        "service": "impostor-rooms",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "locked_rooms": room_locks.active_rooms(),
    }


@router.get("/health/database")
async def database_health():
    """
    Database connection health check
    """
    return await db_health_check()


@router.get("/health/redis")
async def redis_health():
    """
    Redis connection health check
    """
    return await redis_health_check()
