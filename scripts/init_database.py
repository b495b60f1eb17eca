#!/usr/bin/env python3
"""
Database initialization script
Creates the room tables for the configured DATABASE_URL and checks Redis
"""

import asyncio
import sys
from pathlib import Path

# Make the project importable when run from a checkout
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from impostor.core.config import settings  # noqa: E402
from impostor.core.database import init_db, close_db  # noqa: E402
from impostor.core.redis_client import redis_manager  # noqa: E402


async def init_tables() -> bool:
    """Create tables from the SQLAlchemy models"""
    print("\nCreating tables...")
    try:
        await init_db()
        print("Tables created")
        return True
    except Exception as e:
        print(f"Failed to create tables: {e}")
        return False
    finally:
        await close_db()


async def check_redis() -> bool:
    """Check the Redis connection"""
    print("\nChecking Redis...")
    try:
        await redis_manager.initialize()
    except Exception as e:
        print(f"Redis connection failed: {e}")
        return False

    if not redis_manager.is_initialized:
        print(f"Redis not reachable at {settings.REDIS_URL}; local room locks will be used")
        return settings.ROOM_LOCK_BACKEND != "redis"

    print(f"Redis connection OK: {settings.REDIS_URL}")
    await redis_manager.close()
    return True


async def main():
    print("=" * 50)
    print("  Impostor Rooms - database initialization")
    print("=" * 50)
    print(f"\nDatabase: {settings.DATABASE_URL}")

    if not await init_tables():
        print("\nTable initialization failed, exiting")
        sys.exit(1)

    if not await check_redis():
        print("\nRedis is required by ROOM_LOCK_BACKEND=redis")
        sys.exit(1)

    print("\n" + "=" * 50)
    print("  Initialization complete")
    print("=" * 50)
    print("\nStart the service with:")
    print("  python run.py")
    print()


if __name__ == "__main__":
    asyncio.run(main())
