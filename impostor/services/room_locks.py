"""
Per-room locking
Serializes mutating operations on the same room id
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from redis.exceptions import RedisError

from impostor.core.config import settings
from impostor.core.exceptions import TransientStoreError
from impostor.core.redis_client import redis_manager

logger = logging.getLogger(__name__)


class RoomLockManager:
    """
    One asyncio.Lock per room id, created on demand and dropped once nobody
    holds or waits for it. With ``use_redis`` a Redis lock is taken as well
    so that several worker processes also exclude each other.
    """

    def __init__(self, timeout: Optional[float] = None, use_redis: Optional[bool] = None,
                 redis_ttl: Optional[int] = None):
        self.timeout = settings.ROOM_LOCK_TIMEOUT if timeout is None else timeout
        self.use_redis = (settings.ROOM_LOCK_BACKEND == "redis") if use_redis is None else use_redis
        self.redis_ttl = settings.ROOM_LOCK_TTL if redis_ttl is None else redis_ttl
        self._locks: Dict[str, asyncio.Lock] = {}
        self._users: Dict[str, int] = {}

    def active_rooms(self) -> int:
        """Number of room ids with a live lock"""
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, room_id: str):
        """Hold the room lock for the duration of the block"""
        lock = self._locks.setdefault(room_id, asyncio.Lock())
        self._users[room_id] = self._users.get(room_id, 0) + 1
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Timed out waiting for lock on room {room_id}")
                raise TransientStoreError("Room is busy, try again")
            try:
                if self.use_redis:
                    async with self._redis_lock(room_id):
                        yield
                else:
                    yield
            finally:
                lock.release()
        finally:
            self._users[room_id] -= 1
            if self._users[room_id] == 0:
                del self._users[room_id]
                del self._locks[room_id]

    @asynccontextmanager
    async def _redis_lock(self, room_id: str):
        try:
            client = await redis_manager.get_client()
            lock = client.lock(
                f"room:{room_id}:lock",
                timeout=self.redis_ttl,
                blocking_timeout=self.timeout,
            )
            acquired = await lock.acquire()
        except (RuntimeError, RedisError) as e:
            logger.error(f"Shared lock on room {room_id} unavailable: {e}")
            raise TransientStoreError(f"Lock service unavailable: {e}")

        if not acquired:
            logger.warning(f"Timed out waiting for shared lock on room {room_id}")
            raise TransientStoreError("Room is busy, try again")
        try:
            yield
        finally:
            try:
                await lock.release()
            except RedisError as e:
                # Expired or unreachable; the transaction has already committed or rolled back
                logger.warning(f"Shared lock on room {room_id} was lost: {e}")


# Global lock manager instance
room_locks = RoomLockManager()
