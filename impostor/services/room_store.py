"""
Room store
Persistence of rooms and players over an async SQLAlchemy session
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Awaitable, List, Optional, TypeVar

from sqlalchemy import select, func
from sqlalchemy.exc import DisconnectionError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from impostor.core.config import settings
from impostor.core.exceptions import ConflictError, TransientStoreError
from impostor.models.room import Room
from impostor.models.player import Player
from impostor.schemas.room import RoomSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RoomStore:
    """CRUD over rooms and players; every call is bounded by ``timeout``"""

    def __init__(self, db: AsyncSession, timeout: Optional[float] = None):
        self.db = db
        self.timeout = settings.STORE_TIMEOUT if timeout is None else timeout

    async def _guard(self, operation: Awaitable[T]) -> T:
        """Run a store call under the timeout and map driver errors"""
        try:
            return await asyncio.wait_for(operation, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Store operation timed out after {self.timeout}s")
            raise TransientStoreError("Store timed out")
        except (DisconnectionError, OperationalError) as e:
            logger.error(f"Store unavailable: {e}")
            raise TransientStoreError("Store unavailable")
        except IntegrityError as e:
            logger.error(f"Store constraint violated: {e}")
            raise ConflictError("Duplicate identifier")

    @asynccontextmanager
    async def atomic(self):
        """Commit everything done in the block at once, or nothing"""
        try:
            yield self
            await self._guard(self.db.commit())
        except BaseException:
            await self.db.rollback()
            raise

    async def get_room_with_players(self, room_id: str) -> Optional[Room]:
        """Room and its roster as one unit, freshly read"""
        stmt = (
            select(Room)
            .options(selectinload(Room.players))
            .where(Room.id == room_id)
            .execution_options(populate_existing=True)
        )
        result = await self._guard(self.db.execute(stmt))
        return result.scalar_one_or_none()

    async def get_player(self, room_id: str, player_id: str) -> Optional[Player]:
        stmt = select(Player).where(Player.id == player_id, Player.room_id == room_id)
        result = await self._guard(self.db.execute(stmt))
        return result.scalar_one_or_none()

    async def list_public_rooms(self) -> List[RoomSummary]:
        """Non-private rooms with their player counts, newest first"""
        counts = (
            select(Player.room_id, func.count(Player.id).label("player_count"))
            .group_by(Player.room_id)
            .subquery()
        )
        stmt = (
            select(Room.id, Room.name, Room.max_players, Room.is_private, Room.game_phase,
                   func.coalesce(counts.c.player_count, 0))
            .outerjoin(counts, counts.c.room_id == Room.id)
            .where(Room.is_private.is_(False))
            .order_by(Room.created_at.desc(), Room.id)
        )
        result = await self._guard(self.db.execute(stmt))
        return [
            RoomSummary(
                id=row[0],
                name=row[1],
                max_players=row[2],
                is_private=row[3],
                game_phase=row[4],
                player_count=row[5],
            )
            for row in result.all()
        ]

    async def create_room(self, room: Room) -> Room:
        self.db.add(room)
        await self._guard(self.db.flush())
        return room

    async def add_player(self, room: Room, player: Player) -> Player:
        room.players.append(player)
        await self._guard(self.db.flush())
        return player

    async def remove_player(self, room: Room, player: Player):
        # delete-orphan cascade turns the removal into a DELETE
        room.players.remove(player)
        await self._guard(self.db.flush())

    async def delete_room(self, room: Room):
        """Delete the room; its players go with it"""
        await self._guard(self.db.delete(room))
        await self._guard(self.db.flush())

    async def flush(self):
        await self._guard(self.db.flush())
