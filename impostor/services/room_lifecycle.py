"""
Room lifecycle service
Lobby/game state machine: create, join, leave, ready, settings, start, restart, play again
"""

import logging
import random
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from impostor.core.config import settings
from impostor.core import random_source
from impostor.core.exceptions import (
    InvalidInputError, InvalidStateError, PlayerNotFoundError,
    RoomFullError, RoomNotFoundError,
)
from impostor.models.player import Player
from impostor.models.room import Room
from impostor.schemas.room import (
    CustomTheme, GamePhase, PlayerInfo, PlayerRole, PredefinedTheme, RoomCreate,
    RoomDetailResponse, RoomSeatResponse, RoomSettingsView, RoomSummary,
    ThemeType, theme_from_columns,
)
from impostor.services.audit_logger import audit_logger, RoomEventType
from impostor.services.role_assigner import RoleAssigner
from impostor.services.room_locks import RoomLockManager, room_locks
from impostor.services.room_store import RoomStore
from impostor.services.theme_catalog import ThemeCatalog, theme_catalog

logger = logging.getLogger(__name__)


def room_to_response(room: Room) -> RoomDetailResponse:
    """Convert a Room with its loaded roster to the API snapshot"""
    return RoomDetailResponse(
        id=room.id,
        name=room.name,
        game_phase=room.game_phase,
        players=[PlayerInfo.model_validate(p) for p in room.players],
        settings=RoomSettingsView(
            max_players=room.max_players,
            impostor_count=room.impostor_count,
            is_private=room.is_private,
            has_password=bool(room.password),
            theme=theme_from_columns(room.theme_type, room.theme_value),
        ),
        created_at=room.created_at,
        updated_at=room.updated_at,
    )


class RoomLifecycle:
    """Validates and executes room transitions"""

    def __init__(
        self,
        db: AsyncSession,
        rng: Optional[random.Random] = None,
        catalog: Optional[ThemeCatalog] = None,
        locks: Optional[RoomLockManager] = None,
        min_players: Optional[int] = None,
    ):
        self.store = RoomStore(db)
        self.rng = rng or random_source.rng
        self.assigner = RoleAssigner(catalog or theme_catalog, self.rng)
        self.locks = locks or room_locks
        self.min_players = settings.MIN_PLAYERS_TO_START if min_players is None else min_players

    async def _load_room(self, room_id: str) -> Room:
        room = await self.store.get_room_with_players(room_id)
        if not room:
            raise RoomNotFoundError(room_id)
        return room

    async def _snapshot(self, room_id: str) -> RoomDetailResponse:
        return room_to_response(await self._load_room(room_id))

    # Reads

    async def get_room(self, room_id: str) -> RoomDetailResponse:
        """Current snapshot of a room"""
        return await self._snapshot(room_id)

    async def list_public_rooms(self) -> List[RoomSummary]:
        return await self.store.list_public_rooms()

    # Lobby transitions

    async def create_room(self, room_data: RoomCreate) -> RoomSeatResponse:
        """
        Create a room in LOBBY with its host seated and ready.
        """
        room_id = random_source.new_room_id(self.rng)
        host_id = random_source.new_player_id(self.rng)
        room_settings = room_data.settings

        async with self.store.atomic():
            room = Room(
                id=room_id,
                name=room_data.name,
                game_phase=GamePhase.LOBBY,
                max_players=room_settings.max_players,
                impostor_count=room_settings.impostor_count,
                is_private=room_settings.is_private,
                password=room_settings.password,
                theme_type=ThemeType(room_settings.theme.type),
                theme_value=room_settings.theme.value,
                players=[Player(
                    id=host_id,
                    room_id=room_id,
                    name=room_data.player_name,
                    is_host=True,
                    is_ready=True,
                )],
            )
            await self.store.create_room(room)

        await audit_logger.log_event(
            event_type=RoomEventType.ROOM_CREATE,
            room_id=room_id,
            player_id=host_id,
            details={
                "room_name": room_data.name,
                "max_players": room_settings.max_players,
                "impostor_count": room_settings.impostor_count,
                "is_private": room_settings.is_private,
                "theme_type": room_settings.theme.type,
            },
        )

        return RoomSeatResponse(player_id=host_id, room=await self._snapshot(room_id))

    async def join_room(self, room_id: str, name: str) -> RoomSeatResponse:
        """Seat a new, not-ready player; only possible while in LOBBY"""
        player_id = random_source.new_player_id(self.rng)

        async with self.locks.hold(room_id):
            async with self.store.atomic():
                room = await self._load_room(room_id)

                if room.game_phase != GamePhase.LOBBY:
                    raise InvalidStateError("Game already in progress, wait for the lobby")

                if room.is_full:
                    raise RoomFullError(room_id, room.max_players)

                await self.store.add_player(room, Player(
                    id=player_id,
                    room_id=room_id,
                    name=name,
                    is_host=False,
                    is_ready=False,
                ))

            snapshot = await self._snapshot(room_id)

        await audit_logger.log_event(
            event_type=RoomEventType.ROOM_JOIN,
            room_id=room_id,
            player_id=player_id,
            details={"player_count": len(snapshot.players)},
        )
        return RoomSeatResponse(player_id=player_id, room=snapshot)

    async def leave_room(self, room_id: str, player_id: str) -> Optional[RoomDetailResponse]:
        """
        Remove a player. The host leaving closes the room for everyone.

        Returns the refreshed snapshot, or None when the room was closed.
        """
        async with self.locks.hold(room_id):
            async with self.store.atomic():
                room = await self._load_room_for_player(room_id, player_id)
                player = next(p for p in room.players if p.id == player_id)
                closing = bool(player.is_host)

                if closing:
                    await self.store.delete_room(room)
                else:
                    await self.store.remove_player(room, player)

            snapshot = None if closing else await self._snapshot(room_id)

        await audit_logger.log_event(
            event_type=RoomEventType.ROOM_CLOSE if closing else RoomEventType.ROOM_LEAVE,
            room_id=room_id,
            player_id=player_id,
        )
        return snapshot

    async def _load_room_for_player(self, room_id: str, player_id: str) -> Room:
        room = await self.store.get_room_with_players(room_id)
        if not room or not any(p.id == player_id for p in room.players):
            raise PlayerNotFoundError(player_id)
        return room

    async def set_ready(self, room_id: str, player_id: str, is_ready: bool) -> RoomDetailResponse:
        """Idempotent ready toggle; a player from another room is silently ignored"""
        async with self.locks.hold(room_id):
            async with self.store.atomic():
                player = await self.store.get_player(room_id, player_id)
                if player is not None:
                    player.is_ready = is_ready
                    await self.store.flush()

            snapshot = await self._snapshot(room_id)

        if player is not None:
            await audit_logger.log_event(
                event_type=RoomEventType.PLAYER_READY,
                room_id=room_id,
                player_id=player_id,
                details={"is_ready": is_ready},
            )
        return snapshot

    async def update_settings(self, room_id: str,
                              theme: Union[CustomTheme, PredefinedTheme, None]) -> RoomDetailResponse:
        """Replace the room theme; other settings are fixed at creation"""
        if not isinstance(theme, (CustomTheme, PredefinedTheme)):
            raise InvalidInputError("Invalid settings provided")

        async with self.locks.hold(room_id):
            async with self.store.atomic():
                room = await self._load_room(room_id)
                room.theme_type = ThemeType(theme.type)
                room.theme_value = theme.value
                await self.store.flush()

            snapshot = await self._snapshot(room_id)

        await audit_logger.log_event(
            event_type=RoomEventType.THEME_UPDATE,
            room_id=room_id,
            details={"theme_type": theme.type},
        )
        return snapshot

    # Game transitions

    async def start_game(self, room_id: str) -> RoomDetailResponse:
        """
        Deal roles and reveal them.

        Needs at least ``min_players`` seated and every non-host player
        ready. Both checks run before anything is written.
        """
        async with self.locks.hold(room_id):
            async with self.store.atomic():
                room = await self._load_room(room_id)

                if room.player_count < self.min_players:
                    raise InvalidStateError(
                        f"A minimum of {self.min_players} players is required to start."
                    )

                if not all(p.is_ready for p in room.players if not p.is_host):
                    raise InvalidStateError("Not all players are ready.")

                assignment = self._deal(room)
                room.game_phase = GamePhase.FINISHED
                await self.store.flush()

            snapshot = await self._snapshot(room_id)

        await self._record_game_event(RoomEventType.GAME_START, room_id, assignment)
        return snapshot

    async def restart_game(self, room_id: str) -> RoomDetailResponse:
        """Clear the last game and deal again without any quorum/readiness check"""
        async with self.locks.hold(room_id):
            async with self.store.atomic():
                room = await self._load_room(room_id)

                for player in room.players:
                    player.clear_game_state()

                assignment = self._deal(room)
                await self.store.flush()

            snapshot = await self._snapshot(room_id)

        await self._record_game_event(RoomEventType.GAME_RESTART, room_id, assignment)
        return snapshot

    async def play_again(self, room_id: str) -> RoomDetailResponse:
        """Back to LOBBY with roles, words and readiness reset"""
        async with self.locks.hold(room_id):
            async with self.store.atomic():
                room = await self._load_room(room_id)

                room.game_phase = GamePhase.LOBBY
                for player in room.players:
                    player.clear_game_state()
                await self.store.flush()

            snapshot = await self._snapshot(room_id)

        await audit_logger.log_event(event_type=RoomEventType.GAME_RESET, room_id=room_id)
        return snapshot

    def _deal(self, room: Room):
        """Run the assigner on the loaded roster and write the result onto it"""
        assignment = self.assigner.assign(
            room.players,
            room.impostor_count,
            theme_from_columns(room.theme_type, room.theme_value),
        )
        by_player = assignment.by_player()
        for player in room.players:
            dealt = by_player.get(player.id)
            if dealt is not None:
                player.role = dealt.role
                player.word = dealt.word
        return assignment

    async def _record_game_event(self, event_type: RoomEventType, room_id: str, assignment):
        if assignment.used_fallback:
            await audit_logger.log_event(
                event_type=RoomEventType.CATALOG_MISS,
                room_id=room_id,
                details={"default_theme": self.assigner.catalog.default_key},
            )
        await audit_logger.log_event(
            event_type=event_type,
            room_id=room_id,
            details={
                "player_count": len(assignment.assignments),
                "impostors": len(assignment.with_role(PlayerRole.IMPOSTOR)),
                "host_spectating": assignment.spectator_id is not None,
            },
        )