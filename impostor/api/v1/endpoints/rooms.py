"""
Room API endpoints
HTTP surface of the room lifecycle
"""

import logging
from typing import List, NoReturn
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from impostor.core.database import get_db
from impostor.core.exceptions import RoomError
from impostor.services.room_lifecycle import RoomLifecycle
from impostor.schemas.room import (
    RoomCreate, PlayerJoin, PlayerReadyUpdate, RoomSettingsUpdate,
    RoomDetailResponse, RoomSummary, RoomSeatResponse, LeaveResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_room_lifecycle(db: AsyncSession = Depends(get_db)) -> RoomLifecycle:
    """Room lifecycle dependency"""
    return RoomLifecycle(db)


def _raise_http(e: Exception, action: str) -> NoReturn:
    """Translate a service failure into an HTTP error"""
    if isinstance(e, RoomError):
        raise HTTPException(status_code=e.status_code, detail=e.message)
    logger.error(f"{action} failed: {e}", exc_info=True)
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{action} failed: {str(e)}"
    )


@router.get("", response_model=List[RoomSummary])
async def list_rooms(lifecycle: RoomLifecycle = Depends(get_room_lifecycle)):
    """
    List public rooms with their player counts
    """
    try:
        return await lifecycle.list_public_rooms()
    except Exception as e:
        _raise_http(e, "Listing rooms")


@router.post("", response_model=RoomSeatResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    room_data: RoomCreate,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Create a new room

    - **name**: room name
    - **player_name**: host display name
    - **settings**: capacity, impostor count, privacy, theme
    """
    try:
        return await lifecycle.create_room(room_data)
    except Exception as e:
        _raise_http(e, "Creating room")


@router.get("/{room_id}", response_model=RoomDetailResponse)
async def get_room(
    room_id: str,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Room snapshot with settings and every player
    """
    try:
        return await lifecycle.get_room(room_id)
    except Exception as e:
        _raise_http(e, "Fetching room")


@router.post("/{room_id}/players", response_model=RoomSeatResponse, status_code=status.HTTP_201_CREATED)
async def join_room(
    room_id: str,
    join_data: PlayerJoin,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Join a room in the lobby

    - **name**: display name
    """
    try:
        return await lifecycle.join_room(room_id, join_data.name)
    except Exception as e:
        _raise_http(e, "Joining room")


@router.delete("/{room_id}/players/{player_id}", response_model=LeaveResponse)
async def leave_room(
    room_id: str,
    player_id: str,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Leave a room; the host leaving closes it
    """
    try:
        room = await lifecycle.leave_room(room_id, player_id)
    except Exception as e:
        _raise_http(e, "Leaving room")

    if room is None:
        return LeaveResponse(message="Room closed successfully.", room_closed=True)
    return LeaveResponse(message="Player removed successfully.", room=room)


@router.patch("/{room_id}/players/{player_id}", response_model=RoomDetailResponse)
async def update_player(
    room_id: str,
    player_id: str,
    update: PlayerReadyUpdate,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Toggle a player's ready flag

    - **is_ready**: new ready state
    """
    try:
        return await lifecycle.set_ready(room_id, player_id, update.is_ready)
    except Exception as e:
        _raise_http(e, "Updating player")


@router.patch("/{room_id}/settings", response_model=RoomDetailResponse)
async def update_settings(
    room_id: str,
    update: RoomSettingsUpdate,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Change the room theme

    - **theme**: `{"type": "CUSTOM", "value": "<word>"}` or `{"type": "PREDEFINED", "value": "<theme name>"}`
    """
    try:
        return await lifecycle.update_settings(room_id, update.theme)
    except Exception as e:
        _raise_http(e, "Updating settings")


@router.post("/{room_id}/start", response_model=RoomDetailResponse)
async def start_game(
    room_id: str,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Deal roles and words; needs 3 players and every guest ready
    """
    try:
        return await lifecycle.start_game(room_id)
    except Exception as e:
        _raise_http(e, "Starting game")


@router.post("/{room_id}/restart", response_model=RoomDetailResponse)
async def restart_game(
    room_id: str,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Deal a fresh game with the same settings
    """
    try:
        return await lifecycle.restart_game(room_id)
    except Exception as e:
        _raise_http(e, "Restarting game")


@router.post("/{room_id}/play-again", response_model=RoomDetailResponse)
async def play_again(
    room_id: str,
    lifecycle: RoomLifecycle = Depends(get_room_lifecycle)
):
    """
    Send the room back to the lobby
    """
    try:
        return await lifecycle.play_again(room_id)
    except Exception as e:
        _raise_http(e, "Resetting room")
