"""
Room service errors
Exception hierarchy raised by the store and the lifecycle services
"""

from fastapi import status


class RoomError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RoomNotFoundError(RoomError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, room_id: str):
        super().__init__("Room not found")
        self.room_id = room_id


class PlayerNotFoundError(RoomError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, player_id: str):
        super().__init__("Player not found")
        self.player_id = player_id


class InvalidInputError(RoomError):
    """Malformed settings or payload; nothing was written"""
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidStateError(RoomError):
    """The room is not in a state that allows the transition"""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(RoomError):
    """A resource limit or uniqueness constraint was hit"""
    status_code = status.HTTP_400_BAD_REQUEST


class RoomFullError(ConflictError):

    def __init__(self, room_id: str, max_players: int):
        super().__init__("Room is full")
        self.room_id = room_id
        self.max_players = max_players


class TransientStoreError(RoomError):
    """Store or lock unavailable; safe for the caller to retry"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
