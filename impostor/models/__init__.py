# Database models
from .room import Room
from .player import Player

__all__ = [
    "Room",
    "Player",
]
