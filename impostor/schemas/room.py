"""
Room Pydantic schemas
Request validation and response serialization for rooms and players
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List, Union, Literal, Annotated
from datetime import datetime
from enum import Enum

from impostor.core.config import settings


class GamePhase(str, Enum):
    """Room phase enumeration"""
    LOBBY = "LOBBY"
    IN_GAME = "IN_GAME"  # Kept for stored data; start goes straight to FINISHED
    FINISHED = "FINISHED"


class PlayerRole(str, Enum):
    """Secret role enumeration"""
    CREWMATE = "CREWMATE"
    IMPOSTOR = "IMPOSTOR"
    SPECTATOR = "SPECTATOR"


class ThemeType(str, Enum):
    """Word source enumeration"""
    CUSTOM = "CUSTOM"
    PREDEFINED = "PREDEFINED"


class CustomTheme(BaseModel):
    """Host-authored secret word"""
    type: Literal["CUSTOM"] = "CUSTOM"
    value: str = Field(..., max_length=100, description="The secret word itself")

    @property
    def is_blank(self) -> bool:
        return not self.value.strip()


class PredefinedTheme(BaseModel):
    """Named word list from the theme catalog"""
    type: Literal["PREDEFINED"] = "PREDEFINED"
    value: str = Field(..., min_length=1, max_length=100, description="Catalog theme name")


Theme = Annotated[Union[CustomTheme, PredefinedTheme], Field(discriminator="type")]


def theme_from_columns(theme_type, theme_value: str) -> Union[CustomTheme, PredefinedTheme]:
    """Rebuild the theme union from its stored type/value pair"""
    if ThemeType(theme_type) == ThemeType.CUSTOM:
        return CustomTheme(value=theme_value)
    return PredefinedTheme(value=theme_value)


class RoomSettings(BaseModel):
    """Room settings fixed at creation"""
    max_players: int = Field(default=10, ge=1, le=settings.MAX_PLAYERS_PER_ROOM, description="Room capacity")
    impostor_count: int = Field(default=1, ge=0, le=settings.MAX_PLAYERS_PER_ROOM, description="Impostors per game")
    is_private: bool = Field(default=False, description="Hide from the public room list")
    password: Optional[str] = Field(None, max_length=50, description="Only meaningful for private rooms")
    theme: Theme


class RoomCreate(BaseModel):
    """Create room request"""
    name: str = Field(..., min_length=1, max_length=100, description="Room name")
    player_name: str = Field(..., min_length=1, max_length=50, description="Host display name")
    settings: RoomSettings

    @validator('name', 'player_name')
    def strip_names(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name must not be blank')
        return v


class PlayerJoin(BaseModel):
    """Join room request"""
    name: str = Field(..., min_length=1, max_length=50, description="Display name")

    @validator('name')
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Name must not be blank')
        return v


class PlayerReadyUpdate(BaseModel):
    """Ready toggle request"""
    is_ready: bool


class RoomSettingsUpdate(BaseModel):
    """Settings update request; only the theme is mutable"""
    theme: Optional[Theme] = None


class PlayerInfo(BaseModel):
    """Player as seen in a room snapshot"""
    id: str
    room_id: str
    name: str
    is_host: bool = False
    is_ready: bool = False
    role: Optional[PlayerRole] = None
    word: Optional[str] = None

    class Config:
        from_attributes = True


class RoomSettingsView(BaseModel):
    """Settings as returned to clients; the password itself is never echoed"""
    max_players: int
    impostor_count: int
    is_private: bool
    has_password: bool = False
    theme: Theme


class RoomDetailResponse(BaseModel):
    """Full room snapshot"""
    id: str
    name: str
    game_phase: GamePhase
    players: List[PlayerInfo] = Field(default_factory=list)
    settings: RoomSettingsView
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RoomSummary(BaseModel):
    """Public room list entry"""
    id: str
    name: str
    max_players: int
    is_private: bool
    game_phase: GamePhase
    player_count: int = 0


class RoomSeatResponse(BaseModel):
    """Response to create/join: the caller's player id and the snapshot"""
    player_id: str
    room: RoomDetailResponse


class LeaveResponse(BaseModel):
    """Response to a player leaving"""
    message: str
    room_closed: bool = False
    room: Optional[RoomDetailResponse] = None


class ThemeListResponse(BaseModel):
    """Available predefined themes"""
    themes: List[str]
    default: str
