# Pydantic schemas
from .room import (
    GamePhase, PlayerRole, ThemeType,
    CustomTheme, PredefinedTheme, Theme, theme_from_columns,
    RoomSettings, RoomCreate, PlayerJoin, PlayerReadyUpdate, RoomSettingsUpdate,
    PlayerInfo, RoomSettingsView, RoomDetailResponse, RoomSummary,
    RoomSeatResponse, LeaveResponse, ThemeListResponse,
)
from .assignment import PlayerAssignment, RoleAssignment
from .common import ErrorResponse

__all__ = [
    "GamePhase", "PlayerRole", "ThemeType",
    "CustomTheme", "PredefinedTheme", "Theme", "theme_from_columns",
    "RoomSettings", "RoomCreate", "PlayerJoin", "PlayerReadyUpdate", "RoomSettingsUpdate",
    "PlayerInfo", "RoomSettingsView", "RoomDetailResponse", "RoomSummary",
    "RoomSeatResponse", "LeaveResponse", "ThemeListResponse",
    "PlayerAssignment", "RoleAssignment",
    "ErrorResponse",
]
