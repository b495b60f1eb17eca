"""
Role assignment schemas
Result of one role/word assignment pass
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict

from impostor.schemas.room import PlayerRole


class PlayerAssignment(BaseModel):
    """Role and word handed to a single player"""
    player_id: str
    role: PlayerRole
    word: Optional[str] = None


class RoleAssignment(BaseModel):
    """Outcome of an assignment pass over a whole room"""
    word: str = Field(..., description="The secret word of this game")
    assignments: List[PlayerAssignment] = Field(default_factory=list)
    spectator_id: Optional[str] = Field(None, description="Host excluded by the custom-word rule")
    used_fallback: bool = Field(default=False, description="Unknown theme, default list used")

    def by_player(self) -> Dict[str, PlayerAssignment]:
        return {a.player_id: a for a in self.assignments}

    def with_role(self, role: PlayerRole) -> List[PlayerAssignment]:
        return [a for a in self.assignments if a.role == role]
