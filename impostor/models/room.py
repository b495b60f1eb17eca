"""
Room model
Game room record with its settings and phase
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from impostor.core.database import Base
from impostor.schemas.room import GamePhase, ThemeType


class Room(Base):
    """Room model for game sessions"""

    __tablename__ = "rooms"

    id = Column(String(40), primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    game_phase = Column(Enum(GamePhase, values_callable=lambda obj: [e.value for e in obj]),
                        default=GamePhase.LOBBY, nullable=False)

    # Room configuration
    max_players = Column(Integer, nullable=False)
    impostor_count = Column(Integer, nullable=False)
    is_private = Column(Boolean, default=False, nullable=False, index=True)
    password = Column(String(50), nullable=True)

    # Word source
    theme_type = Column(Enum(ThemeType, values_callable=lambda obj: [e.value for e in obj]),
                        nullable=False)
    theme_value = Column(String(100), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    players = relationship(
        "Player",
        back_populates="room",
        cascade="all, delete-orphan",
        order_by="Player.joined_at",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Room(id={self.id}, name={self.name}, game_phase={self.game_phase})>"

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_full(self) -> bool:
        """Check if room is at capacity"""
        return self.player_count >= self.max_players

    @property
    def host(self):
        return next((p for p in self.players if p.is_host), None)
