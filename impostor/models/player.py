"""
Player model
A seat in a room, with the secret role and word of the current game
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from impostor.core.database import Base
from impostor.schemas.room import PlayerRole


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(Base):
    """Player seated in a room"""

    __tablename__ = "players"

    id = Column(String(40), primary_key=True, index=True)
    room_id = Column(String(40), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False)

    is_host = Column(Boolean, default=False, nullable=False)
    is_ready = Column(Boolean, default=False, nullable=False)

    # Game state, empty outside a game
    role = Column(Enum(PlayerRole, values_callable=lambda obj: [e.value for e in obj]),
                  nullable=True)
    word = Column(String(100), nullable=True)

    # Microsecond precision keeps the roster in join order
    joined_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    room = relationship("Room", back_populates="players")

    def __repr__(self):
        return f"<Player(id={self.id}, room_id={self.room_id}, name={self.name}, role={self.role})>"

    def clear_game_state(self):
        """Drop role and word; only the host stays ready"""
        self.role = None
        self.word = None
        self.is_ready = bool(self.is_host)
