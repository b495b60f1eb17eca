"""
Audit logging service
Records room events to the application log and, when available, to Redis
"""

import logging
from typing import Dict, Any, Optional
from datetime import datetime, timezone
from enum import Enum

from impostor.core.config import settings
from impostor.core.redis_client import redis_manager

logger = logging.getLogger(__name__)


class RoomEventType(str, Enum):
    """Audit event types"""
    ROOM_CREATE = "room_create"
    ROOM_JOIN = "room_join"
    ROOM_LEAVE = "room_leave"
    ROOM_CLOSE = "room_close"
    PLAYER_READY = "player_ready"
    THEME_UPDATE = "theme_update"
    GAME_START = "game_start"
    GAME_RESTART = "game_restart"
    GAME_RESET = "game_reset"
    CATALOG_MISS = "catalog_miss"


class AuditLogger:
    """Audit logger that never records secrets"""

    def __init__(self):
        self.audit_key_prefix = "audit:log:"
        self.audit_ttl = settings.AUDIT_LOG_TTL
        self.sensitive_fields = {"password", "secret", "token", "word"}

    def _sanitize_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Redact sensitive values, recursing into nested structures"""
        sanitized = {}

        for key, value in data.items():
            if any(sensitive in key.lower() for sensitive in self.sensitive_fields):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_data(value)
            elif isinstance(value, list):
                sanitized[key] = [
                    self._sanitize_data(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                sanitized[key] = value

        return sanitized

    async def log_event(
        self,
        event_type: RoomEventType,
        room_id: Optional[str] = None,
        player_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        success: bool = True
    ) -> Dict[str, Any]:
        """
        Record an audit event.

        The Redis copy is best effort: the event still reaches the
        application log when Redis is down or not configured.
        """
        audit_entry = {
            "event_type": event_type.value,
            "room_id": room_id,
            "player_id": player_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "success": success,
            "details": self._sanitize_data(details) if details else {},
        }

        log_message = f"Audit: {event_type.value} - Room: {room_id} - Player: {player_id} - Success: {success}"
        if success:
            logger.info(log_message)
        else:
            logger.warning(log_message)

        if redis_manager.is_initialized:
            audit_key = f"{self.audit_key_prefix}{event_type.value}:{datetime.now(timezone.utc).strftime('%Y%m%d')}"
            try:
                await redis_manager.push_to_list(audit_key, audit_entry, self.audit_ttl)
            except Exception as e:
                logger.error(f"Failed to save audit log to Redis: {e}")

        return audit_entry


# Global audit logger instance
audit_logger = AuditLogger()
