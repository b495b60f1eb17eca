"""
Application configuration settings
Environment-driven settings for the room service
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # Database configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./impostor.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 3
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # Recycle connections every 30 minutes
    STORE_TIMEOUT: float = 5.0  # Upper bound for a single store call (seconds)

    # Redis configuration
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_MAX_CONNECTIONS: int = 5
    REDIS_SOCKET_TIMEOUT: int = 5
    REDIS_SOCKET_CONNECT_TIMEOUT: int = 5

    # Room locking: "local" keeps locks in-process, "redis" adds a shared lock
    ROOM_LOCK_BACKEND: str = "local"
    ROOM_LOCK_TIMEOUT: float = 10.0  # Max wait for a room lock (seconds)
    ROOM_LOCK_TTL: int = 30  # Redis lock expiry (seconds)

    # Game configuration
    MIN_PLAYERS_TO_START: int = 3
    MAX_PLAYERS_PER_ROOM: int = 20
    DEFAULT_THEME: str = "Football Players"
    RANDOM_SEED: Optional[int] = None  # None seeds from OS entropy

    # HTTP
    CORS_ORIGINS: str = "*"

    @property
    def cors_origins_list(self) -> list:
        """Allowed CORS origins"""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    # Audit
    AUDIT_LOG_TTL: int = 2592000  # 30 days

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
