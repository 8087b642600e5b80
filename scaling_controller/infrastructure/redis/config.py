#scaling_controller\infrastructure\redis\config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Pub/sub transport configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONTROLLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    redis_url: str = "redis://localhost:6379/0"

    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0
