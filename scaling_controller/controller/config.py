#scaling_controller\controller\config.py
from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict

from scaling_controller.placement.selector import DEFAULT_USAGE_TOLERANCE

# Fixed cadence of the control loop.
POLL_INTERVAL_SECONDS = 10.0


@dataclass(frozen=True)
class ControllerConfig:
    poll_interval_seconds: float = POLL_INTERVAL_SECONDS

    usage_tolerance: float = DEFAULT_USAGE_TOLERANCE
    enforce_memory_floor: bool = True

    # Lower a node's free memory in the cycle snapshot after each pick
    reserve_memory_between_picks: bool = False


class ControllerSettings(BaseSettings):
    """Controller process configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONTROLLER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = "INFO"

    # Placement
    usage_tolerance: float = DEFAULT_USAGE_TOLERANCE
    enforce_memory_floor: bool = True
    reserve_memory_between_picks: bool = False

    # Status API
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    def to_config(self) -> ControllerConfig:
        return ControllerConfig(
            usage_tolerance=self.usage_tolerance,
            enforce_memory_floor=self.enforce_memory_floor,
            reserve_memory_between_picks=self.reserve_memory_between_picks,
        )
