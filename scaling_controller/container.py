#scaling_controller\container.py

"""Dependency wiring - builds one controller and its collaborators."""

from typing import Optional

from scaling_controller.controller.config import ControllerSettings
from scaling_controller.controller.controller import Controller
from scaling_controller.core.repository import NetworkRepository
from scaling_controller.dispatch.dispatcher import DeployDispatcher
from scaling_controller.dispatch.publisher import Publisher, RedisPublisher
from scaling_controller.infrastructure.postgres.network_repository import PostgresNetworkRepository
from scaling_controller.infrastructure.redis.config import RedisSettings


def build_repository() -> NetworkRepository:
    return PostgresNetworkRepository()


def build_publisher(settings: Optional[RedisSettings] = None) -> Publisher:
    return RedisPublisher.from_settings(settings)


def build_controller(
    settings: Optional[ControllerSettings] = None,
    *,
    repository: Optional[NetworkRepository] = None,
    publisher: Optional[Publisher] = None,
) -> Controller:
    """
    Build a controller from settings.

    Collaborators not passed in are created from environment configuration.
    """
    settings = settings or ControllerSettings()

    return Controller(
        repository=repository or build_repository(),
        dispatcher=DeployDispatcher(publisher or build_publisher()),
        config=settings.to_config(),
    )
