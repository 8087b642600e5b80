# scaling_controller/dispatch/publisher.py
"""Publishers delivering deploy messages to node agents."""

import logging
from abc import ABC, abstractmethod
from threading import Lock
from typing import List, Optional, Tuple

import redis
from redis.exceptions import RedisError

from scaling_controller.core.errors import PublishError
from scaling_controller.infrastructure.redis.config import RedisSettings

logger = logging.getLogger(__name__)


class Publisher(ABC):
    """Fire-and-forget pub/sub transport."""

    @abstractmethod
    def publish(self, channel: str, payload: bytes) -> int:
        """
        Publish one message.
        Returns the number of subscribers that received it.
        Raises PublishError on transport failure.
        """
        pass

    def ping(self) -> None:
        """Verify the transport is reachable."""
        pass


class RedisPublisher(Publisher):
    """Publishes with Redis PUBLISH."""

    def __init__(self, client: "redis.Redis"):
        self._client = client

    @classmethod
    def from_settings(cls, settings: Optional[RedisSettings] = None) -> "RedisPublisher":
        settings = settings or RedisSettings()
        client = redis.Redis.from_url(
            settings.redis_url,
            socket_timeout=settings.socket_timeout,
            socket_connect_timeout=settings.socket_connect_timeout,
        )
        return cls(client)

    def publish(self, channel: str, payload: bytes) -> int:
        try:
            return self._client.publish(channel, payload)
        except RedisError as e:
            raise PublishError(f"Failed to publish on '{channel}': {e}") from e

    def ping(self) -> None:
        try:
            self._client.ping()
        except RedisError as e:
            raise PublishError(f"Redis unreachable: {e}") from e


class InMemoryPublisher(Publisher):
    """Records published messages (tests, dry runs)."""

    def __init__(self):
        self.messages: List[Tuple[str, bytes]] = []
        self._lock = Lock()

    def publish(self, channel: str, payload: bytes) -> int:
        with self._lock:
            self.messages.append((channel, payload))
        return 0

    def on(self, channel: str) -> List[bytes]:
        """Payloads published on one channel, in order."""
        with self._lock:
            return [payload for name, payload in self.messages if name == channel]


class NullPublisher(Publisher):
    """No-op publisher."""

    def publish(self, channel: str, payload: bytes) -> int:
        return 0
