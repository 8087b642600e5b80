"""Test process startup and configuration."""

import pytest

from scaling_controller import run_controller
from scaling_controller.container import build_controller
from scaling_controller.controller.config import POLL_INTERVAL_SECONDS, ControllerSettings
from scaling_controller.core.errors import ControllerStartupError, PublishError, StoreReadError
from scaling_controller.dispatch.publisher import InMemoryPublisher, Publisher
from scaling_controller.infrastructure.memory.repository import InMemoryNetworkRepository


class UnreachableRepository(InMemoryNetworkRepository):
    def ping(self):
        raise StoreReadError("connection refused")


class UnreachablePublisher(Publisher):
    def publish(self, channel, payload):
        return 0

    def ping(self):
        raise PublishError("redis down")


class TestSettings:
    """Test environment configuration."""

    def test_defaults(self):
        config = ControllerSettings().to_config()

        assert config.poll_interval_seconds == POLL_INTERVAL_SECONDS == 10.0
        assert config.usage_tolerance == 200.0
        assert config.enforce_memory_floor is True
        assert config.reserve_memory_between_picks is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CONTROLLER_USAGE_TOLERANCE", "50")
        monkeypatch.setenv("CONTROLLER_ENFORCE_MEMORY_FLOOR", "false")

        config = ControllerSettings().to_config()

        assert config.usage_tolerance == 50.0
        assert config.enforce_memory_floor is False


class TestStartup:
    """Test fatal initialization failures."""

    def test_build_controller_uses_given_collaborators(self):
        repo = InMemoryNetworkRepository()
        controller = build_controller(ControllerSettings(), repository=repo, publisher=InMemoryPublisher())

        assert controller.repo is repo

    def test_unreachable_store_is_fatal(self, monkeypatch):
        monkeypatch.setattr(
            run_controller,
            "build_controller",
            lambda settings: build_controller(
                settings, repository=UnreachableRepository(), publisher=InMemoryPublisher()
            ),
        )

        with pytest.raises(ControllerStartupError):
            run_controller.startup(ControllerSettings())

    def test_unreachable_publisher_is_fatal(self, monkeypatch):
        monkeypatch.setattr(
            run_controller,
            "build_controller",
            lambda settings: build_controller(
                settings, repository=InMemoryNetworkRepository(), publisher=UnreachablePublisher()
            ),
        )

        assert run_controller.main() == 1
