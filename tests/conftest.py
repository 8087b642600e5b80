#tests\conftest.py

"""Pytest configuration and fixtures."""

import pytest

from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from scaling_controller.controller.config import ControllerConfig
from scaling_controller.controller.controller import Controller
from scaling_controller.core.models import (
    GatewayType,
    Network,
    Node,
    ServerScalingPolicy,
    ServerType,
)
from scaling_controller.dispatch.dispatcher import DeployDispatcher
from scaling_controller.dispatch.publisher import InMemoryPublisher
from scaling_controller.infrastructure.memory.repository import InMemoryNetworkRepository
from scaling_controller.infrastructure.postgres.database import drop_db, get_session_factory, init_db
from scaling_controller.infrastructure.postgres.network_repository import PostgresNetworkRepository


# -------------------------
# SQL STORE
# -------------------------

@pytest.fixture(scope="function")
def test_engine():
    """In-memory SQLite engine shared across sessions of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)

    yield engine

    drop_db(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_engine):
    """Create session factory for tests."""
    return get_session_factory(test_engine)


@pytest.fixture
def network_repository(test_session_factory):
    """Create repository with test database session factory."""
    return PostgresNetworkRepository(session_factory=test_session_factory)


# -------------------------
# DOMAIN SAMPLES
# -------------------------

@pytest.fixture
def lobby_server_type():
    return ServerType(name="lobby", preferred_node_type="game", dedicated_memory=1024, max_players=100)


@pytest.fixture
def proxy_type():
    return GatewayType(name="proxy", preferred_node_type="edge", dedicated_memory=512)


@pytest.fixture
def sample_nodes():
    return (
        Node(name="node-a", node_type="game", total_memory=8192, available_memory=4096, usage=50.0),
        Node(name="node-b", node_type="edge", total_memory=8192, available_memory=6144, usage=20.0),
    )


@pytest.fixture
def sample_network(sample_nodes, proxy_type, lobby_server_type):
    """Network wanting 3 proxies and 2..5 lobby servers."""
    return Network(
        name="main",
        nodes=sample_nodes,
        gateway_demand=((proxy_type, 3),),
        server_policies=(ServerScalingPolicy(lobby_server_type, minimum=2, maximum=5),),
    )


# -------------------------
# CONTROLLER
# -------------------------

@pytest.fixture
def memory_repository():
    return InMemoryNetworkRepository()


@pytest.fixture
def publisher():
    return InMemoryPublisher()


@pytest.fixture
def controller(memory_repository, publisher):
    """Controller wired to in-memory store and publisher."""
    return Controller(
        repository=memory_repository,
        dispatcher=DeployDispatcher(publisher),
        config=ControllerConfig(poll_interval_seconds=0.05),
    )
