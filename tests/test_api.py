"""Test read-only status API."""

import pytest
from fastapi.testclient import TestClient

from scaling_controller.api.container import get_controller
from scaling_controller.api.main import app
from scaling_controller.controller.controller import Controller
from scaling_controller.core.errors import StoreReadError
from scaling_controller.core.models import RunningGateway
from scaling_controller.dispatch.dispatcher import DeployDispatcher
from scaling_controller.dispatch.publisher import InMemoryPublisher
from scaling_controller.infrastructure.memory.repository import InMemoryNetworkRepository


@pytest.fixture
def client(controller):
    app.dependency_overrides[get_controller] = lambda: controller
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")

    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_networks(client, memory_repository, sample_network):
    memory_repository.add_network(sample_network)

    r = client.get("/networks/")

    assert r.status_code == 200
    assert r.json() == {"networks": ["main"]}


def test_plan_does_not_dispatch(client, memory_repository, publisher, sample_network):
    """Test the plan lists deploys and their nodes without publishing."""
    memory_repository.add_network(sample_network)
    memory_repository.add_gateway(RunningGateway("main", "proxy"))

    r = client.get("/networks/main/plan")

    assert r.status_code == 200
    body = r.json()
    assert body["network"] == "main"
    assert body["gateways_online"] == 1
    assert body["unplaced"] == 0
    assert [d["kind"] for d in body["deploys"]] == ["bungee", "bungee", "server", "server"]
    assert body["deploys"][0]["channel"] == "bungee-create"
    assert body["deploys"][0]["node_name"] == "node-b"
    assert publisher.messages == []


def test_plan_unknown_network(client):
    r = client.get("/networks/missing/plan")

    assert r.status_code == 404


def test_store_failure_returns_503():
    class DownRepository(InMemoryNetworkRepository):
        def list_network_names(self):
            raise StoreReadError("store down")

    controller = Controller(repository=DownRepository(), dispatcher=DeployDispatcher(InMemoryPublisher()))
    app.dependency_overrides[get_controller] = lambda: controller
    try:
        r = TestClient(app).get("/networks/")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 503
