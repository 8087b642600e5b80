# scaling_controller/infrastructure/memory/repository.py

from threading import Lock
from typing import Dict, List, Optional

from scaling_controller.core.models import Network, RunningGateway, RunningServer
from scaling_controller.core.repository import NetworkRepository


class InMemoryNetworkRepository(NetworkRepository):
    def __init__(self):
        self._networks: Dict[str, Network] = {}
        self._gateways: List[RunningGateway] = []
        self._servers: List[RunningServer] = []
        self._lock = Lock()

    # Seeding (stands in for the admin interface and the launcher)

    def add_network(self, network: Network) -> None:
        with self._lock:
            self._networks[network.name] = network

    def add_gateway(self, gateway: RunningGateway) -> None:
        with self._lock:
            self._gateways.append(gateway)

    def add_server(self, server: RunningServer) -> None:
        with self._lock:
            self._servers.append(server)

    # Read contract

    def list_network_names(self) -> List[str]:
        with self._lock:
            return sorted(self._networks)

    def get_network(self, name: str) -> Optional[Network]:
        with self._lock:
            return self._networks.get(name)

    def list_gateways(self, network_name: str) -> List[RunningGateway]:
        with self._lock:
            return [g for g in self._gateways if g.network_name == network_name]

    def list_servers(
        self,
        network_name: str,
        server_type_name: Optional[str] = None,
    ) -> List[RunningServer]:
        with self._lock:
            return [
                s for s in self._servers
                if s.network_name == network_name
                and (server_type_name is None or s.server_type_name == server_type_name)
            ]

    def ping(self) -> None:
        return None
