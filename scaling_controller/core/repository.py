# scaling_controller/core/repository.py

from abc import ABC, abstractmethod
from typing import List, Optional

from scaling_controller.core.models import Network, RunningGateway, RunningServer


class NetworkRepository(ABC):
    """
    Read contract with the external store.
    The controller never writes through it.
    """

    @abstractmethod
    def list_network_names(self) -> List[str]:
        """
        List names of every network, in a stable order.
        """
        raise NotImplementedError

    @abstractmethod
    def get_network(self, name: str) -> Optional[Network]:
        """
        Fetch a network with its nodes, gateway demand and server policies.
        Returns None if not found.
        """
        raise NotImplementedError

    @abstractmethod
    def list_gateways(self, network_name: str) -> List[RunningGateway]:
        """
        List gateways currently running for a network.
        """
        raise NotImplementedError

    @abstractmethod
    def list_servers(
        self,
        network_name: str,
        server_type_name: Optional[str] = None,
    ) -> List[RunningServer]:
        """
        List servers currently running for a network,
        optionally restricted to one server type.
        """
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> None:
        """
        Verify the store is reachable.
        Raises StoreReadError otherwise.
        """
        raise NotImplementedError
