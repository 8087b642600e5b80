#scaling_controller\core\models.py

"""Core domain models (read-only snapshots of the store)."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class InstanceKind(Enum):
    """Kind of instance the controller can deploy."""

    BUNGEE = "bungee"
    SERVER = "server"

    @property
    def channel(self) -> str:
        """Pub/sub channel deploy commands of this kind are published on."""
        return f"{self.value}-create"


# ============================================
# NODES
# ============================================

@dataclass(frozen=True)
class Node:
    """A host able to run gateway/server instances."""

    name: str
    node_type: str
    total_memory: int  # MB
    available_memory: int  # MB
    usage: float = 0.0
    hosted_instances: int = 0

    def __post_init__(self) -> None:
        if self.total_memory < 0:
            raise ValueError(f"Node {self.name}: total_memory must be >= 0")
        if self.available_memory > self.total_memory:
            raise ValueError(
                f"Node {self.name}: available_memory ({self.available_memory}) "
                f"exceeds total_memory ({self.total_memory})"
            )
        if self.hosted_instances < 0:
            raise ValueError(f"Node {self.name}: hosted_instances must be >= 0")

    def can_accommodate(self, required_memory: int) -> bool:
        """Check if node has enough free memory."""
        return self.available_memory >= required_memory


# ============================================
# INSTANCE TYPES
# ============================================

@dataclass(frozen=True)
class GatewayType:
    """Gateway (bungee) process type."""

    name: str
    preferred_node_type: str
    dedicated_memory: int = 0

    def __post_init__(self) -> None:
        if self.dedicated_memory < 0:
            raise ValueError(f"Gateway type {self.name}: dedicated_memory must be >= 0")


@dataclass(frozen=True)
class ServerType:
    """Backend game-server process type."""

    name: str
    preferred_node_type: str
    dedicated_memory: int = 0
    max_players: int = 0

    def __post_init__(self) -> None:
        if self.dedicated_memory < 0:
            raise ValueError(f"Server type {self.name}: dedicated_memory must be >= 0")
        if self.max_players < 0:
            raise ValueError(f"Server type {self.name}: max_players must be >= 0")


InstanceType = Union[GatewayType, ServerType]


@dataclass(frozen=True)
class ServerScalingPolicy:
    """Minimum/maximum instance bounds for a server type in a network."""

    server_type: ServerType
    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum < 0:
            raise ValueError(f"Policy for {self.server_type.name}: minimum must be >= 0")
        if self.minimum > self.maximum:
            raise ValueError(
                f"Policy for {self.server_type.name}: minimum ({self.minimum}) "
                f"exceeds maximum ({self.maximum})"
            )


# ============================================
# NETWORKS
# ============================================

@dataclass(frozen=True)
class Network:
    """A tenant's collection of nodes, gateway demand and server policies."""

    name: str
    nodes: Tuple[Node, ...] = ()
    gateway_demand: Tuple[Tuple[GatewayType, int], ...] = ()
    server_policies: Tuple[ServerScalingPolicy, ...] = ()

    def desired_gateways(self) -> Dict[str, int]:
        """Gateway type name -> desired running count."""
        return {gateway_type.name: desired for gateway_type, desired in self.gateway_demand}


# ============================================
# RUNNING INSTANCES
# ============================================

@dataclass(frozen=True)
class RunningGateway:
    """A gateway currently running for a network."""

    network_name: str
    gateway_type_name: str
    node_name: Optional[str] = None


@dataclass(frozen=True)
class RunningServer:
    """A server currently running for a network."""

    network_name: str
    server_type_name: str
    online_players: int = 0
    node_name: Optional[str] = None


# ============================================
# DEPLOY COMMANDS
# ============================================

@dataclass(frozen=True)
class DeployCommand:
    """Instruction for a node to launch one instance for a network."""

    node_name: str
    network_name: str
    type_name: str

    def fields(self) -> List[str]:
        """Wire field order."""
        return [self.node_name, self.network_name, self.type_name]
