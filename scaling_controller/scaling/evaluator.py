# scaling_controller/scaling/evaluator.py
"""Scaling evaluator - decides how many gateways/servers a network is missing."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from scaling_controller.core.models import (
    InstanceKind,
    InstanceType,
    Network,
    RunningGateway,
    RunningServer,
    ServerScalingPolicy,
)

logger = logging.getLogger(__name__)

# Fraction of player capacity above which servers are added.
LOAD_THRESHOLD = 0.75


@dataclass(frozen=True)
class ScalingDecision:
    """Number of additional instances of one type a network needs."""

    kind: InstanceKind
    instance_type: InstanceType
    count: int

    @property
    def channel(self) -> str:
        return self.kind.channel

    @property
    def required_memory(self) -> int:
        return self.instance_type.dedicated_memory

    @property
    def preferred_node_type(self) -> str:
        return self.instance_type.preferred_node_type


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ============================================
# GATEWAYS
# ============================================

def count_gateways_online(
    network: Network,
    gateways: Iterable[RunningGateway],
) -> Dict[str, int]:
    """Gateway type name -> number of gateways running for the network."""
    counts: Dict[str, int] = {}
    for gateway in gateways:
        if gateway.network_name != network.name:
            continue
        counts[gateway.gateway_type_name] = counts.get(gateway.gateway_type_name, 0) + 1
    return counts


def gateway_deficit(desired: int, online: int) -> int:
    """Gateways missing for one type. Gateways are never scaled down."""
    return max(0, desired - online)


def evaluate_gateways(
    network: Network,
    gateways: Iterable[RunningGateway],
) -> List[ScalingDecision]:
    """Decisions for every gateway type below its desired count."""
    online = count_gateways_online(network, gateways)

    decisions = []
    for gateway_type, desired in network.gateway_demand:
        deficit = gateway_deficit(desired, online.get(gateway_type.name, 0))
        if deficit > 0:
            decisions.append(ScalingDecision(InstanceKind.BUNGEE, gateway_type, deficit))
    return decisions


# ============================================
# SERVERS
# ============================================

def server_need(policy: ServerScalingPolicy, servers: Sequence[RunningServer]) -> int:
    """
    Additional servers required for one scaling policy.

    Starts from the gap to the policy minimum, adds
    round(players / (0.75 * capacity)) + 1 once players exceed 75% of
    capacity, then clamps so the total never exceeds the policy maximum.

    With zero capacity (no instances, or a type with max_players=0) and
    players online, the ratio is undefined; exactly one extra instance is
    requested instead.
    """
    online_instances = len(servers)
    capacity = policy.server_type.max_players * online_instances
    online_players = sum(server.online_players for server in servers)

    need = policy.minimum - online_instances

    logger.debug(
        f"[evaluator] {policy.server_type.name}: need={need}, "
        f"capacity={capacity}, online_players={online_players}"
    )

    if online_players > capacity * LOAD_THRESHOLD:
        if capacity == 0:
            need += 1
        else:
            need += _round_half_up(online_players / (capacity * LOAD_THRESHOLD)) + 1

    if need + online_instances > policy.maximum:
        need = policy.maximum - online_instances

    return max(0, need)


def evaluate_servers(
    network: Network,
    servers: Iterable[RunningServer],
) -> List[ScalingDecision]:
    """Decisions for every server policy that requires more instances."""
    by_type: Dict[str, List[RunningServer]] = {}
    for server in servers:
        if server.network_name != network.name:
            continue
        by_type.setdefault(server.server_type_name, []).append(server)

    decisions = []
    for policy in network.server_policies:
        need = server_need(policy, by_type.get(policy.server_type.name, []))
        if need > 0:
            decisions.append(ScalingDecision(InstanceKind.SERVER, policy.server_type, need))
    return decisions


def evaluate_network(
    network: Network,
    gateways: Iterable[RunningGateway],
    servers: Iterable[RunningServer],
) -> List[ScalingDecision]:
    """Gateway decisions followed by server decisions."""
    return evaluate_gateways(network, gateways) + evaluate_servers(network, servers)
