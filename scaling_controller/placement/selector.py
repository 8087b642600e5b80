# scaling_controller/placement/selector.py
"""Placement selector - picks the node a new instance is deployed onto."""

from typing import Iterable, Optional

from scaling_controller.core.models import Node

# Largest usage regression accepted to land on the preferred node type.
DEFAULT_USAGE_TOLERANCE = 200.0


def memory_threshold(node: Node) -> int:
    """Memory regression a node may show and still win on type preference."""
    return node.available_memory // (node.hosted_instances + 1)


def is_preferred(node: Node, current: Node, preferred_node_type: str) -> bool:
    """True when node matches the preferred type and current does not."""
    return node.node_type == preferred_node_type and current.node_type != preferred_node_type


def select_node(
    nodes: Iterable[Node],
    required_memory: int,
    preferred_node_type: str,
    *,
    usage_tolerance: float = DEFAULT_USAGE_TOLERANCE,
    enforce_memory_floor: bool = True,
) -> Optional[Node]:
    """
    Select best node for one deployment.

    The first node with enough memory becomes the candidate. Every later
    node replaces it when it is less used and has more free memory, or
    when it matches the preferred node type (and the candidate does not)
    while giving up at most memory_threshold(node) of memory or at most
    usage_tolerance of usage.

    With enforce_memory_floor, nodes below required_memory are never
    considered as replacements. Without it, replacements are only bounded
    by the relative thresholds above.
    """
    selected: Optional[Node] = None

    for node in nodes:
        if selected is None:
            if node.can_accommodate(required_memory):
                selected = node
            continue

        if enforce_memory_floor and not node.can_accommodate(required_memory):
            continue

        usage_diff = selected.usage - node.usage

        if usage_diff > 0:
            ram_diff = node.available_memory - selected.available_memory

            if ram_diff > 0:
                selected = node
            elif ram_diff >= -memory_threshold(node) and is_preferred(
                node, selected, preferred_node_type
            ):
                selected = node
        elif usage_diff >= -usage_tolerance and is_preferred(node, selected, preferred_node_type):
            selected = node

    return selected
