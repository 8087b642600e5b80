# scaling_controller/dispatch/dispatcher.py
"""Deploy dispatcher - encodes deploy commands and publishes them."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from scaling_controller.core.errors import DeployEncodingError, PublishError
from scaling_controller.core.models import DeployCommand, InstanceKind, InstanceType, Network, Node
from scaling_controller.dispatch.codec import encode_deploy_command
from scaling_controller.dispatch.publisher import Publisher

logger = logging.getLogger(__name__)


class DispatchOutcome(Enum):
    SENT = "SENT"
    ENCODING_FAILED = "ENCODING_FAILED"
    PUBLISH_FAILED = "PUBLISH_FAILED"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a single dispatch. Failures are reported, never raised."""

    outcome: DispatchOutcome
    command: DeployCommand
    channel: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == DispatchOutcome.SENT


class DeployDispatcher:
    """Turns (node, network, instance type) into a message on a channel."""

    def __init__(self, publisher: Publisher):
        self._publisher = publisher

    def ping(self) -> None:
        """Verify the transport is reachable before the loop starts."""
        self._publisher.ping()
        logger.info(
            f"[dispatcher] Publisher ready for channels "
            f"{InstanceKind.BUNGEE.channel}, {InstanceKind.SERVER.channel}"
        )

    def dispatch(
        self,
        node: Node,
        network: Network,
        instance_type: InstanceType,
        channel: str,
    ) -> DispatchResult:
        command = DeployCommand(
            node_name=node.name,
            network_name=network.name,
            type_name=instance_type.name,
        )

        try:
            payload = encode_deploy_command(command)
        except DeployEncodingError as e:
            logger.error(
                f"[dispatcher] Encountered an exception whilst encoding a message for {command}",
                exc_info=True,
            )
            return DispatchResult(DispatchOutcome.ENCODING_FAILED, command, channel, str(e))

        try:
            self._publisher.publish(channel, payload)
        except PublishError as e:
            logger.error(f"[dispatcher] Failed to publish on '{channel}': {e}")
            return DispatchResult(DispatchOutcome.PUBLISH_FAILED, command, channel, str(e))

        logger.info(
            f"[dispatcher] Sent deploy message to {node.name} for "
            f"{_kind_label(channel)} type {instance_type.name} (network {network.name})"
        )
        return DispatchResult(DispatchOutcome.SENT, command, channel)


def _kind_label(channel: str) -> str:
    return channel[: -len("-create")] if channel.endswith("-create") else channel
