# scaling_controller/controller/controller.py
"""Controller - periodically scales every network up to its declared demand."""

import dataclasses
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from scaling_controller.controller.config import ControllerConfig
from scaling_controller.core.models import Network, Node, RunningGateway, RunningServer
from scaling_controller.core.repository import NetworkRepository
from scaling_controller.dispatch.dispatcher import DeployDispatcher
from scaling_controller.placement.selector import select_node
from scaling_controller.scaling.evaluator import ScalingDecision, evaluate_network

logger = logging.getLogger(__name__)


class ControllerState(Enum):
    CREATED = "CREATED"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


@dataclass(frozen=True)
class PlannedDeploy:
    """One unit of demand and the node it was placed on (None if no capacity)."""

    decision: ScalingDecision
    node: Optional[Node]


@dataclass
class CycleReport:
    """Summary of one evaluation cycle."""

    networks_evaluated: int = 0
    dispatched: int = 0
    unplaced: int = 0
    dispatch_failures: int = 0
    failed_networks: Dict[str, str] = field(default_factory=dict)
    duration_seconds: float = 0.0


class Controller:
    """
    Control loop.

    Each cycle snapshots every network, evaluates gateway and server
    demand, places each missing instance on a node and dispatches a
    deploy command for it. Networks are evaluated independently: a
    failure in one is logged and the cycle moves on.
    """

    def __init__(
        self,
        *,
        repository: NetworkRepository,
        dispatcher: DeployDispatcher,
        config: Optional[ControllerConfig] = None,
    ):
        self.repo = repository
        self.dispatcher = dispatcher
        self.config = config or ControllerConfig()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._state = ControllerState.CREATED
        self.last_report: Optional[CycleReport] = None

    @property
    def state(self) -> ControllerState:
        return self._state

    # ============================================
    # LIFECYCLE
    # ============================================

    def start(self) -> None:
        """Run the loop on a background thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run, name="controller", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Request the loop to stop; interrupts the wait between cycles."""
        logger.info("[controller] Stopping controller")
        self._stop_event.set()
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def run(self) -> None:
        """Block and run cycles until stop() is called."""
        self._state = ControllerState.RUNNING
        logger.info(
            f"[controller] Started (poll interval {self.config.poll_interval_seconds}s)"
        )

        try:
            while not self._stop_event.is_set():
                try:
                    self.last_report = self.run_cycle()
                except Exception as e:
                    logger.error(f"[controller] Error in cycle: {e}", exc_info=True)

                self._stop_event.wait(self.config.poll_interval_seconds)
        finally:
            self._state = ControllerState.STOPPED
            logger.info("[controller] Stopped")

    # ============================================
    # CYCLE
    # ============================================

    def run_cycle(self) -> CycleReport:
        """Evaluate every network once."""
        started = time.monotonic()
        report = CycleReport()

        try:
            names = self.repo.list_network_names()
        except Exception as e:
            logger.error(f"[controller] Failed to list networks: {e}")
            report.failed_networks["*"] = str(e)
            report.duration_seconds = time.monotonic() - started
            return report

        for name in names:
            if self._stop_event.is_set():
                break
            try:
                self._run_network(name, report)
            except Exception as e:
                logger.error(f"[controller] Network {name} failed: {e}", exc_info=True)
                report.failed_networks[name] = str(e)

        report.duration_seconds = time.monotonic() - started

        if report.dispatched or report.unplaced or report.failed_networks:
            logger.info(
                f"[controller] Cycle done: {report.networks_evaluated} network(s), "
                f"{report.dispatched} dispatched, {report.unplaced} unplaced, "
                f"{len(report.failed_networks)} failed"
            )
        return report

    def _run_network(self, name: str, report: CycleReport) -> None:
        network = self.repo.get_network(name)
        if network is None:
            logger.warning(f"[controller] Network {name} disappeared during cycle")
            return

        gateways = self.repo.list_gateways(name)
        servers = self.repo.list_servers(name)
        report.networks_evaluated += 1

        for planned in self.plan_network(network, gateways, servers):
            decision = planned.decision

            if planned.node is None:
                logger.warning(
                    f"[controller] No node in {network.name} has "
                    f"{decision.required_memory}MB free for {decision.kind.value} "
                    f"type {decision.instance_type.name}"
                )
                report.unplaced += 1
                continue

            result = self.dispatcher.dispatch(
                planned.node, network, decision.instance_type, decision.channel
            )
            if result.ok:
                report.dispatched += 1
            else:
                report.dispatch_failures += 1

    # ============================================
    # PLANNING
    # ============================================

    def plan_network(
        self,
        network: Network,
        gateways: Sequence[RunningGateway],
        servers: Sequence[RunningServer],
    ) -> List[PlannedDeploy]:
        """
        Evaluate demand and place every missing instance.

        Pure: reads only the given snapshot. Each unit of demand is placed
        independently, so several units may land on the same node.
        """
        nodes = list(network.nodes)
        planned: List[PlannedDeploy] = []

        for decision in evaluate_network(network, gateways, servers):
            for _ in range(decision.count):
                node = select_node(
                    nodes,
                    decision.required_memory,
                    decision.preferred_node_type,
                    usage_tolerance=self.config.usage_tolerance,
                    enforce_memory_floor=self.config.enforce_memory_floor,
                )
                planned.append(PlannedDeploy(decision, node))

                if node is not None and self.config.reserve_memory_between_picks:
                    nodes = _reserve(nodes, node, decision.required_memory)

        return planned


def _reserve(nodes: List[Node], picked: Node, memory: int) -> List[Node]:
    reserved = dataclasses.replace(
        picked,
        available_memory=picked.available_memory - memory,
        hosted_instances=picked.hosted_instances + 1,
    )
    return [reserved if node.name == picked.name else node for node in nodes]
