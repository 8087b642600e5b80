# scaling_controller/api/routes/networks.py
"""Read-only network routes (dry-run planning)."""

from fastapi import APIRouter, Depends, HTTPException

from scaling_controller.api.container import get_controller
from scaling_controller.api.schemas.plan import (
    NetworkListResponse,
    NetworkPlanResponse,
    PlannedDeployResponse,
)
from scaling_controller.controller.controller import Controller
from scaling_controller.core.errors import StoreReadError

router = APIRouter(prefix="/networks", tags=["networks"])


@router.get("/", response_model=NetworkListResponse)
def list_networks(controller: Controller = Depends(get_controller)):
    """List network names known to the store."""
    try:
        return NetworkListResponse(networks=controller.repo.list_network_names())
    except StoreReadError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/{name}/plan", response_model=NetworkPlanResponse)
def plan_network(name: str, controller: Controller = Depends(get_controller)):
    """
    Show what the next cycle would deploy for a network.

    Nothing is dispatched.
    """
    try:
        network = controller.repo.get_network(name)
        if network is None:
            raise HTTPException(status_code=404, detail="Network not found")
        gateways = controller.repo.list_gateways(name)
        servers = controller.repo.list_servers(name)
    except StoreReadError as e:
        raise HTTPException(status_code=503, detail=str(e))

    planned = controller.plan_network(network, gateways, servers)

    deploys = [
        PlannedDeployResponse(
            kind=p.decision.kind.value,
            type_name=p.decision.instance_type.name,
            channel=p.decision.channel,
            required_memory=p.decision.required_memory,
            preferred_node_type=p.decision.preferred_node_type,
            node_name=p.node.name if p.node else None,
        )
        for p in planned
    ]

    return NetworkPlanResponse(
        network=network.name,
        gateways_online=len(gateways),
        servers_online=len(servers),
        deploys=deploys,
        unplaced=sum(1 for p in planned if p.node is None),
    )
