from typing import List, Optional

from pydantic import BaseModel


class NetworkListResponse(BaseModel):
    networks: List[str]


class PlannedDeployResponse(BaseModel):
    kind: str
    type_name: str
    channel: str
    required_memory: int
    preferred_node_type: str
    node_name: Optional[str]


class NetworkPlanResponse(BaseModel):
    network: str
    gateways_online: int
    servers_online: int
    deploys: List[PlannedDeployResponse]
    unplaced: int
