"""Network repository backed by SQLAlchemy."""

import logging
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from scaling_controller.core.errors import StoreReadError
from scaling_controller.core.models import (
    GatewayType,
    Network,
    Node,
    RunningGateway,
    RunningServer,
    ServerScalingPolicy,
    ServerType,
)
from scaling_controller.core.repository import NetworkRepository
from scaling_controller.infrastructure.postgres.database import get_session_factory
from scaling_controller.infrastructure.postgres.models import (
    NetworkORM,
    NodeORM,
    RunningGatewayORM,
    RunningServerORM,
)

logger = logging.getLogger(__name__)


def orm_to_node(orm: NodeORM) -> Node:
    """Convert ORM to node domain model."""
    return Node(
        name=orm.name,
        node_type=orm.node_type,
        total_memory=orm.total_memory,
        available_memory=orm.available_memory,
        usage=orm.usage,
        hosted_instances=orm.hosted_instances,
    )


def orm_to_network(orm: NetworkORM) -> Network:
    """Convert ORM (with its relationships) to network domain model."""
    gateway_demand = tuple(
        (
            GatewayType(
                name=row.gateway_type.name,
                preferred_node_type=row.gateway_type.preferred_node_type,
                dedicated_memory=row.gateway_type.dedicated_memory,
            ),
            row.desired_count,
        )
        for row in orm.gateway_demand
    )
    server_policies = tuple(
        ServerScalingPolicy(
            server_type=ServerType(
                name=row.server_type.name,
                preferred_node_type=row.server_type.preferred_node_type,
                dedicated_memory=row.server_type.dedicated_memory,
                max_players=row.server_type.max_players,
            ),
            minimum=row.minimum,
            maximum=row.maximum,
        )
        for row in orm.server_policies
    )
    return Network(
        name=orm.name,
        nodes=tuple(orm_to_node(node) for node in orm.nodes),
        gateway_demand=gateway_demand,
        server_policies=server_policies,
    )


class PostgresNetworkRepository(NetworkRepository):
    """Read-only repository over the network store."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def _get_session(self):
        if self._session_factory is None:
            self._session_factory = get_session_factory()
        return self._session_factory()

    def list_network_names(self) -> List[str]:
        session = self._get_session()
        try:
            return list(session.scalars(select(NetworkORM.name).order_by(NetworkORM.name)))
        except SQLAlchemyError as e:
            raise StoreReadError(f"Failed to list networks: {e}") from e
        finally:
            session.close()

    def get_network(self, name: str) -> Optional[Network]:
        session = self._get_session()
        try:
            orm = session.get(NetworkORM, name)
            if not orm:
                return None
            return orm_to_network(orm)
        except SQLAlchemyError as e:
            raise StoreReadError(f"Failed to read network {name}: {e}") from e
        except ValueError as e:
            raise StoreReadError(f"Network {name} has invalid data: {e}") from e
        finally:
            session.close()

    def list_gateways(self, network_name: str) -> List[RunningGateway]:
        session = self._get_session()
        try:
            rows = session.scalars(
                select(RunningGatewayORM)
                .where(RunningGatewayORM.network_name == network_name)
                .order_by(RunningGatewayORM.id)
            ).all()
            return [
                RunningGateway(
                    network_name=row.network_name,
                    gateway_type_name=row.gateway_type_name,
                    node_name=row.node_name,
                )
                for row in rows
            ]
        except SQLAlchemyError as e:
            raise StoreReadError(f"Failed to list gateways for {network_name}: {e}") from e
        finally:
            session.close()

    def list_servers(
        self,
        network_name: str,
        server_type_name: Optional[str] = None,
    ) -> List[RunningServer]:
        session = self._get_session()
        try:
            query = select(RunningServerORM).where(RunningServerORM.network_name == network_name)
            if server_type_name:
                query = query.where(RunningServerORM.server_type_name == server_type_name)

            rows = session.scalars(query.order_by(RunningServerORM.id)).all()
            return [
                RunningServer(
                    network_name=row.network_name,
                    server_type_name=row.server_type_name,
                    online_players=row.online_players,
                    node_name=row.node_name,
                )
                for row in rows
            ]
        except SQLAlchemyError as e:
            raise StoreReadError(f"Failed to list servers for {network_name}: {e}") from e
        finally:
            session.close()

    def ping(self) -> None:
        session = self._get_session()
        try:
            session.execute(text("SELECT 1"))
            logger.info("[network_repo] store reachable")
        except SQLAlchemyError as e:
            raise StoreReadError(f"Store unreachable: {e}") from e
        finally:
            session.close()
