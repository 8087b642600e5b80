#scaling_controller\infrastructure\postgres\models.py
"""SQLAlchemy ORM models for the network/node store."""

from sqlalchemy import (
    Column, String, Integer, Float, ForeignKey, Table, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship

from scaling_controller.infrastructure.postgres.database import Base


# ============================================
# NODES
# ============================================

class NodeORM(Base):
    """Host machines that instances can be deployed onto."""

    __tablename__ = "nodes"

    name = Column(String(255), primary_key=True)
    node_type = Column(String(100), nullable=False, index=True)

    total_memory = Column(Integer, nullable=False)  # MB
    available_memory = Column(Integer, nullable=False)  # MB
    usage = Column(Float, nullable=False, default=0.0)
    hosted_instances = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<NodeORM(name={self.name}, type={self.node_type}, "
            f"available_memory={self.available_memory}, usage={self.usage})>"
        )


network_nodes = Table(
    "network_nodes",
    Base.metadata,
    Column("network_name", String(255), ForeignKey("networks.name", ondelete="CASCADE"), primary_key=True),
    Column("node_name", String(255), ForeignKey("nodes.name", ondelete="CASCADE"), primary_key=True),
)


# ============================================
# INSTANCE TYPES
# ============================================

class GatewayTypeORM(Base):
    __tablename__ = "gateway_types"

    name = Column(String(255), primary_key=True)
    preferred_node_type = Column(String(100), nullable=False)
    dedicated_memory = Column(Integer, nullable=False, default=0)


class ServerTypeORM(Base):
    __tablename__ = "server_types"

    name = Column(String(255), primary_key=True)
    preferred_node_type = Column(String(100), nullable=False)
    dedicated_memory = Column(Integer, nullable=False, default=0)
    max_players = Column(Integer, nullable=False, default=0)


# ============================================
# NETWORKS
# ============================================

class NetworkORM(Base):
    """
    Network table.

    Demand tables hang off the network; nodes are shared through
    the network_nodes association.
    """

    __tablename__ = "networks"

    name = Column(String(255), primary_key=True)

    nodes = relationship("NodeORM", secondary=network_nodes, order_by="NodeORM.name")
    gateway_demand = relationship(
        "NetworkGatewayDemandORM",
        order_by="NetworkGatewayDemandORM.id",
        cascade="all, delete-orphan",
    )
    server_policies = relationship(
        "NetworkServerPolicyORM",
        order_by="NetworkServerPolicyORM.id",
        cascade="all, delete-orphan",
    )


class NetworkGatewayDemandORM(Base):
    """Desired running count per gateway type."""

    __tablename__ = "network_gateway_demand"

    id = Column(Integer, primary_key=True, autoincrement=True)
    network_name = Column(String(255), ForeignKey("networks.name", ondelete="CASCADE"), nullable=False)
    gateway_type_name = Column(String(255), ForeignKey("gateway_types.name"), nullable=False)
    desired_count = Column(Integer, nullable=False, default=0)

    gateway_type = relationship("GatewayTypeORM", lazy="joined")

    __table_args__ = (
        UniqueConstraint("network_name", "gateway_type_name", name="uq_gateway_demand_type"),
    )


class NetworkServerPolicyORM(Base):
    """Minimum/maximum server counts per server type."""

    __tablename__ = "network_server_policies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    network_name = Column(String(255), ForeignKey("networks.name", ondelete="CASCADE"), nullable=False)
    server_type_name = Column(String(255), ForeignKey("server_types.name"), nullable=False)
    minimum = Column(Integer, nullable=False, default=0)
    maximum = Column(Integer, nullable=False, default=0)

    server_type = relationship("ServerTypeORM", lazy="joined")

    __table_args__ = (
        UniqueConstraint("network_name", "server_type_name", name="uq_server_policy_type"),
    )


# ============================================
# RUNNING INSTANCES (written by the launcher)
# ============================================

class RunningGatewayORM(Base):
    __tablename__ = "running_gateways"

    id = Column(Integer, primary_key=True, autoincrement=True)
    network_name = Column(String(255), ForeignKey("networks.name", ondelete="CASCADE"), nullable=False)
    gateway_type_name = Column(String(255), ForeignKey("gateway_types.name"), nullable=False)
    node_name = Column(String(255), ForeignKey("nodes.name", ondelete="SET NULL"), nullable=True)

    __table_args__ = (
        Index("ix_running_gateways_network_type", "network_name", "gateway_type_name"),
    )


class RunningServerORM(Base):
    __tablename__ = "running_servers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    network_name = Column(String(255), ForeignKey("networks.name", ondelete="CASCADE"), nullable=False)
    server_type_name = Column(String(255), ForeignKey("server_types.name"), nullable=False)
    node_name = Column(String(255), ForeignKey("nodes.name", ondelete="SET NULL"), nullable=True)
    online_players = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_running_servers_network_type", "network_name", "server_type_name"),
    )
