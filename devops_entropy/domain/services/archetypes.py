"""
Architecture Archetypes

Fixed starting topologies for the simulation:

    Monolith:       core_service -> database, core_service -> cache
    Microservices:  api_gateway -> auth_service, api_gateway -> user_service,
                    auth_service -> user_service
    Event-Driven:   producer_service -> event_bus -> consumer_service

Topology is fixed; only the distributions attached to nodes and edges are
random. The metric values are game-balance data.

Usage:
    from devops_entropy.domain.services.archetypes import create_architecture
    graph = create_architecture(ArchitectureType.MICROSERVICES)
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, List, Tuple

from devops_entropy.domain.models import (
    ArchitectureType,
    SystemGraph,
    SystemNode,
    SystemEdge,
    Normal,
    LogNormal,
)

logger = logging.getLogger(__name__)

EdgeSpec = Tuple[str, str, SystemEdge]


# =============================================================================
# Monolith
# =============================================================================

def _monolith() -> Tuple[List[SystemNode], List[EdgeSpec]]:
    nodes = [
        SystemNode(
            name="core_service",
            node_type="monolith",
            health=100.0,
            tech_debt=30.0,
            complexity=15,
            contagion_risk=0.5,
            operating_cost=500.0,
            critical_path=True,
            attributes=["monolithic", "legacy"],
            latency=Normal(mean=200.0, std_dev=50.0),
            failure_rate=LogNormal(location=-3.0, scale=0.5),
            defect_rate=0.2,
        ),
        SystemNode(
            name="database",
            node_type="storage",
            health=100.0,
            tech_debt=20.0,
            complexity=5,
            contagion_risk=0.3,
            operating_cost=300.0,
            critical_path=True,
            attributes=["data_critical"],
            latency=Normal(mean=50.0, std_dev=10.0),
            failure_rate=LogNormal(location=-4.0, scale=0.3),
            defect_rate=0.1,
        ),
        SystemNode(
            name="cache",
            node_type="cache",
            health=100.0,
            tech_debt=10.0,
            complexity=3,
            contagion_risk=0.2,
            operating_cost=100.0,
            critical_path=False,
            attributes=["performance"],
            latency=Normal(mean=5.0, std_dev=1.0),
            failure_rate=LogNormal(location=-2.0, scale=0.8),
            defect_rate=0.05,
        ),
    ]
    edges = [
        ("core_service", "database", SystemEdge(
            name="db_connection",
            reliability=0.999,
            latency=Normal(mean=10.0, std_dev=2.0),
            tech_debt_spread=0.3,
            bandwidth=1000.0,
            failure_rate=LogNormal(location=-5.0, scale=0.2),
        )),
        ("core_service", "cache", SystemEdge(
            name="cache_connection",
            reliability=0.99,
            latency=Normal(mean=2.0, std_dev=0.5),
            tech_debt_spread=0.1,
            bandwidth=5000.0,
            failure_rate=LogNormal(location=-3.0, scale=0.5),
        )),
    ]
    return nodes, edges


# =============================================================================
# Microservices
# =============================================================================

def _microservices() -> Tuple[List[SystemNode], List[EdgeSpec]]:
    nodes = [
        SystemNode(
            name="api_gateway",
            node_type="gateway",
            health=100.0,
            tech_debt=15.0,
            complexity=8,
            contagion_risk=0.4,
            operating_cost=200.0,
            critical_path=True,
            attributes=["entry_point"],
            latency=Normal(mean=50.0, std_dev=10.0),
            failure_rate=LogNormal(location=-4.0, scale=0.3),
            defect_rate=0.1,
        ),
        SystemNode(
            name="auth_service",
            node_type="service",
            health=100.0,
            tech_debt=20.0,
            complexity=6,
            contagion_risk=0.3,
            operating_cost=150.0,
            critical_path=True,
            attributes=["security"],
            latency=Normal(mean=100.0, std_dev=20.0),
            failure_rate=LogNormal(location=-4.5, scale=0.2),
            defect_rate=0.15,
        ),
        SystemNode(
            name="user_service",
            node_type="service",
            health=100.0,
            tech_debt=25.0,
            complexity=7,
            contagion_risk=0.3,
            operating_cost=180.0,
            critical_path=True,
            attributes=["core_service"],
            latency=Normal(mean=80.0, std_dev=15.0),
            failure_rate=LogNormal(location=-4.0, scale=0.3),
            defect_rate=0.12,
        ),
    ]
    edges = [
        ("api_gateway", "auth_service", SystemEdge(
            name="gateway_to_auth",
            reliability=0.999,
            latency=Normal(mean=20.0, std_dev=5.0),
            tech_debt_spread=0.2,
            bandwidth=1000.0,
            failure_rate=LogNormal(location=-5.0, scale=0.2),
        )),
        ("api_gateway", "user_service", SystemEdge(
            name="gateway_to_users",
            reliability=0.999,
            latency=Normal(mean=20.0, std_dev=5.0),
            tech_debt_spread=0.2,
            bandwidth=1000.0,
            failure_rate=LogNormal(location=-5.0, scale=0.2),
        )),
        ("auth_service", "user_service", SystemEdge(
            name="auth_to_users",
            reliability=0.999,
            latency=Normal(mean=30.0, std_dev=8.0),
            tech_debt_spread=0.3,
            bandwidth=500.0,
            failure_rate=LogNormal(location=-4.5, scale=0.3),
        )),
    ]
    return nodes, edges


# =============================================================================
# Event-Driven
# =============================================================================

def _event_driven() -> Tuple[List[SystemNode], List[EdgeSpec]]:
    nodes = [
        SystemNode(
            name="event_bus",
            node_type="messaging",
            health=100.0,
            tech_debt=15.0,
            complexity=10,
            contagion_risk=0.6,
            operating_cost=400.0,
            critical_path=True,
            attributes=["backbone", "distributed"],
            latency=Normal(mean=30.0, std_dev=10.0),
            failure_rate=LogNormal(location=-5.0, scale=0.2),
            defect_rate=0.1,
        ),
        SystemNode(
            name="producer_service",
            node_type="service",
            health=100.0,
            tech_debt=20.0,
            complexity=6,
            contagion_risk=0.3,
            operating_cost=200.0,
            critical_path=True,
            attributes=["event_source"],
            latency=Normal(mean=50.0, std_dev=15.0),
            failure_rate=LogNormal(location=-4.0, scale=0.3),
            defect_rate=0.15,
        ),
        SystemNode(
            name="consumer_service",
            node_type="service",
            health=100.0,
            tech_debt=25.0,
            complexity=7,
            contagion_risk=0.4,
            operating_cost=250.0,
            critical_path=True,
            attributes=["event_sink"],
            latency=Normal(mean=70.0, std_dev=20.0),
            failure_rate=LogNormal(location=-3.5, scale=0.4),
            defect_rate=0.2,
        ),
    ]
    # Both bus links share the same characteristics
    bus_link = dict(
        reliability=0.999,
        latency=Normal(mean=15.0, std_dev=5.0),
        tech_debt_spread=0.4,
        bandwidth=2000.0,
        failure_rate=LogNormal(location=-4.5, scale=0.3),
    )
    edges = [
        ("producer_service", "event_bus", SystemEdge(name="to_bus", **bus_link)),
        ("event_bus", "consumer_service", SystemEdge(name="from_bus", **bus_link)),
    ]
    return nodes, edges


_BUILDERS: Dict[ArchitectureType, Callable[[], Tuple[List[SystemNode], List[EdgeSpec]]]] = {
    ArchitectureType.MONOLITH: _monolith,
    ArchitectureType.MICROSERVICES: _microservices,
    ArchitectureType.EVENT_DRIVEN: _event_driven,
}


# =============================================================================
# Public API
# =============================================================================

def create_architecture(arch_type: ArchitectureType, strict_names: bool = False) -> SystemGraph:
    """Build a fresh SystemGraph for the given archetype (or archetype name)."""
    if isinstance(arch_type, str):
        arch_type = ArchitectureType.from_string(arch_type)

    nodes, edges = _BUILDERS[arch_type]()
    graph = SystemGraph(strict_names=strict_names)
    for node in nodes:
        graph.add_node(node)
    for source, target, edge in edges:
        graph.add_edge(source, target, edge)

    logger.debug(
        f"Created {arch_type.display_name} architecture: "
        f"{graph.node_count()} nodes, {graph.edge_count()} edges"
    )
    return graph


def create_initial_system() -> SystemGraph:
    """The graph the simulation starts with."""
    return create_architecture(ArchitectureType.MONOLITH)


def list_architectures() -> List[ArchitectureType]:
    """All archetypes in cycle order."""
    return list(ArchitectureType)
