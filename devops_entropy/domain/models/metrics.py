from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .components import SystemNode
from .types import HealthBand


@dataclass
class TickResult:
    """What one tick did to the economy and the graphs."""
    delta: float
    skipped: bool = False
    graphs: int = 0
    nodes: int = 0
    money_spent: float = 0.0
    reputation_lost: float = 0.0
    debt_spread: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delta": self.delta,
            "skipped": self.skipped,
            "graphs": self.graphs,
            "nodes": self.nodes,
            "money_spent": round(self.money_spent, 4),
            "reputation_lost": round(self.reputation_lost, 4),
            "debt_spread": round(self.debt_spread, 4),
        }


@dataclass
class NodeStatus:
    """Display snapshot of one node."""
    name: str
    node_type: str
    health: float
    tech_debt: float
    complexity: int
    critical_path: bool
    health_band: HealthBand
    debt_band: HealthBand
    attributes: List[str] = field(default_factory=list)

    @classmethod
    def from_node(cls, node: SystemNode) -> "NodeStatus":
        return cls(
            name=node.name,
            node_type=node.node_type,
            health=node.health,
            tech_debt=node.tech_debt,
            complexity=node.complexity,
            critical_path=node.critical_path,
            health_band=node.health_band,
            debt_band=node.debt_band,
            attributes=list(node.attributes),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.node_type,
            "health": round(self.health, 2),
            "tech_debt": round(self.tech_debt, 2),
            "complexity": self.complexity,
            "critical_path": self.critical_path,
            "health_band": self.health_band.value,
            "debt_band": self.debt_band.value,
            "attributes": self.attributes,
        }


@dataclass
class SystemSummary:
    """Overview of the simulation state for reporting."""
    architecture: str
    phase: str
    money: float
    reputation: float
    sprint: int
    components: int
    dependencies: int
    average_tech_debt: float
    total_complexity: int
    nodes: List[NodeStatus] = field(default_factory=list)
    defects: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def unhealthy_critical(self) -> List[str]:
        """Critical-path nodes in the critical health band."""
        return [
            n.name for n in self.nodes
            if n.critical_path and n.health_band is HealthBand.CRITICAL
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "architecture": self.architecture,
            "phase": self.phase,
            "resources": {
                "money": round(self.money, 2),
                "reputation": round(self.reputation, 2),
                "sprint": self.sprint,
            },
            "overview": {
                "components": self.components,
                "dependencies": self.dependencies,
                "average_tech_debt": round(self.average_tech_debt, 2),
                "total_complexity": self.total_complexity,
            },
            "nodes": [n.to_dict() for n in self.nodes],
            "defects": {name: count for name, count in self.defects},
            "unhealthy_critical": self.unhealthy_critical,
        }
