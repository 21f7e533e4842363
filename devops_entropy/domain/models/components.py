from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .distribution import Distribution, Normal, LogNormal
from .types import HealthBand

# Health and tech debt are percentages
METRIC_MIN = 0.0
METRIC_MAX = 100.0


def clamp_percent(value: float) -> float:
    """Clamp a metric into [0, 100]."""
    return min(METRIC_MAX, max(METRIC_MIN, value))


_CLAMPED_FIELDS = frozenset({"health", "tech_debt"})


@dataclass
class SystemNode:
    """
    A component of the simulated system (service, datastore, cache, gateway...).

    Only tech_debt, complexity, contagion_risk, operating_cost, health,
    critical_path and defect_rate take part in the simulation. latency,
    failure_rate and attributes are descriptive.
    """
    name: str
    node_type: str = "service"
    health: float = 100.0           # 0-100, 100 = perfect
    tech_debt: float = 0.0          # 0-100
    complexity: int = 1
    contagion_risk: float = 0.0     # share of incoming debt absorbed, 0-1
    operating_cost: float = 0.0     # currency per time unit
    critical_path: bool = False
    attributes: List[str] = field(default_factory=list)
    latency: Distribution = field(default_factory=lambda: Normal(mean=100.0, std_dev=10.0))
    failure_rate: Distribution = field(default_factory=lambda: LogNormal(location=-3.0, scale=0.5))
    defect_rate: float = 0.1        # base defects per tick

    def __setattr__(self, name: str, value: Any) -> None:
        # Every write, including the generated __init__, lands in [0, 100]
        if name in _CLAMPED_FIELDS:
            value = clamp_percent(value)
        super().__setattr__(name, value)

    # -------------------------------------------------------------------------
    # Clamped mutation
    # -------------------------------------------------------------------------

    def set_health(self, value: float) -> None:
        self.health = value

    def set_tech_debt(self, value: float) -> None:
        self.tech_debt = value

    def apply_decay(self, amount: float) -> None:
        """Lower health by amount, never below 0."""
        self.set_health(self.health - amount)

    def add_tech_debt(self, amount: float) -> None:
        """Raise tech debt by amount, never above 100."""
        self.set_tech_debt(self.tech_debt + amount)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def complexity_multiplier(self) -> float:
        """How strongly this node's complexity amplifies debt and defects."""
        return 1.0 + self.complexity / 10.0

    @property
    def cost_multiplier(self) -> float:
        """Operating cost factor, up to 2x at 100% tech debt."""
        return 1.0 + self.tech_debt / 100.0

    @property
    def health_band(self) -> HealthBand:
        return HealthBand.for_health(self.health)

    @property
    def debt_band(self) -> HealthBand:
        return HealthBand.for_tech_debt(self.tech_debt)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "node_type": self.node_type,
            "health": self.health,
            "tech_debt": self.tech_debt,
            "complexity": self.complexity,
            "contagion_risk": self.contagion_risk,
            "operating_cost": self.operating_cost,
            "critical_path": self.critical_path,
            "attributes": list(self.attributes),
            "latency": self.latency.to_dict(),
            "failure_rate": self.failure_rate.to_dict(),
            "defect_rate": self.defect_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemNode":
        kwargs = {k: v for k, v in data.items() if k not in ("latency", "failure_rate")}
        node = cls(**kwargs)
        if "latency" in data:
            node.latency = Distribution.from_dict(data["latency"])
        if "failure_rate" in data:
            node.failure_rate = Distribution.from_dict(data["failure_rate"])
        return node


@dataclass
class SystemEdge:
    """
    A directed dependency between two nodes.

    tech_debt_spread is the fraction of the source's debt that can leak to
    the target per step, before the target's contagion_risk is applied.
    """
    name: str = ""
    reliability: float = 1.0
    bandwidth: float = 100.0
    tech_debt_spread: float = 0.0
    latency: Distribution = field(default_factory=lambda: Normal(mean=10.0, std_dev=1.0))
    failure_rate: Distribution = field(default_factory=lambda: LogNormal(location=-4.0, scale=0.5))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "reliability": self.reliability,
            "bandwidth": self.bandwidth,
            "tech_debt_spread": self.tech_debt_spread,
            "latency": self.latency.to_dict(),
            "failure_rate": self.failure_rate.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SystemEdge":
        kwargs = {k: v for k, v in data.items() if k not in ("latency", "failure_rate")}
        edge = cls(**kwargs)
        if "latency" in data:
            edge.latency = Distribution.from_dict(data["latency"])
        if "failure_rate" in data:
            edge.failure_rate = Distribution.from_dict(data["failure_rate"])
        return edge
