from __future__ import annotations
from enum import Enum


class DistributionKind(str, Enum):
    """Tag of a Distribution variant."""
    NORMAL = "normal"
    LOG_NORMAL = "log_normal"


class SimulationPhase(Enum):
    """Phase reported by the orchestration layer. Only RUNNING advances ticks."""
    LOADING = "loading"
    PLANNING = "planning"
    RUNNING = "running"
    PAUSED = "paused"


class HealthBand(Enum):
    """Severity band of a node metric."""
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    @classmethod
    def for_health(cls, health: float) -> "HealthBand":
        if health > 75.0:
            return cls.GOOD
        if health > 50.0:
            return cls.WARNING
        return cls.CRITICAL

    @classmethod
    def for_tech_debt(cls, tech_debt: float) -> "HealthBand":
        if tech_debt > 75.0:
            return cls.CRITICAL
        if tech_debt > 50.0:
            return cls.WARNING
        return cls.GOOD


class ArchitectureType(Enum):
    """
    Canned architecture archetypes.

    The members form a cycle used by the planning phase:
    Monolith -> Microservices -> Event-Driven -> Monolith.
    """
    MONOLITH = "monolith"
    MICROSERVICES = "microservices"
    EVENT_DRIVEN = "event-driven"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def next(self) -> "ArchitectureType":
        """Return the following archetype in the cycle."""
        members = list(ArchitectureType)
        return members[(members.index(self) + 1) % len(members)]

    @classmethod
    def from_string(cls, value: str) -> "ArchitectureType":
        """Convert string to ArchitectureType, supporting aliases."""
        aliases = {
            "mono": cls.MONOLITH,
            "micro": cls.MICROSERVICES,
            "microservice": cls.MICROSERVICES,
            "event_driven": cls.EVENT_DRIVEN,
            "eventdriven": cls.EVENT_DRIVEN,
            "event": cls.EVENT_DRIVEN,
            "events": cls.EVENT_DRIVEN,
        }
        normalized = value.lower().strip()
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            valid = [a.value for a in cls] + list(aliases.keys())
            raise ValueError(f"Unknown architecture '{value}'. Valid: {valid}")


_DISPLAY_NAMES = {
    ArchitectureType.MONOLITH: "Monolith",
    ArchitectureType.MICROSERVICES: "Microservices",
    ArchitectureType.EVENT_DRIVEN: "Event-Driven",
}
