"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

from .types import DistributionKind, ArchitectureType, SimulationPhase, HealthBand
from .distribution import Distribution, Normal, LogNormal
from .components import SystemNode, SystemEdge, clamp_percent
from .graph import SystemGraph, NodeNotFoundError, DuplicateNodeError
from .economy import Economy
from .metrics import TickResult, NodeStatus, SystemSummary

__all__ = [
    # Enums
    "DistributionKind", "ArchitectureType", "SimulationPhase", "HealthBand",
    # Distributions
    "Distribution", "Normal", "LogNormal",
    # Graph
    "SystemNode", "SystemEdge", "clamp_percent",
    "SystemGraph", "NodeNotFoundError", "DuplicateNodeError",
    # State and results
    "Economy",
    "TickResult", "NodeStatus", "SystemSummary",
]
