"""
Application Services Package

Orchestration of the domain layer for the CLI and other callers.
"""

from .simulation_service import SimulationService
from .display_service import DisplayService

__all__ = ["SimulationService", "DisplayService"]
