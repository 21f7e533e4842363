"""
Domain Services Package

Simulation algorithms that operate on the domain models.
"""

from .archetypes import create_architecture, create_initial_system, list_architectures
from .tick_driver import TickDriver, tick

__all__ = [
    "create_architecture",
    "create_initial_system",
    "list_architectures",
    "TickDriver",
    "tick",
]
