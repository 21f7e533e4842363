"""
Application Settings

Environment configuration for the simulation.
"""

import os
from dataclasses import dataclass
from typing import Optional

from devops_entropy.domain.models import ArchitectureType

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings from environment."""

    # Starting economy
    starting_money: float = 10000.0
    starting_reputation: float = 50.0
    architecture: ArchitectureType = ArchitectureType.MONOLITH

    # Simulation
    seed: Optional[int] = None
    tick_delta: float = 1.0
    strict_names: bool = False

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        seed = os.getenv("ENTROPY_SEED")
        return cls(
            starting_money=float(os.getenv("ENTROPY_STARTING_MONEY", "10000.0")),
            starting_reputation=float(os.getenv("ENTROPY_STARTING_REPUTATION", "50.0")),
            architecture=ArchitectureType.from_string(os.getenv("ENTROPY_ARCHITECTURE", "monolith")),
            seed=int(seed) if seed else None,
            tick_delta=float(os.getenv("ENTROPY_TICK_DELTA", "1.0")),
            strict_names=os.getenv("ENTROPY_STRICT_NAMES", "false").lower() in _TRUE_VALUES,
            log_level=os.getenv("ENTROPY_LOG_LEVEL", "INFO").upper(),
        )
