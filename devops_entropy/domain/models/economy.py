from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

from .types import ArchitectureType

REPUTATION_MIN = 0.0
REPUTATION_MAX = 100.0


@dataclass
class Economy:
    """Global economic state shared by every graph in a simulation."""
    money: float = 10000.0
    reputation: float = 50.0
    sprint: int = 1
    current_architecture: ArchitectureType = ArchitectureType.MONOLITH

    def clamp(self) -> None:
        """Money never goes negative; reputation stays in [0, 100]."""
        self.money = max(0.0, self.money)
        self.reputation = min(REPUTATION_MAX, max(REPUTATION_MIN, self.reputation))

    def next_sprint(self) -> int:
        self.sprint += 1
        return self.sprint

    def to_dict(self) -> Dict[str, Any]:
        return {
            "money": round(self.money, 2),
            "reputation": round(self.reputation, 2),
            "sprint": self.sprint,
            "architecture": self.current_architecture.display_name,
        }
