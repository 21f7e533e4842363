"""
Simulation Service

Application service owning one running simulation: the architecture graph,
the shared economy and the current phase.

Architecture:
    CLI (bin/simulate_system.py)
      └── SimulationService          <- this module
            ├── archetypes           (domain service)
            ├── TickDriver           (domain service)
            └── SystemGraph          (domain model)

Cadence of the two debt propagation operations:
    - advance()/run(): continuous, delta-scaled spread on every tick
    - spread_tech_debt()/end_sprint(): one discrete contagion step,
      driven by the planning phase
"""

from __future__ import annotations
import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from devops_entropy.config import Settings
from devops_entropy.domain.models import (
    ArchitectureType,
    Economy,
    NodeStatus,
    SimulationPhase,
    SystemGraph,
    SystemSummary,
    TickResult,
)
from devops_entropy.domain.services import TickDriver, create_architecture


class SimulationService:
    """
    Orchestrates ticks, sprints and archetype changes for one system graph.

    Example:
        >>> sim = SimulationService()
        >>> sim.run(ticks=10, delta=0.5)
        >>> sim.end_sprint()
        >>> sim.summary().to_dict()
    """

    def __init__(
        self,
        graph: Optional[SystemGraph] = None,
        economy: Optional[Economy] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.settings = settings or Settings()
        self.rng = rng or random.Random(self.settings.seed)

        if economy is None:
            economy = Economy(
                money=self.settings.starting_money,
                reputation=self.settings.starting_reputation,
                current_architecture=self.settings.architecture,
            )
        if graph is None:
            graph = create_architecture(
                economy.current_architecture,
                strict_names=self.settings.strict_names,
            )
        self.economy = economy
        self.graph = graph
        self.driver = TickDriver()

        self._phase = SimulationPhase.LOADING
        self.logger.info(
            f"Created initial system with {self.graph.node_count()} nodes "
            f"and {self.graph.edge_count()} edges"
        )
        self._phase = SimulationPhase.PLANNING

    # =========================================================================
    # Phase
    # =========================================================================

    @property
    def phase(self) -> SimulationPhase:
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase is SimulationPhase.RUNNING

    def start(self) -> None:
        if self.is_running:
            self.logger.info("Simulation already running")
            return
        self.logger.info("Simulation started")
        self._phase = SimulationPhase.RUNNING

    def pause(self) -> None:
        if self._phase is SimulationPhase.PAUSED:
            self.logger.info("Simulation already paused")
            return
        self.logger.info("Simulation paused")
        self._phase = SimulationPhase.PAUSED

    # =========================================================================
    # Ticks
    # =========================================================================

    def advance(self, delta: Optional[float] = None) -> TickResult:
        """Apply one tick; a no-op unless the simulation is running."""
        if delta is None:
            delta = self.settings.tick_delta
        return self.driver.tick(delta, self.graph, self.economy, self._phase)

    def run(self, ticks: int, delta: Optional[float] = None) -> List[TickResult]:
        """
        Run a fixed number of ticks.

        Starts the simulation if needed and restores the previous phase
        afterwards.
        """
        if ticks < 0:
            raise ValueError(f"Tick count must be non-negative, got {ticks}")

        previous = self._phase
        self._phase = SimulationPhase.RUNNING
        try:
            results = [self.advance(delta) for _ in range(ticks)]
        finally:
            self._phase = previous

        if results:
            spent = sum(r.money_spent for r in results)
            self.logger.info(
                f"Ran {len(results)} ticks: spent ${spent:.2f}, "
                f"money ${self.economy.money:.2f}, reputation {self.economy.reputation:.1f}%"
            )
        return results

    # =========================================================================
    # Sprint cycle
    # =========================================================================

    def spread_tech_debt(self, steps: int = 1) -> float:
        """Apply the discrete contagion step. Returns the new average debt."""
        for _ in range(steps):
            self.graph.simulate_tech_debt_spread()
        return self.graph.average_tech_debt()

    def collect_defects(self) -> List[Tuple[str, int]]:
        return self.graph.generate_defects()

    def end_sprint(self) -> Dict[str, Any]:
        """
        Close the current sprint: one contagion step, defect collection and
        sprint counter increment.
        """
        sprint = self.economy.sprint
        debt_before = self.graph.average_tech_debt()
        debt_after = self.spread_tech_debt()
        defects = self.collect_defects()
        self.economy.next_sprint()

        self.logger.info(
            f"Sprint {sprint} closed: avg tech debt {debt_before:.1f}% -> {debt_after:.1f}%, "
            f"{sum(count for _, count in defects)} defects"
        )
        return {
            "sprint": sprint,
            "average_tech_debt_before": round(debt_before, 2),
            "average_tech_debt_after": round(debt_after, 2),
            "defects": {name: count for name, count in defects},
            "economy": self.economy.to_dict(),
        }

    # =========================================================================
    # Architecture
    # =========================================================================

    def switch_architecture(self, arch_type: Optional[ArchitectureType] = None) -> SystemGraph:
        """Replace the graph with the given archetype, or the next one in the cycle."""
        if arch_type is None:
            arch_type = self.economy.current_architecture.next()
        elif isinstance(arch_type, str):
            arch_type = ArchitectureType.from_string(arch_type)

        self.graph = create_architecture(arch_type, strict_names=self.settings.strict_names)
        self.economy.current_architecture = arch_type
        self.logger.info(f"Switched architecture to {arch_type.display_name}")
        return self.graph

    # =========================================================================
    # Reporting
    # =========================================================================

    def sample_latencies(self, rng: Optional[random.Random] = None) -> Dict[str, float]:
        """One latency draw per node."""
        rng = rng or self.rng
        return {node.name: node.latency.sample(rng) for node in self.graph.nodes()}

    def summary(self) -> SystemSummary:
        return SystemSummary(
            architecture=self.economy.current_architecture.display_name,
            phase=self._phase.value,
            money=self.economy.money,
            reputation=self.economy.reputation,
            sprint=self.economy.sprint,
            components=self.graph.node_count(),
            dependencies=self.graph.edge_count(),
            average_tech_debt=self.graph.average_tech_debt(),
            total_complexity=self.graph.total_complexity(),
            nodes=[NodeStatus.from_node(node) for node in self.graph.nodes()],
            defects=self.graph.generate_defects(),
        )
