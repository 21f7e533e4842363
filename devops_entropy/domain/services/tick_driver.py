"""
Tick Driver

Applies one frame of continuous simulation, scaled by the elapsed time delta,
to every SystemGraph in the simulation and to the shared Economy.

Per node:
    1. health   -= tech_debt * 0.1 * delta                  (floored at 0)
    2. money    -= operating_cost * (1 + tech_debt / 100) * delta
    3. reputation -= (50 - health) * 0.1 * delta            (critical path, health < 50)

Then, per arc, a continuous debt spread computed from a snapshot of the
post-decay debts:
    target.tech_debt += source.tech_debt * edge.tech_debt_spread * delta   (capped at 100)

Finally money is floored at 0 and reputation clamped to [0, 100].

The discrete contagion step (SystemGraph.simulate_tech_debt_spread) is a
separate operation and is not invoked here.
"""

from __future__ import annotations
import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, Union

from devops_entropy.domain.models import (
    Economy,
    SimulationPhase,
    SystemGraph,
    TickResult,
)

GraphsArg = Union[SystemGraph, Iterable[SystemGraph]]


class TickDriver:
    """
    Advances graphs and economy by one time delta.

    Example:
        >>> driver = TickDriver()
        >>> result = driver.tick(0.016, graph, economy)
    """

    HEALTH_DECAY_RATE = 0.1
    REPUTATION_HEALTH_THRESHOLD = 50.0
    REPUTATION_PENALTY_RATE = 0.1

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def tick(
        self,
        delta: float,
        graphs: GraphsArg,
        economy: Economy,
        phase: SimulationPhase = SimulationPhase.RUNNING,
    ) -> TickResult:
        """
        Apply one tick.

        Args:
            delta: Elapsed time in seconds, non-negative.
            graphs: A SystemGraph or an iterable of them.
            economy: Shared money / reputation state, mutated in place.
            phase: Current simulation phase; anything but RUNNING is a no-op.

        Returns:
            TickResult describing what changed.

        Raises:
            ValueError: If delta is negative or not finite.
        """
        if phase is not SimulationPhase.RUNNING:
            self.logger.debug(f"Tick skipped in phase {phase.value}")
            return TickResult(delta=delta, skipped=True)

        if not math.isfinite(delta) or delta < 0:
            raise ValueError(f"Tick delta must be a non-negative finite number, got {delta}")

        if isinstance(graphs, SystemGraph):
            graphs = [graphs]

        result = TickResult(delta=delta)
        money_before = economy.money
        reputation_before = economy.reputation

        for graph in graphs:
            result.graphs += 1
            result.nodes += graph.node_count()
            self._update_nodes(graph, economy, delta, result)
            result.debt_spread += self._spread_tech_debt(graph, delta)

        economy.clamp()

        self.logger.debug(
            f"Tick dt={delta:.4f}: money {money_before:.2f} -> {economy.money:.2f}, "
            f"reputation {reputation_before:.2f} -> {economy.reputation:.2f}, "
            f"debt spread {result.debt_spread:.4f}"
        )
        return result

    def _update_nodes(
        self,
        graph: SystemGraph,
        economy: Economy,
        delta: float,
        result: TickResult,
    ) -> None:
        """Health decay, operating cost and reputation effects."""
        for node in graph.nodes():
            health_decay = node.tech_debt * self.HEALTH_DECAY_RATE * delta
            node.apply_decay(health_decay)

            cost = node.operating_cost * node.cost_multiplier * delta
            economy.money -= cost
            result.money_spent += cost

            if node.critical_path and node.health < self.REPUTATION_HEALTH_THRESHOLD:
                penalty = (
                    (self.REPUTATION_HEALTH_THRESHOLD - node.health)
                    * self.REPUTATION_PENALTY_RATE
                    * delta
                )
                economy.reputation -= penalty
                result.reputation_lost += penalty

    def _spread_tech_debt(self, graph: SystemGraph, delta: float) -> float:
        """Continuous debt spread along every arc. Returns the total spread."""
        snapshot = graph.tech_debt_snapshot()
        changes: Dict[int, float] = defaultdict(float)

        for source_idx, target_idx, edge in graph.arcs():
            changes[target_idx] += snapshot[source_idx] * edge.tech_debt_spread * delta

        for target_idx, amount in changes.items():
            graph.node_at(target_idx).add_tech_debt(amount)

        return sum(changes.values())


_default_driver = TickDriver()


def tick(
    delta: float,
    graphs: GraphsArg,
    economy: Economy,
    phase: SimulationPhase = SimulationPhase.RUNNING,
) -> TickResult:
    """Apply one tick with a shared TickDriver. See TickDriver.tick()."""
    return _default_driver.tick(delta, graphs, economy, phase)
