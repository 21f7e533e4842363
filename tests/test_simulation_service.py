"""
Tests for application/services/simulation_service.py

Tests for:
    - Phase transitions
    - Tick runs and the phase guard
    - Sprint cycle (discrete contagion + defects)
    - Architecture switching and reporting
"""

import random

import pytest

from devops_entropy.application.services import SimulationService
from devops_entropy.config import Settings
from devops_entropy.domain.models import (
    ArchitectureType,
    Economy,
    SimulationPhase,
    SystemGraph,
    SystemSummary,
)


@pytest.fixture
def sim():
    return SimulationService(settings=Settings(seed=1))


# =============================================================================
# Phase
# =============================================================================

class TestPhase:
    """Tests for the simulation phase state machine."""

    def test_starts_in_planning(self, sim):
        assert sim.phase is SimulationPhase.PLANNING
        assert sim.is_running is False

    def test_start_and_pause(self, sim):
        sim.start()
        assert sim.phase is SimulationPhase.RUNNING
        sim.pause()
        assert sim.phase is SimulationPhase.PAUSED

    def test_redundant_transitions_ignored(self, sim):
        sim.start()
        sim.start()
        assert sim.is_running
        sim.pause()
        sim.pause()
        assert sim.phase is SimulationPhase.PAUSED

    def test_defaults_from_settings(self):
        settings = Settings(
            starting_money=500.0,
            starting_reputation=80.0,
            architecture=ArchitectureType.EVENT_DRIVEN,
        )
        sim = SimulationService(settings=settings)
        assert sim.economy.money == 500.0
        assert sim.economy.reputation == 80.0
        assert "event_bus" in sim.graph


# =============================================================================
# Ticks
# =============================================================================

class TestTicks:
    """Tests for advance() and run()."""

    def test_advance_skipped_while_planning(self, sim):
        result = sim.advance(1.0)
        assert result.skipped is True
        assert sim.economy.money == 10000.0

    def test_advance_when_running(self, sim):
        sim.start()
        result = sim.advance(1.0)
        assert result.skipped is False
        # 500*1.3 + 300*1.2 + 100*1.1
        assert result.money_spent == pytest.approx(1120.0)
        assert sim.economy.money == pytest.approx(8880.0)

    def test_advance_uses_settings_delta(self):
        sim = SimulationService(settings=Settings(tick_delta=0.5))
        sim.start()
        assert sim.advance().delta == 0.5

    def test_run_restores_phase(self, sim):
        results = sim.run(ticks=3, delta=0.5)
        assert len(results) == 3
        assert not any(r.skipped for r in results)
        assert sim.phase is SimulationPhase.PLANNING

    def test_run_zero_ticks(self, sim):
        assert sim.run(ticks=0) == []
        assert sim.economy.money == 10000.0

    def test_run_negative_ticks(self, sim):
        with pytest.raises(ValueError):
            sim.run(ticks=-1)

    def test_run_restores_phase_on_error(self, sim):
        with pytest.raises(ValueError):
            sim.run(ticks=2, delta=-1.0)
        assert sim.phase is SimulationPhase.PLANNING

    def test_injected_graph_and_economy(self, pair_graph):
        economy = Economy(money=100.0)
        sim = SimulationService(graph=pair_graph, economy=economy)
        sim.run(ticks=1, delta=1.0)
        assert sim.graph is pair_graph
        assert economy.money == pytest.approx(0.0)

    def test_injected_empty_graph_kept(self):
        """An empty graph is still the caller's graph, not a cue for the default."""
        graph = SystemGraph()
        economy = Economy(money=0.0, reputation=0.0)
        sim = SimulationService(graph=graph, economy=economy)

        assert sim.graph is graph
        assert sim.economy is economy
        assert sim.summary().components == 0
        assert sim.run(ticks=2, delta=1.0)[0].nodes == 0


# =============================================================================
# Sprint Cycle
# =============================================================================

class TestSprintCycle:
    """Tests for the discrete contagion cadence."""

    def test_spread_tech_debt_returns_average(self, sim):
        before = sim.graph.average_tech_debt()
        after = sim.spread_tech_debt(steps=2)
        assert after >= before
        assert after == pytest.approx(sim.graph.average_tech_debt())

    def test_end_sprint_report(self, sim):
        report = sim.end_sprint()
        assert report["sprint"] == 1
        assert sim.economy.sprint == 2
        assert report["average_tech_debt_after"] >= report["average_tech_debt_before"]
        assert isinstance(report["defects"], dict)
        assert report["economy"]["sprint"] == 2

    def test_end_sprint_does_not_tick(self, sim):
        sim.end_sprint()
        assert sim.economy.money == 10000.0
        assert all(node.health == 100.0 for node in sim.graph.nodes())

    def test_collect_defects(self, sim):
        sim.graph.get_node("core_service").defect_rate = 2.0
        defects = dict(sim.collect_defects())
        # 2.0 * 1.3^2 * 2.5
        assert defects["core_service"] == 8


# =============================================================================
# Architecture and Reporting
# =============================================================================

class TestArchitecture:
    """Tests for switch_architecture() and summary()."""

    def test_switch_to_next(self, sim):
        graph = sim.switch_architecture()
        assert sim.economy.current_architecture is ArchitectureType.MICROSERVICES
        assert graph is sim.graph
        assert graph.edge_count() == 3

    def test_switch_by_name(self, sim):
        sim.switch_architecture("event-driven")
        assert sim.economy.current_architecture is ArchitectureType.EVENT_DRIVEN
        assert "producer_service" in sim.graph

    def test_summary(self, sim):
        summary = sim.summary()
        assert isinstance(summary, SystemSummary)
        assert summary.architecture == "Monolith"
        assert summary.phase == "planning"
        assert summary.components == 3
        assert summary.dependencies == 2
        assert summary.total_complexity == 23
        assert summary.average_tech_debt == pytest.approx(20.0)
        assert summary.unhealthy_critical == []

    def test_summary_flags_unhealthy_critical(self, sim):
        sim.graph.get_node("database").health = 30.0
        summary = sim.summary()
        assert summary.unhealthy_critical == ["database"]
        assert summary.to_dict()["unhealthy_critical"] == ["database"]

    def test_sample_latencies_reproducible(self):
        first = SimulationService(rng=random.Random(5)).sample_latencies()
        second = SimulationService(rng=random.Random(5)).sample_latencies()
        assert first == second
        assert set(first) == {"core_service", "database", "cache"}
