"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the devops-entropy simulation.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "graph"         # Run only graph tests
    pytest tests/ --quick            # Skip slow and integration tests
"""

import pytest
import random
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from devops_entropy.domain.models import Economy, SystemEdge, SystemGraph, SystemNode


# Markers skipped by --quick
QUICK_SKIPPED_MARKERS = ("slow", "integration")


# =============================================================================
# Markers and Options
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long simulation runs")
    config.addinivalue_line("markers", "integration: end-to-end runs through the CLI")


def pytest_addoption(parser):
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Only run unit tests (skip slow and integration tests)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--quick"):
        return
    for item in items:
        marked = [name for name in QUICK_SKIPPED_MARKERS if name in item.keywords]
        if marked:
            item.add_marker(pytest.mark.skip(reason=f"{marked[0]} test skipped by --quick"))


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def empty_graph() -> SystemGraph:
    return SystemGraph()


@pytest.fixture
def pair_graph() -> SystemGraph:
    """
    A -> B with a 0.5 spread edge.

    A: debt 50, complexity 0, cost 100, critical
    B: debt 0, contagion risk 1.0
    """
    graph = SystemGraph()
    graph.add_node(SystemNode(
        name="A",
        tech_debt=50.0,
        complexity=0,
        operating_cost=100.0,
        critical_path=True,
    ))
    graph.add_node(SystemNode(name="B", tech_debt=0.0, complexity=0, contagion_risk=1.0))
    graph.add_edge("A", "B", SystemEdge(name="a_to_b", tech_debt_spread=0.5))
    return graph


@pytest.fixture
def cycle_graph() -> SystemGraph:
    """X -> Y -> Z -> X, every node with debt 40 and full contagion risk."""
    graph = SystemGraph()
    for name in ("X", "Y", "Z"):
        graph.add_node(SystemNode(name=name, tech_debt=40.0, complexity=0, contagion_risk=1.0))
    graph.add_edge("X", "Y", SystemEdge(tech_debt_spread=0.5))
    graph.add_edge("Y", "Z", SystemEdge(tech_debt_spread=0.5))
    graph.add_edge("Z", "X", SystemEdge(tech_debt_spread=0.5))
    return graph


@pytest.fixture
def economy() -> Economy:
    return Economy(money=1000.0, reputation=50.0)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible sampling."""
    return random.Random(42)
