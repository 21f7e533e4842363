"""
System Graph

Directed multigraph of SystemNode vertices and SystemEdge arcs, plus a
name -> vertex id index built as nodes are added.

Holds the two graph-level algorithms:
    - simulate_tech_debt_spread(): one discrete contagion step
    - generate_defects(): per-node defect counts for the current state

Both read a consistent snapshot of node values so the result does not depend
on node or edge iteration order.
"""

from __future__ import annotations
import logging
import math
from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from .components import SystemNode, SystemEdge, clamp_percent

NODE_ATTR = "node"
EDGE_ATTR = "edge"


class NodeNotFoundError(KeyError):
    """An edge endpoint was not found in the name index."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Node '{self.name}' not found"


class DuplicateNodeError(ValueError):
    """Raised in strict mode when a node name is already indexed."""


class SystemGraph:
    """
    Live architecture graph.

    Vertex ids are integers handed out in insertion order and never reused.
    Node names are expected to be unique: adding a second node with the same
    name re-points the index to the new node and leaves the earlier one in the
    graph, unreachable by name. Pass strict_names=True to reject duplicates.

    Example:
        >>> graph = SystemGraph()
        >>> graph.add_node(SystemNode("api", tech_debt=40.0, complexity=5))
        >>> graph.add_node(SystemNode("db", contagion_risk=0.5))
        >>> graph.add_edge("api", "db", SystemEdge(tech_debt_spread=0.2))
        >>> graph.simulate_tech_debt_spread()
    """

    def __init__(self, strict_names: bool = False):
        self.logger = logging.getLogger(__name__)
        self.strict_names = strict_names

        self.graph = nx.MultiDiGraph()
        self.node_indices: Dict[str, int] = {}
        self._next_id = 0

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_node(self, node: SystemNode) -> int:
        """Insert a node, index it by name and return its id."""
        if node.name in self.node_indices:
            if self.strict_names:
                raise DuplicateNodeError(f"Node name '{node.name}' is already in use")
            self.logger.warning(
                f"Duplicate node name '{node.name}': index now points to the new node, "
                f"previous node {self.node_indices[node.name]} is unreachable by name"
            )

        idx = self._next_id
        self._next_id += 1
        self.graph.add_node(idx, **{NODE_ATTR: node})
        self.node_indices[node.name] = idx
        return idx

    def add_edge(self, source: str, target: str, edge: SystemEdge) -> None:
        """
        Insert a directed arc between two named nodes.

        Raises:
            NodeNotFoundError: If either name is not indexed. The graph is
                left unchanged.
        """
        source_idx = self.node_indices.get(source)
        if source_idx is None:
            raise NodeNotFoundError(source)
        target_idx = self.node_indices.get(target)
        if target_idx is None:
            raise NodeNotFoundError(target)

        self.graph.add_edge(source_idx, target_idx, **{EDGE_ATTR: edge})

    # =========================================================================
    # Queries
    # =========================================================================

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, name: object) -> bool:
        return name in self.node_indices

    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def node_id(self, name: str) -> Optional[int]:
        return self.node_indices.get(name)

    def node_at(self, idx: int) -> SystemNode:
        return self.graph.nodes[idx][NODE_ATTR]

    def get_node(self, name: str) -> Optional[SystemNode]:
        """Look up a node by name, None when absent."""
        idx = self.node_indices.get(name)
        if idx is None:
            return None
        return self.node_at(idx)

    def nodes(self) -> Iterator[SystemNode]:
        """All nodes in insertion order, including ones shadowed by a duplicate name."""
        for _, data in self.graph.nodes(data=True):
            yield data[NODE_ATTR]

    def edges(self) -> Iterator[Tuple[SystemNode, SystemNode, SystemEdge]]:
        """All arcs as (source, target, edge) triples."""
        for u, v, data in self.graph.edges(data=True):
            yield self.node_at(u), self.node_at(v), data[EDGE_ATTR]

    def arcs(self) -> Iterator[Tuple[int, int, SystemEdge]]:
        """All arcs as (source id, target id, edge) triples."""
        for u, v, data in self.graph.edges(data=True):
            yield u, v, data[EDGE_ATTR]

    def incoming(self, name: str) -> List[Tuple[SystemNode, SystemEdge]]:
        """(source node, edge) pairs for every arc into the named node."""
        idx = self.node_indices.get(name)
        if idx is None:
            raise NodeNotFoundError(name)
        return [
            (self.node_at(u), data[EDGE_ATTR])
            for u, _, data in self.graph.in_edges(idx, data=True)
        ]

    def total_complexity(self) -> int:
        """Sum of complexity over all nodes."""
        return sum(node.complexity for node in self.nodes())

    def average_tech_debt(self) -> float:
        """Mean tech debt over all nodes, 0.0 for an empty graph."""
        count = self.node_count()
        if count == 0:
            return 0.0
        return sum(node.tech_debt for node in self.nodes()) / count

    # =========================================================================
    # Simulation
    # =========================================================================

    def tech_debt_snapshot(self) -> Dict[int, float]:
        """Current tech debt of every vertex, keyed by id."""
        return {idx: data[NODE_ATTR].tech_debt for idx, data in self.graph.nodes(data=True)}

    def simulate_tech_debt_spread(self) -> None:
        """
        Advance tech debt contagion by one discrete step.

        For every node N with incoming arcs:
            contribution(S -> N) = debt(S) * spread(E) * contagion_risk(N) * (1 + complexity(S) / 10)
            debt(N) = min(100, debt(N) + sum(contributions))

        All debts on the right-hand side come from a snapshot taken before
        any node is updated. Nodes without incoming arcs are not touched.
        """
        snapshot = self.tech_debt_snapshot()
        before = self.average_tech_debt()

        for idx in self.graph.nodes:
            if self.graph.in_degree(idx) == 0:
                continue

            node = self.node_at(idx)
            contagion_risk = node.contagion_risk
            incoming_debt = 0.0
            for source_idx, _, data in self.graph.in_edges(idx, data=True):
                source = self.node_at(source_idx)
                incoming_debt += (
                    snapshot[source_idx]
                    * data[EDGE_ATTR].tech_debt_spread
                    * contagion_risk
                    * source.complexity_multiplier
                )

            node.tech_debt = clamp_percent(snapshot[idx] + incoming_debt)

        self.logger.debug(
            f"Tech debt spread step: average {before:.2f} -> {self.average_tech_debt():.2f}"
        )

    def generate_defects(self) -> List[Tuple[str, int]]:
        """
        Defect counts for the current state, as (name, count) pairs.

        count = floor(defect_rate * (1 + tech_debt / 100) ** 2 * (1 + complexity / 10))

        Nodes with zero defects are omitted. Does not modify the graph.
        """
        defects = []
        for node in self.nodes():
            tech_debt_factor = node.tech_debt / 100.0
            expected = (
                node.defect_rate
                * (1.0 + tech_debt_factor) ** 2
                * node.complexity_multiplier
            )
            # Non-finite rates count as no defects
            count = math.floor(expected) if math.isfinite(expected) else 0
            if count > 0:
                defects.append((node.name, count))
        return defects

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes()],
            "edges": [
                {"source": source.name, "target": target.name, **edge.to_dict()}
                for source, target, edge in self.edges()
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], strict_names: bool = False) -> "SystemGraph":
        """
        Rebuild a graph from its to_dict() form.

        Edges are resolved by name, so a missing endpoint raises NodeNotFoundError.
        """
        graph = cls(strict_names=strict_names)
        for node_data in data.get("nodes", []):
            graph.add_node(SystemNode.from_dict(node_data))
        for edge_data in data.get("edges", []):
            edge_data = dict(edge_data)
            source = edge_data.pop("source")
            target = edge_data.pop("target")
            graph.add_edge(source, target, SystemEdge.from_dict(edge_data))
        return graph

    def __repr__(self) -> str:
        return f"SystemGraph(nodes={self.node_count()}, edges={self.edge_count()})"
