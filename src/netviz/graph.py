"""
Read-only graph model with lookup indices and NetworkX-backed statistics.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx
import numpy as np

from .models import (
    DataIntegrityError,
    Edge,
    GraphDataset,
    NetworkStats,
    Node,
    NodeCategory,
    NodeNotFoundError,
    StrengthClass,
)

logger = logging.getLogger(__name__)


class GraphModel:
    """
    Validated, indexed view over a GraphDataset.

    The model never changes after construction, so derived arrays and the
    NetworkX graph are built once and shared by every reader.
    """

    def __init__(self, dataset: GraphDataset) -> None:
        self._validate(dataset)
        self.dataset = dataset
        self._nodes: Tuple[Node, ...] = tuple(dataset.nodes.values())
        self._edges: Tuple[Edge, ...] = tuple(dataset.edges)
        self._index: Dict[str, Node] = dict(dataset.nodes)
        touching: Dict[str, List[Edge]] = {node.id: [] for node in self._nodes}
        for edge in self._edges:
            touching[edge.source_id].append(edge)
            if edge.target_id != edge.source_id:
                touching[edge.target_id].append(edge)
        self._touching: Dict[str, Tuple[Edge, ...]] = {
            node_id: tuple(edges) for node_id, edges in touching.items()
        }
        self.positions = np.array(
            [(node.position.x, node.position.y) for node in self._nodes], dtype=np.float64
        ).reshape(-1, 2)
        self.radii = np.array([node.visual_size for node in self._nodes], dtype=np.float64)
        self.graph = nx.Graph()
        for node in self._nodes:
            self.graph.add_node(node.id, category=node.category.value)
        for edge in self._edges:
            self.graph.add_edge(
                edge.source_id, edge.target_id, strength=edge.strength, strength_class=edge.strength_class
            )
        logger.info("Graph model built with %d nodes and %d edges", len(self._nodes), len(self._edges))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def _validate(dataset: GraphDataset) -> None:
        for key, node in dataset.nodes.items():
            if key != node.id:
                raise DataIntegrityError(f"Node keyed as {key!r} carries id {node.id!r}")
        self_nodes = [n.id for n in dataset.nodes.values() if n.category == NodeCategory.SELF]
        if len(self_nodes) != 1:
            raise DataIntegrityError(
                f"Expected exactly one node with category 'self', found {len(self_nodes)}"
            )
        seen_edges = set()
        for edge in dataset.edges:
            if edge.id in seen_edges:
                raise DataIntegrityError(f"Duplicate edge id: {edge.id}")
            seen_edges.add(edge.id)
            for endpoint in (edge.source_id, edge.target_id):
                if endpoint not in dataset.nodes:
                    raise DataIntegrityError(
                        f"Edge {edge.id} references unknown node {endpoint!r}"
                    )

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_node(self, node_id: str) -> Node:
        try:
            return self._index[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def has_node(self, node_id: str) -> bool:
        return node_id in self._index

    def all_nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    def all_edges(self) -> Tuple[Edge, ...]:
        return self._edges

    def edges_touching(self, node_id: str) -> Tuple[Edge, ...]:
        if node_id not in self._touching:
            raise NodeNotFoundError(node_id)
        return self._touching[node_id]

    def neighbors(self, node_id: str) -> List[Node]:
        neighbors: List[Node] = []
        seen = set()
        for edge in self.edges_touching(node_id):
            other = edge.target_id if edge.source_id == node_id else edge.source_id
            if other in seen:
                continue
            seen.add(other)
            neighbors.append(self._index[other])
        return neighbors

    def self_node(self) -> Node:
        for node in self._nodes:
            if node.category == NodeCategory.SELF:
                return node
        raise DataIntegrityError("Graph has no 'self' node")

    def __len__(self) -> int:
        return len(self._nodes)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def stats(self) -> NetworkStats:
        total_nodes = self.graph.number_of_nodes()
        # Parallel records between the same pair collapse into one connection.
        total_edges = self.graph.number_of_edges()
        by_class = {cls: 0 for cls in StrengthClass}
        for _, _, strength_class in self.graph.edges(data="strength_class"):
            by_class[strength_class] += 1

        average_path = 0.0
        if total_nodes:
            largest = max(nx.connected_components(self.graph), key=len)
            if len(largest) > 1:
                average_path = nx.average_shortest_path_length(self.graph.subgraph(largest))

        return NetworkStats(
            total_nodes=total_nodes,
            total_edges=total_edges,
            average_connections=(2 * total_edges / total_nodes) if total_nodes else 0.0,
            network_density=nx.density(self.graph),
            strong_connections=by_class[StrengthClass.STRONG],
            medium_connections=by_class[StrengthClass.MEDIUM],
            weak_connections=by_class[StrengthClass.WEAK],
            clustering_coefficient=nx.average_clustering(self.graph) if total_nodes else 0.0,
            average_shortest_path=float(average_path),
        )

    def connection_path(self, source_id: str, target_id: str) -> Optional[List[str]]:
        """
        Shortest chain of people linking two nodes, or None if they are not connected.
        """
        self.get_node(source_id)
        self.get_node(target_id)
        try:
            return nx.shortest_path(self.graph, source_id, target_id)
        except nx.NetworkXNoPath:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.model_dump(mode="json") for node in self._nodes],
            "edges": [edge.model_dump(mode="json") for edge in self._edges],
            "stats": self.stats().model_dump(),
        }
