"""
Graph access for the layout engine.

This module implements:
- The narrow query/write interface every layout pass talks to (LayoutGraph)
- DiagramGraph, an indexed adapter over a Diagram with O(1) node/edge lookups

Layout passes never touch a Diagram directly; they read connectivity and
write positions/ports through this interface so the rendering layer sees
in-place updates on its own Node/Edge objects.
"""

import logging
from typing import Any, Optional, Protocol

from .models import Diagram, Edge, Node, Port

logger = logging.getLogger(__name__)


class LayoutGraph(Protocol):
    """What a layout pass may read from and write to a graph."""

    def all_nodes(self) -> list[Node]: ...

    def cell_by_id(self, cell_id: str) -> Optional[Node]: ...

    def outgoing_edges(self, node: Node) -> list[Edge]: ...

    def incoming_edges(self, node: Node) -> list[Edge]: ...

    def find_edges(self, source: Node, target: Node) -> list[Edge]: ...

    def set_position(self, node: Node, x: float, y: float) -> None: ...

    def set_ports(self, edge: Edge, source_port: Port, target_port: Port) -> None: ...

    def add_edge(self, source: Node, target: Node,
                 source_port: Port, target_port: Port) -> Edge: ...

    def get_label(self, node: Node) -> str: ...

    def set_label(self, node: Node, text: str) -> None: ...

    def set_data(self, node: Node, key: str, value: Any) -> None: ...


class DiagramGraph:
    """
    LayoutGraph implementation over a single Diagram.

    Nodes and edges are the Diagram's own objects, so positions and ports
    written here are visible to whoever owns the Diagram.

    Edge lists preserve the Diagram's edge order; outgoing edges of a node
    therefore come back in insertion order.
    """

    def __init__(self, diagram: Diagram):
        self._diagram = diagram

        # O(1) lookup indexes
        self._node_index: dict[str, Node] = {}          # node_id -> Node
        self._outgoing: dict[str, list[Edge]] = {}      # node_id -> edges out
        self._incoming: dict[str, list[Edge]] = {}      # node_id -> edges in
        self._rebuild_indexes()

    # --- Index Management ---

    def _rebuild_indexes(self):
        """Rebuild all indexes from the current diagram state."""
        self._node_index.clear()
        self._outgoing.clear()
        self._incoming.clear()

        for node in self._diagram.nodes:
            self._node_index[node.id] = node

        for edge in self._diagram.edges:
            self._index_edge(edge)

    def _index_edge(self, edge: Edge):
        """Add an edge to the indexes, ignoring dangling endpoints."""
        if edge.source not in self._node_index or edge.target not in self._node_index:
            logger.debug("Edge %s has a missing endpoint, not indexed", edge.id)
            return
        self._outgoing.setdefault(edge.source, []).append(edge)
        self._incoming.setdefault(edge.target, []).append(edge)

    # --- Properties ---

    @property
    def diagram(self) -> Diagram:
        return self._diagram

    # --- Queries ---

    def all_nodes(self) -> list[Node]:
        return list(self._diagram.nodes)

    def cell_by_id(self, cell_id: str) -> Optional[Node]:
        return self._node_index.get(cell_id)

    def require_node(self, node_id: str) -> Node:
        """Look up a node, raising KeyError if it does not exist."""
        node = self._node_index.get(node_id)
        if node is None:
            raise KeyError(f"Node not found: {node_id}")
        return node

    def outgoing_edges(self, node: Node) -> list[Edge]:
        return list(self._outgoing.get(node.id, []))

    def incoming_edges(self, node: Node) -> list[Edge]:
        return list(self._incoming.get(node.id, []))

    def find_edges(self, source: Node, target: Node) -> list[Edge]:
        return [e for e in self._outgoing.get(source.id, []) if e.target == target.id]

    def get_label(self, node: Node) -> str:
        return node.label

    # --- Mutations ---

    def set_position(self, node: Node, x: float, y: float) -> None:
        node.x = x
        node.y = y

    def set_ports(self, edge: Edge, source_port: Port, target_port: Port) -> None:
        """Fix both ends of an edge and drop its cached route."""
        edge.source_side = source_port
        edge.target_side = target_port
        edge.waypoints = []

    def add_edge(self, source: Node, target: Node,
                 source_port: Port, target_port: Port) -> Edge:
        edge = Edge(
            source=source.id,
            target=target.id,
            source_side=source_port,
            target_side=target_port,
            color="#5F95FF",
        )
        self._diagram.edges.append(edge)
        self._index_edge(edge)
        return edge

    def set_label(self, node: Node, text: str) -> None:
        node.label = text

    def set_data(self, node: Node, key: str, value: Any) -> None:
        node.data[key] = value
