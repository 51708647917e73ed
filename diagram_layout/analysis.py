"""
Hierarchy analysis - Root discovery and structure summaries.

Provides the graph queries layout passes and validation share:
- Root selection heuristic (no incoming edges, else first node)
- Descendant walks and hierarchy statistics
- Cycle discovery for pre-layout checks
"""

from dataclasses import dataclass
from typing import Optional

from .graph import LayoutGraph
from .models import Node


@dataclass
class HierarchySummary:
    """Shape of the hierarchy below one root."""
    root_id: str
    node_count: int
    depth: int          # Edge hops from the root to the deepest node
    leaf_count: int

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "root_id": self.root_id,
            "node_count": self.node_count,
            "depth": self.depth,
            "leaf_count": self.leaf_count,
        }


def find_roots(graph: LayoutGraph) -> list[Node]:
    """Nodes with no incoming edges, in graph iteration order."""
    return [n for n in graph.all_nodes() if not graph.incoming_edges(n)]


def pick_root(graph: LayoutGraph) -> Optional[Node]:
    """
    Choose a layout root when the caller gave none.

    The first node with no incoming edges, else the first node. When
    several nodes qualify the result depends on the graph's iteration
    order; callers that care should pass a root explicitly.
    """
    nodes = graph.all_nodes()
    if not nodes:
        return None
    roots = find_roots(graph)
    return roots[0] if roots else nodes[0]


def children_of(graph: LayoutGraph, node: Node) -> list[Node]:
    """Targets of a node's outgoing edges, in edge order."""
    result = []
    for edge in graph.outgoing_edges(node):
        target = graph.cell_by_id(edge.target)
        if target is not None:
            result.append(target)
    return result


def descendants(graph: LayoutGraph, node: Node) -> list[Node]:
    """
    All nodes reachable from `node` through outgoing edges (BFS order).

    Safe on cyclic graphs; `node` itself is never included.
    """
    visited: set[str] = {node.id}
    result: list[Node] = []
    queue = [node]

    while queue:
        current = queue.pop(0)
        for child in children_of(graph, current):
            if child.id in visited:
                continue
            visited.add(child.id)
            result.append(child)
            queue.append(child)

    return result


def hierarchy_summary(graph: LayoutGraph, root: Node) -> HierarchySummary:
    """
    Summarize the hierarchy below `root`.

    Each node counts once, at the depth it is first reached (BFS).
    """
    depths: dict[str, int] = {root.id: 0}
    leaves = 0
    queue = [root]

    while queue:
        current = queue.pop(0)
        children = children_of(graph, current)
        if not children:
            leaves += 1
        for child in children:
            if child.id in depths:
                continue
            depths[child.id] = depths[current.id] + 1
            queue.append(child)

    return HierarchySummary(
        root_id=root.id,
        node_count=len(depths),
        depth=max(depths.values()),
        leaf_count=leaves,
    )


def find_cycles(graph: LayoutGraph) -> list[list[str]]:
    """
    Find directed cycles using DFS.

    Returns each cycle once as a list of node IDs, closed by repeating
    its first node. Self loops come back as [id, id].
    """
    cycles: list[list[str]] = []
    seen: set[frozenset[str]] = set()
    finished: set[str] = set()

    def dfs(current: Node, path: list[str], on_path: set[str]):
        for child in children_of(graph, current):
            if child.id in on_path:
                cycle = path[path.index(child.id):] + [child.id]
                key = frozenset(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle)
            elif child.id not in finished:
                path.append(child.id)
                on_path.add(child.id)
                dfs(child, path, on_path)
                on_path.discard(child.id)
                path.pop()
        finished.add(current.id)

    for node in graph.all_nodes():
        if node.id not in finished:
            dfs(node, [node.id], {node.id})

    return cycles
