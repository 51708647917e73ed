"""
Edge anchoring after a mindmap layout.

Assigns fixed ports to every edge below a root so edges leave and enter
the node faces that match the layout direction.
"""

import logging
from typing import Optional

from .graph import LayoutGraph
from .models import MindmapDirection, Node, Port
from .tree import CyclicGraphError

logger = logging.getLogger(__name__)

# Port pairs (source, target) for axis-aligned directions
FIXED_PORTS: dict[MindmapDirection, tuple[Port, Port]] = {
    MindmapDirection.RIGHT: (Port.RIGHT, Port.LEFT),
    MindmapDirection.LEFT: (Port.LEFT, Port.RIGHT),
    MindmapDirection.TOP: (Port.TOP, Port.BOTTOM),
    MindmapDirection.BOTTOM: (Port.BOTTOM, Port.TOP),
}


def optimal_sides(source: Node, target: Node) -> tuple[Port, Port]:
    """Calculate connection sides based on relative node positions."""
    sx, sy = source.center()
    tx, ty = target.center()

    dx = tx - sx
    dy = ty - sy

    if abs(dx) >= abs(dy):
        return (Port.RIGHT, Port.LEFT) if dx >= 0 else (Port.LEFT, Port.RIGHT)
    else:
        return (Port.BOTTOM, Port.TOP) if dy >= 0 else (Port.TOP, Port.BOTTOM)


def horizontal_sides(source: Node, target: Node) -> tuple[Port, Port]:
    """Left/right sides chosen from the horizontal offset only."""
    if target.center()[0] >= source.center()[0]:
        return (Port.RIGHT, Port.LEFT)
    return (Port.LEFT, Port.RIGHT)


def sides_for(direction: MindmapDirection, source: Node, target: Node) -> tuple[Port, Port]:
    if direction == MindmapDirection.RADIAL:
        return optimal_sides(source, target)
    if direction == MindmapDirection.BOTH:
        return horizontal_sides(source, target)
    return FIXED_PORTS[direction]


def fix_mindmap_anchors(graph: LayoutGraph, root: Node, direction: MindmapDirection | str) -> None:
    """
    Fix edge ports for every edge below `root`.

    Args:
        graph: Graph owning the edges
        root: Node to start from
        direction: Mindmap direction the hierarchy was laid out with

    Raises:
        CyclicGraphError: If an edge leads back to a node on the current path
    """
    direction = MindmapDirection(direction)
    _fix(graph, root, direction, root.id, path=[root.id], visited={root.id})


def _fix(
    graph: LayoutGraph,
    node: Node,
    direction: MindmapDirection,
    root_id: str,
    path: list[str],
    visited: set[str]
) -> None:
    for edge in graph.outgoing_edges(node):
        target: Optional[Node] = graph.cell_by_id(edge.target)
        if target is None:
            continue
        if target.id in path:
            raise CyclicGraphError(root_id, target.id)

        source_port, target_port = sides_for(direction, node, target)
        graph.set_ports(edge, source_port, target_port)

        if target.id in visited:
            continue
        visited.add(target.id)
        path.append(target.id)
        _fix(graph, target, direction, root_id, path, visited)
        path.pop()
