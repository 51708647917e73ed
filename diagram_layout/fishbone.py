"""
Fishbone (Ishikawa) layout.

The effect node sits at the head of the fish; its causes are the sources
of its incoming edges (cause -> effect), arranged along a horizontal spine
in alternating top and bottom branches. Each cause's own incoming sources
(sub-causes) are stacked away from the spine.
"""

import logging
from typing import Optional

from .graph import LayoutGraph
from .models import Node, Port
from .tree import explicit_order

logger = logging.getLogger(__name__)

# Head of the fish
EFFECT_X = 800
EFFECT_Y = 300

SPINE_LENGTH = 600
CATEGORY_GAP = 150      # Horizontal distance between causes on one side
BRANCH_OFFSET = 80      # Vertical distance from spine to a cause
BOTTOM_STAGGER = 75     # Bottom causes shift right so branches interleave
SUB_CAUSE_INDENT = 20
SUB_CAUSE_OFFSET = 60   # Distance from cause to its first sub-cause
SUB_CAUSE_STEP = 50


def find_effect(graph: LayoutGraph) -> Optional[Node]:
    """First node with no outgoing edges, else the first node."""
    nodes = graph.all_nodes()
    if not nodes:
        return None
    for node in nodes:
        if not graph.outgoing_edges(node):
            return node
    return nodes[0]


def incoming_sources(graph: LayoutGraph, node: Node) -> list[Node]:
    """
    Sources of a node's incoming edges, in edge order.

    Nodes with an explicit `order` are stably sorted by it; position is
    never consulted so re-running the layout keeps the same branches.
    """
    sources = []
    seen: set[str] = set()
    for edge in graph.incoming_edges(node):
        source = graph.cell_by_id(edge.source)
        if source is None or source.id in seen or source.id == node.id:
            continue
        seen.add(source.id)
        sources.append(source)

    def key(n: Node):
        order = explicit_order(n)
        return (0, order) if order is not None else (1, 0)

    return sorted(sources, key=key)


def position_fishbone(graph: LayoutGraph, effect: Node) -> None:
    """Place `effect` at the head and arrange its causes along the spine."""
    graph.set_position(effect, EFFECT_X, EFFECT_Y)

    causes = incoming_sources(graph, effect)
    if not causes:
        return

    top_causes = causes[0::2]
    bottom_causes = causes[1::2]
    logger.debug("Fishbone for %s: %d top, %d bottom causes",
                 effect.id, len(top_causes), len(bottom_causes))

    spine_start = EFFECT_X - SPINE_LENGTH
    for i, cause in enumerate(top_causes):
        x = spine_start + i * CATEGORY_GAP
        y = EFFECT_Y - BRANCH_OFFSET
        _place_cause(graph, effect, cause, x, y, upward=True)

    for i, cause in enumerate(bottom_causes):
        x = spine_start + i * CATEGORY_GAP + BOTTOM_STAGGER
        y = EFFECT_Y + BRANCH_OFFSET
        _place_cause(graph, effect, cause, x, y, upward=False)


def _place_cause(graph: LayoutGraph, effect: Node, cause: Node, x: float, y: float, upward: bool) -> None:
    graph.set_position(cause, x, y)

    sign = -1 if upward else 1
    sub_causes = [n for n in incoming_sources(graph, cause) if n.id != effect.id]
    for j, sub_cause in enumerate(sub_causes):
        graph.set_position(
            sub_cause,
            x - SUB_CAUSE_INDENT,
            y + sign * (SUB_CAUSE_OFFSET + j * SUB_CAUSE_STEP)
        )

    for edge in graph.find_edges(cause, effect):
        graph.set_ports(edge, Port.RIGHT, Port.LEFT)
