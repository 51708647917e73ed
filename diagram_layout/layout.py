"""
Layout entry points.

Provides the layout strategies the editor can apply to a graph:
- Tree: Hierarchy growing in one direction from a root
- Mindmap: Tree in one direction, both sides, or radial, with edge anchoring
- Fishbone: Cause/effect diagram along a spine
- Timeline: Chronological sequence of dated events

All layout functions modify nodes (and edge ports) in-place through the
LayoutGraph and return nothing. An empty graph is always a no-op.
"""

import logging
from typing import Optional

from .analysis import find_roots, pick_root
from .anchors import fix_mindmap_anchors
from .directional import position_balanced, position_subtree
from .fishbone import find_effect, position_fishbone
from .graph import LayoutGraph
from .models import (
    LayoutConfig,
    LayoutDirection,
    MindmapDirection,
    Node,
    SortOrder,
    TimelineOptions,
    TimelineOrientation,
)
from .radial import position_radial
from .timeline import connect_sequence, position_timeline, sort_chronologically
from .tree import branch_key, build_tree, pin_sibling_order

logger = logging.getLogger(__name__)

# UI directions to tree directions ("top" places children above)
MINDMAP_TREE_DIRECTIONS: dict[MindmapDirection, LayoutDirection] = {
    MindmapDirection.RIGHT: LayoutDirection.LR,
    MindmapDirection.LEFT: LayoutDirection.RL,
    MindmapDirection.TOP: LayoutDirection.BT,
    MindmapDirection.BOTTOM: LayoutDirection.TB,
}


def apply_tree_layout(
    graph: LayoutGraph,
    direction: LayoutDirection | str = LayoutDirection.LR,
    root: Optional[Node] = None,
    config: Optional[LayoutConfig] = None
) -> None:
    """
    Arrange the hierarchy below one root as a tree.

    The root keeps its current position; descendants are placed relative
    to it.

    Args:
        graph: Graph to arrange
        direction: LR, RL, TB or BT
        root: Root node (defaults to the first node without incoming edges)
        config: Sort and spacing preferences

    Raises:
        CyclicGraphError: If the hierarchy below the root has a cycle
        ValueError: If the direction is unknown
    """
    direction = LayoutDirection(direction)
    config = config or LayoutConfig()

    root = root or pick_root(graph)
    if root is None:
        return

    logger.debug("Tree layout %s from %s (%s)", direction.value, root.id, config.spacing_mode.value)
    tree = build_tree(graph, root, config)
    position_subtree(graph, tree, direction, config.level_gap, config.sibling_gap,
                     origin=(root.x, root.y))


def apply_mindmap_layout(
    graph: LayoutGraph,
    direction: MindmapDirection | str = MindmapDirection.RIGHT,
    root: Optional[Node] = None,
    config: Optional[LayoutConfig] = None
) -> None:
    """
    Arrange a mindmap and anchor its edges.

    Without an explicit root, every node with no incoming edges is laid
    out as an independent root (the first node if there is none).

    Both-sided and radial layouts record the sibling sequence they used
    in each child's `data["order"]` (children without one only), so a
    second run reproduces the first.

    Args:
        graph: Graph to arrange
        direction: right, left, top, bottom, both or radial
        root: Central topic to lay out from
        config: Sort and spacing preferences
    """
    direction = MindmapDirection(direction)
    config = config or LayoutConfig()

    nodes = graph.all_nodes()
    if not nodes:
        return

    if root is not None:
        roots = [root]
    else:
        roots = find_roots(graph) or [nodes[0]]

    for layout_root in roots:
        logger.debug("Mindmap layout %s from %s", direction.value, layout_root.id)
        if direction == MindmapDirection.RADIAL:
            tree = build_tree(graph, layout_root, config)
            clockwise = config.sort_order != SortOrder.COUNTER_CLOCKWISE
            position_radial(graph, tree, config.radius_gap, clockwise=clockwise)
            pin_sibling_order(graph, tree)
        elif direction == MindmapDirection.BOTH:
            tree = build_tree(graph, layout_root, config, root_key=branch_key)
            position_balanced(graph, tree, config.level_gap, config.sibling_gap)
            pin_sibling_order(graph, tree)
        else:
            apply_tree_layout(graph, MINDMAP_TREE_DIRECTIONS[direction], layout_root, config)

        fix_mindmap_anchors(graph, layout_root, direction)


def apply_fishbone_layout(graph: LayoutGraph, root: Optional[Node] = None) -> None:
    """
    Arrange a cause/effect diagram around `root` (the effect).

    Args:
        graph: Graph to arrange
        root: Effect node (defaults to the first node without outgoing edges)
    """
    effect = root or find_effect(graph)
    if effect is None:
        return
    logger.debug("Fishbone layout with effect %s", effect.id)
    position_fishbone(graph, effect)


def apply_timeline_layout(
    graph: LayoutGraph,
    orientation: TimelineOrientation | str = TimelineOrientation.HORIZONTAL,
    options: Optional[TimelineOptions] = None
) -> None:
    """
    Arrange every node along a timeline and link consecutive events.

    Args:
        graph: Graph to arrange
        orientation: horizontal or vertical
        options: Date sorting, labels and spacing switches
    """
    orientation = TimelineOrientation(orientation)
    options = options or TimelineOptions()

    nodes = graph.all_nodes()
    if not nodes:
        return

    ordered = sort_chronologically(nodes, orientation, options.sort_by_date)
    logger.debug("Timeline layout (%s) of %d events", orientation.value, len(ordered))
    position_timeline(graph, ordered, orientation, options)
    connect_sequence(graph, ordered, orientation)
