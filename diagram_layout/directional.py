"""
Axis-aligned tree positioning.

Places a TreeNode hierarchy growing in one of four directions (LR, RL,
TB, BT), centering each parent on the run of its children, and the
dual-sided mindmap variant that grows half the branches each way.
"""

import logging
from typing import Optional

from .graph import LayoutGraph
from .models import LayoutDirection
from .tree import TreeNode, subtree_extent

logger = logging.getLogger(__name__)


def position_subtree(
    graph: LayoutGraph,
    tree: TreeNode,
    direction: LayoutDirection,
    level_gap: float,
    sibling_gap: float,
    origin: Optional[tuple[float, float]] = None
) -> None:
    """
    Position `tree` and all of its descendants.

    Args:
        graph: Graph receiving the position writes
        tree: Hierarchy to place
        direction: Direction children grow in
        level_gap: Distance between a parent and its children
        sibling_gap: Distance between adjacent sibling subtrees
        origin: Top-left corner for the root (defaults to (0, 0))
    """
    x, y = origin if origin is not None else (0.0, 0.0)
    _position_node(graph, tree, LayoutDirection(direction), x, y, level_gap, sibling_gap)


def _position_node(
    graph: LayoutGraph,
    tree: TreeNode,
    direction: LayoutDirection,
    x: float,
    y: float,
    level_gap: float,
    sibling_gap: float
) -> None:
    graph.set_position(tree.node, x, y)

    if tree.is_leaf:
        return

    vertical = direction.is_vertical
    spans = [subtree_extent(child, sibling_gap, vertical).perpendicular for child in tree.children]
    total_span = sum(spans) + (len(tree.children) - 1) * sibling_gap

    if vertical:
        # Children run along x, centered under/over the parent
        current = x + tree.width / 2 - total_span / 2
        for child, span in zip(tree.children, spans):
            child_x = current + span / 2 - child.width / 2
            if direction == LayoutDirection.TB:
                child_y = y + tree.height + level_gap
            else:
                child_y = y - level_gap - child.height
            _position_node(graph, child, direction, child_x, child_y, level_gap, sibling_gap)
            current += span + sibling_gap
    else:
        # Children run along y, centered beside the parent
        current = y + tree.height / 2 - total_span / 2
        for child, span in zip(tree.children, spans):
            child_y = current + span / 2 - child.height / 2
            if direction == LayoutDirection.LR:
                child_x = x + tree.width + level_gap
            else:
                child_x = x - level_gap - child.width
            _position_node(graph, child, direction, child_x, child_y, level_gap, sibling_gap)
            current += span + sibling_gap


def split_balanced(tree: TreeNode) -> tuple[TreeNode, TreeNode]:
    """
    Split a root's branches between the right and left sides.

    Even-indexed children go right, odd-indexed go left, so branches
    alternate sides in sibling order rather than being balanced by size.
    """
    right = TreeNode(node=tree.node, width=tree.width, height=tree.height,
                     children=tree.children[0::2])
    left = TreeNode(node=tree.node, width=tree.width, height=tree.height,
                    children=tree.children[1::2])
    return right, left


def position_balanced(
    graph: LayoutGraph,
    tree: TreeNode,
    level_gap: float,
    sibling_gap: float
) -> None:
    """Lay out a mindmap with branches on both sides of the root."""
    root = tree.node
    origin = (root.x, root.y)
    right, left = split_balanced(tree)
    logger.debug("Balanced layout of %s: %d right, %d left",
                 root.id, len(right.children), len(left.children))

    if right.children:
        position_subtree(graph, right, LayoutDirection.LR, level_gap, sibling_gap, origin)
    if left.children:
        position_subtree(graph, left, LayoutDirection.RL, level_gap, sibling_gap, origin)

    # Placing children must never move the root
    graph.set_position(root, *origin)
