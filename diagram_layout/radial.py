"""
Radial positioning.

Two passes over a TreeNode hierarchy:
1. Allocate each node an angular span proportional to its leaf count and
   set its angle to the span's midpoint
2. Place each node on a ring whose radius grows with depth

Angles are in radians, measured in screen coordinates (y grows downward),
so increasing angle turns clockwise. 0 points right, -pi/2 points up.
"""

import math

from .graph import LayoutGraph
from .tree import TreeNode, count_leaves

# 12 o'clock
DEFAULT_START_ANGLE = -math.pi / 2


def assign_angles(tree: TreeNode, start_angle: float, end_angle: float) -> None:
    """
    Give `tree` the span [start_angle, end_angle) and divide it among its
    children by leaf count, in sibling order.

    The sign of (end_angle - start_angle) sets the rotational direction.
    """
    count_leaves(tree)
    tree.span = (start_angle, end_angle)
    tree.angle = (start_angle + end_angle) / 2

    if tree.is_leaf:
        return

    total_leaves = sum(count_leaves(child) for child in tree.children)
    total_span = end_angle - start_angle
    current = start_angle
    for i, child in enumerate(tree.children):
        if i == len(tree.children) - 1:
            # Close the span exactly
            child_end = end_angle
        else:
            child_end = current + total_span * child.leaf_count / total_leaves
        assign_angles(child, current, child_end)
        current = child_end


def position_rings(
    graph: LayoutGraph,
    tree: TreeNode,
    center: tuple[float, float],
    radius_gap: float,
    depth: int = 0
) -> None:
    """Center every node on its ring point around `center`."""
    angle = tree.angle if tree.angle is not None else 0.0
    radius = depth * radius_gap
    cx = center[0] + math.cos(angle) * radius
    cy = center[1] + math.sin(angle) * radius
    graph.set_position(tree.node, cx - tree.width / 2, cy - tree.height / 2)

    for child in tree.children:
        position_rings(graph, child, center, radius_gap, depth + 1)


def position_radial(
    graph: LayoutGraph,
    tree: TreeNode,
    radius_gap: float,
    clockwise: bool = True,
    start_angle: float = DEFAULT_START_ANGLE
) -> None:
    """Lay out `tree` in concentric rings around the root's current center."""
    root = tree.node
    center = (root.x + tree.width / 2, root.y + tree.height / 2)
    sweep = 2 * math.pi if clockwise else -2 * math.pi

    assign_angles(tree, start_angle, start_angle + sweep)
    position_rings(graph, tree, center, radius_gap)
