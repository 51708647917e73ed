"""
Hierarchy building for tree-shaped layouts.

Walks a LayoutGraph from a root along outgoing edges and produces a
TreeNode hierarchy with a deterministic sibling order. Every tree-based
layout (directional, balanced, radial) starts here so that switching
between them keeps siblings in the same sequence.
"""

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Callable, NamedTuple, Optional

from .graph import LayoutGraph
from .models import LayoutConfig, Node, SortOrder

logger = logging.getLogger(__name__)


class LayoutError(ValueError):
    """Base class for errors raised by layout passes."""


class CyclicGraphError(LayoutError):
    """Connectivity is not a forest from the chosen root."""

    def __init__(self, root_id: str, node_id: str):
        self.root_id = root_id
        self.node_id = node_id
        super().__init__(
            f"Connectivity is not a forest from root '{root_id}': "
            f"cycle closes at node '{node_id}'"
        )


@dataclass
class TreeNode:
    """A node wrapped for one layout pass. Discarded afterwards."""
    node: Node
    children: list["TreeNode"] = field(default_factory=list)
    width: float = 0
    height: float = 0
    depth: int = 0
    # Radial layout only
    leaf_count: Optional[int] = None
    angle: Optional[float] = None
    span: Optional[tuple[float, float]] = None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self):
        """Yield this node and every descendant, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()


def explicit_order(node: Node) -> Optional[float]:
    """Return the node's numeric `order` value, or None."""
    value = node.data.get("order")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def compare_siblings(a: Node, b: Node, sort_order: SortOrder = SortOrder.TOP_TO_BOTTOM) -> int:
    """
    Sibling comparator shared by every topology.

    Explicit `order` wins; nodes carrying one sort before nodes without.
    Otherwise fall back to current position along the preferred axis.
    """
    oa = explicit_order(a)
    ob = explicit_order(b)
    if oa is not None and ob is not None and oa != ob:
        return -1 if oa < ob else 1
    if oa is not None and ob is None:
        return -1
    if oa is None and ob is not None:
        return 1

    if sort_order == SortOrder.LEFT_TO_RIGHT:
        ka, kb = (a.x, a.y), (b.x, b.y)
    else:
        # top-to-bottom, and the rotational preferences
        ka, kb = (a.y, a.x), (b.y, b.x)
    if ka < kb:
        return -1
    if ka > kb:
        return 1
    return 0


def sort_siblings(nodes: list[Node], sort_order: SortOrder = SortOrder.TOP_TO_BOTTOM) -> list[Node]:
    """Return nodes ordered by compare_siblings (stable)."""
    return sorted(nodes, key=cmp_to_key(lambda a, b: compare_siblings(a, b, sort_order)))


def branch_key(node: Node) -> tuple:
    """
    Sort key for the branches of a two-sided mindmap root.

    Explicit `order` first, then y alone. Branches facing each other
    across the root share a y after layout, so x must not break the tie;
    a stable sort keeps them in edge order instead.
    """
    order = explicit_order(node)
    if order is not None:
        return (0, order, 0.0)
    return (1, 0, node.y)


class TreeBuilder:
    """
    Builds TreeNode hierarchies from a graph.

    The builder remembers which nodes it has already placed so that a node
    reachable along two paths is attached only once, under the parent that
    reached it first in sibling order. An edge back to a node on the current
    path raises CyclicGraphError.
    """

    def __init__(
        self,
        graph: LayoutGraph,
        config: Optional[LayoutConfig] = None,
        root_key: Optional[Callable[[Node], Any]] = None
    ):
        self.graph = graph
        self.config = config or LayoutConfig()
        # Replaces the sibling comparator for the root's own children
        self.root_key = root_key
        self._placed: set[str] = set()

    def ordered_children(self, node: Node, key: Optional[Callable[[Node], Any]] = None) -> list[Node]:
        """Targets of the node's outgoing edges, in sibling order."""
        targets = []
        for edge in self.graph.outgoing_edges(node):
            target = self.graph.cell_by_id(edge.target)
            if target is not None:
                targets.append(target)
        if key is not None:
            return sorted(targets, key=key)
        return sort_siblings(targets, self.config.sort_order)

    def build(self, root: Node) -> TreeNode:
        self._placed = {root.id}
        return self._build(root, root.id, depth=0, path=[root.id])

    def _build(self, node: Node, root_id: str, depth: int, path: list[str]) -> TreeNode:
        tree = TreeNode(node=node, width=node.width, height=node.height, depth=depth)

        key = self.root_key if depth == 0 else None
        for child in self.ordered_children(node, key):
            if child.id in path:
                raise CyclicGraphError(root_id, child.id)
            if child.id in self._placed:
                logger.debug("Node %s already placed, skipping edge from %s", child.id, node.id)
                continue
            self._placed.add(child.id)
            path.append(child.id)
            tree.children.append(self._build(child, root_id, depth + 1, path))
            path.pop()

        return tree


def build_tree(
    graph: LayoutGraph,
    root: Node,
    config: Optional[LayoutConfig] = None,
    root_key: Optional[Callable[[Node], Any]] = None
) -> TreeNode:
    """Build the ordered hierarchy below `root`."""
    return TreeBuilder(graph, config, root_key).build(root)


def pin_sibling_order(graph: LayoutGraph, tree: TreeNode) -> None:
    """
    Store each child's place in its sibling sequence as its `order`.

    Children that already carry an order keep it. The others are numbered
    after the largest existing value, which is where the comparator already
    sorts them, so the sequence is unchanged. Layouts that move siblings
    off their original axis call this so the next run sees the same order.
    """
    for parent in tree.walk():
        existing = [explicit_order(child.node) for child in parent.children]
        next_order = max((o for o in existing if o is not None), default=-1) + 1
        for child, order in zip(parent.children, existing):
            if order is None:
                graph.set_data(child.node, "order", next_order)
                next_order += 1


def count_leaves(tree: TreeNode) -> int:
    """Number of leaves below (and including) `tree`, memoized on each node."""
    if tree.leaf_count is None:
        if tree.is_leaf:
            tree.leaf_count = 1
        else:
            tree.leaf_count = sum(count_leaves(child) for child in tree.children)
    return tree.leaf_count


# --- Subtree extents ---

class Extent(NamedTuple):
    """Footprint of a subtree relative to the layout axis."""
    perpendicular: float  # across the direction of growth
    parallel: float       # along the direction of growth


def subtree_extent(tree: TreeNode, gap: float, vertical: bool) -> Extent:
    """
    Compute the bounding footprint of a subtree.

    For a vertical layout (TB/BT) the perpendicular axis is x, so the
    perpendicular extent is a width; for a horizontal one it is a height.

    Args:
        tree: Subtree root
        gap: Sibling gap inserted between adjacent child subtrees
        vertical: True for TB/BT, False for LR/RL

    Returns:
        Extent(perpendicular, parallel)
    """
    own_perp = tree.width if vertical else tree.height
    own_par = tree.height if vertical else tree.width

    if tree.is_leaf:
        return Extent(own_perp, own_par)

    children_span = 0.0
    max_depth = 0.0
    for child in tree.children:
        ext = subtree_extent(child, gap, vertical)
        children_span += ext.perpendicular
        max_depth = max(max_depth, ext.parallel)

    children_span += (len(tree.children) - 1) * gap

    return Extent(max(own_perp, children_span), own_par + max_depth)
