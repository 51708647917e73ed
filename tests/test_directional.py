"""Tests for directional.py and apply_tree_layout: axis-aligned and balanced positioning."""

from __future__ import annotations

import pytest

from diagram_layout import apply_tree_layout
from diagram_layout.directional import position_balanced, position_subtree, split_balanced
from diagram_layout.graph import DiagramGraph
from diagram_layout.models import Diagram, Edge, LayoutConfig, LayoutDirection, LayoutMode, Node
from diagram_layout.tree import build_tree

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_graph(*edges: tuple[str, str], sizes: dict[str, tuple[float, float]] | None = None,
               root_pos: tuple[float, float] = (0, 0)) -> DiagramGraph:
    """Build a graph from (src, tgt) pairs. The first node mentioned sits at root_pos."""
    sizes = sizes or {}
    ids: list[str] = []
    for src, tgt in edges:
        for node_id in (src, tgt):
            if node_id not in ids:
                ids.append(node_id)
    nodes = []
    for i, node_id in enumerate(ids):
        w, h = sizes.get(node_id, (100, 40))
        x, y = root_pos if i == 0 else (0, 0)
        nodes.append(Node(id=node_id, label=node_id, x=x, y=y, width=w, height=h,
                          data={"order": i}))
    return DiagramGraph(Diagram(nodes=nodes, edges=[Edge(source=s, target=t) for s, t in edges]))


def center(graph: DiagramGraph, node_id: str) -> tuple[float, float]:
    return graph.cell_by_id(node_id).center()


UNEVEN_TREE = [("R", "A"), ("R", "B"), ("A", "C"), ("A", "D"), ("B", "E")]
UNEVEN_SIZES = {"R": (120, 60), "A": (80, 40), "B": (100, 50), "C": (60, 30), "D": (90, 40), "E": (70, 70)}


# ─── Directional positioning ──────────────────────────────────────────────────


class TestPositionSubtree:
    def test_root_with_two_children_lr(self):
        """Root + 2 children, LR, gaps (140, 50)."""
        graph = make_graph(("R", "A"), ("R", "B"))
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_subtree(graph, tree, LayoutDirection.LR, 140, 50, origin=(0, 0))

        root = graph.cell_by_id("R")
        a, b = graph.cell_by_id("A"), graph.cell_by_id("B")
        assert a.x == root.x + root.width + 140
        assert b.x == root.x + root.width + 140
        root_cy = root.y + root.height / 2
        assert (a.center()[1] + b.center()[1]) / 2 == pytest.approx(root_cy)
        assert b.y - a.y == a.height + 50

    def test_default_origin(self):
        graph = make_graph(("R", "A"), root_pos=(300, 300))
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_subtree(graph, tree, LayoutDirection.TB, 100, 30)
        assert (graph.cell_by_id("R").x, graph.cell_by_id("R").y) == (0, 0)

    def test_tb_places_children_below(self):
        graph = make_graph(("R", "A"), ("R", "B"), ("R", "C"))
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_subtree(graph, tree, LayoutDirection.TB, 140, 50, origin=(0, 0))

        for child_id in ("A", "B", "C"):
            assert graph.cell_by_id(child_id).y == 40 + 140
        xs = [graph.cell_by_id(i).x for i in ("A", "B", "C")]
        assert xs == sorted(xs)
        # Middle child is centered under the root
        assert center(graph, "B")[0] == pytest.approx(center(graph, "R")[0])

    def test_bt_places_children_above(self):
        graph = make_graph(("R", "A"), sizes={"A": (100, 60)})
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_subtree(graph, tree, LayoutDirection.BT, 140, 50, origin=(0, 0))
        assert graph.cell_by_id("A").y == -140 - 60

    def test_rl_places_children_left(self):
        graph = make_graph(("R", "A"), sizes={"A": (80, 40)})
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_subtree(graph, tree, LayoutDirection.RL, 140, 50, origin=(0, 0))
        assert graph.cell_by_id("A").x == -140 - 80

    def test_uneven_subtrees_do_not_overlap(self):
        graph = make_graph(*UNEVEN_TREE, sizes=UNEVEN_SIZES)
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_subtree(graph, tree, LayoutDirection.LR, 140, 50, origin=(0, 0))

        d = graph.cell_by_id("D")
        e = graph.cell_by_id("E")
        # A's subtree (C, D) sits entirely above B's subtree (E)
        assert d.y + d.height + 50 <= e.y + 1e-9

    def test_lr_rl_mirror(self):
        lr = make_graph(*UNEVEN_TREE, sizes=UNEVEN_SIZES, root_pos=(500, 300))
        rl = make_graph(*UNEVEN_TREE, sizes=UNEVEN_SIZES, root_pos=(500, 300))
        for graph, direction in ((lr, LayoutDirection.LR), (rl, LayoutDirection.RL)):
            tree = build_tree(graph, graph.cell_by_id("R"))
            position_subtree(graph, tree, direction, 140, 50, origin=(500, 300))

        root_cx = center(lr, "R")[0]
        for node_id in UNEVEN_SIZES:
            assert center(lr, node_id)[0] - root_cx == pytest.approx(root_cx - center(rl, node_id)[0])
            assert lr.cell_by_id(node_id).y == rl.cell_by_id(node_id).y

    def test_tb_bt_mirror(self):
        tb = make_graph(*UNEVEN_TREE, sizes=UNEVEN_SIZES)
        bt = make_graph(*UNEVEN_TREE, sizes=UNEVEN_SIZES)
        for graph, direction in ((tb, LayoutDirection.TB), (bt, LayoutDirection.BT)):
            tree = build_tree(graph, graph.cell_by_id("R"))
            position_subtree(graph, tree, direction, 100, 30, origin=(0, 0))

        root_cy = center(tb, "R")[1]
        for node_id in UNEVEN_SIZES:
            assert center(tb, node_id)[1] - root_cy == pytest.approx(root_cy - center(bt, node_id)[1])
            assert tb.cell_by_id(node_id).x == bt.cell_by_id(node_id).x


# ─── apply_tree_layout ────────────────────────────────────────────────────────


class TestApplyTreeLayout:
    def test_root_keeps_position(self):
        graph = make_graph(("R", "A"), ("R", "B"), root_pos=(250, 120))
        apply_tree_layout(graph, "LR")
        assert (graph.cell_by_id("R").x, graph.cell_by_id("R").y) == (250, 120)
        assert graph.cell_by_id("A").x == 250 + 100 + 140

    def test_compact_mode_uses_smaller_gaps(self):
        graph = make_graph(("R", "A"), ("R", "B"))
        apply_tree_layout(graph, "TB", config=LayoutConfig(spacing_mode=LayoutMode.COMPACT))
        a, b = graph.cell_by_id("A"), graph.cell_by_id("B")
        assert a.y == 40 + 100
        assert b.x - (a.x + a.width) == 30

    def test_explicit_root(self):
        graph = make_graph(("R", "A"), ("A", "B"))
        a = graph.cell_by_id("A")
        a.x, a.y = 1000, 1000
        apply_tree_layout(graph, "LR", root=a)
        assert graph.cell_by_id("B").x == 1000 + 100 + 140
        assert graph.cell_by_id("B").y == 1000
        # R is outside the hierarchy and untouched
        assert (graph.cell_by_id("R").x, graph.cell_by_id("R").y) == (0, 0)

    def test_idempotent(self):
        graph = make_graph(*UNEVEN_TREE, sizes=UNEVEN_SIZES, root_pos=(40, 40))
        apply_tree_layout(graph, "TB")
        first = [(n.x, n.y) for n in graph.all_nodes()]
        apply_tree_layout(graph, "TB")
        assert [(n.x, n.y) for n in graph.all_nodes()] == first

    def test_unknown_direction(self):
        graph = make_graph(("R", "A"))
        with pytest.raises(ValueError):
            apply_tree_layout(graph, "diagonal")


# ─── Balanced (dual-side) ─────────────────────────────────────────────────────


class TestBalanced:
    def test_split_alternates_by_index(self):
        graph = make_graph(("R", "A"), ("R", "B"), ("R", "C"), ("R", "D"), ("R", "E"))
        right, left = split_balanced(build_tree(graph, graph.cell_by_id("R")))
        assert [c.node.id for c in right.children] == ["A", "C", "E"]
        assert [c.node.id for c in left.children] == ["B", "D"]
        assert right.node is left.node

    def test_branches_on_both_sides(self):
        graph = make_graph(("R", "A"), ("R", "B"), ("R", "C"), ("R", "D"), root_pos=(400, 300))
        tree = build_tree(graph, graph.cell_by_id("R"))
        position_balanced(graph, tree, 140, 50)

        assert (graph.cell_by_id("R").x, graph.cell_by_id("R").y) == (400, 300)
        assert graph.cell_by_id("A").x == 400 + 100 + 140
        assert graph.cell_by_id("C").x == 400 + 100 + 140
        assert graph.cell_by_id("B").x == 400 - 140 - 100
        assert graph.cell_by_id("D").x == 400 - 140 - 100
        assert (graph.cell_by_id("A").y, graph.cell_by_id("C").y) == (255, 345)
        assert (graph.cell_by_id("B").y, graph.cell_by_id("D").y) == (255, 345)

    def test_grandchildren_follow_their_side(self):
        graph = make_graph(("R", "A"), ("R", "B"), ("B", "C"), root_pos=(400, 300))
        position_balanced(graph, build_tree(graph, graph.cell_by_id("R")), 140, 50)
        assert graph.cell_by_id("C").x < graph.cell_by_id("B").x < 400
