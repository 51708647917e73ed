"""
Diagram Layout - Layout engine for mindmaps, trees, fishbone and timeline diagrams.

This module provides the layout algorithms and the diagram models they
operate on. The HTTP backend and the CLI are thin wrappers around it.
"""

from .models import (
    # Enums
    Port,
    LayoutDirection,
    MindmapDirection,
    TimelineOrientation,
    SortOrder,
    LayoutMode,
    # Core models
    Node,
    Edge,
    DiagramMetadata,
    Diagram,
    # Settings
    LayoutConfig,
    TimelineOptions,
)

from .graph import LayoutGraph, DiagramGraph
from .tree import TreeNode, LayoutError, CyclicGraphError, build_tree, subtree_extent
from .anchors import fix_mindmap_anchors
from .layout import (
    apply_tree_layout,
    apply_mindmap_layout,
    apply_fishbone_layout,
    apply_timeline_layout,
)
from .analysis import find_roots, pick_root, descendants, hierarchy_summary
from .validation import validate_layout, validation_summary, ValidationIssue, IssueSeverity

__all__ = [
    # Enums
    "Port",
    "LayoutDirection",
    "MindmapDirection",
    "TimelineOrientation",
    "SortOrder",
    "LayoutMode",
    # Models
    "Node",
    "Edge",
    "DiagramMetadata",
    "Diagram",
    "LayoutConfig",
    "TimelineOptions",
    # Graph access
    "LayoutGraph",
    "DiagramGraph",
    # Trees
    "TreeNode",
    "LayoutError",
    "CyclicGraphError",
    "build_tree",
    "subtree_extent",
    # Layout
    "apply_tree_layout",
    "apply_mindmap_layout",
    "apply_fishbone_layout",
    "apply_timeline_layout",
    "fix_mindmap_anchors",
    # Analysis
    "find_roots",
    "pick_root",
    "descendants",
    "hierarchy_summary",
    # Validation
    "validate_layout",
    "validation_summary",
    "ValidationIssue",
    "IssueSeverity",
]
