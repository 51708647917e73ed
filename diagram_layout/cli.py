#!/usr/bin/env python3
"""Diagram layout CLI - run a layout over a diagram JSON file."""

import argparse
import json
import logging
import sys

from diagram_layout import (
    CyclicGraphError,
    Diagram,
    DiagramGraph,
    LayoutConfig,
    LayoutDirection,
    LayoutMode,
    MindmapDirection,
    SortOrder,
    TimelineOptions,
    TimelineOrientation,
    apply_fishbone_layout,
    apply_mindmap_layout,
    apply_timeline_layout,
    apply_tree_layout,
    hierarchy_summary,
    pick_root,
    validate_layout,
    validation_summary,
)


def _json_out(data, code=0):
    print(json.dumps(data))
    sys.exit(code)


def _error(message):
    _json_out({"status": "error", "error": message}, code=1)


def _load(path):
    """Read a diagram JSON file."""
    try:
        with open(path) as f:
            return Diagram.from_json_dict(json.load(f))
    except OSError as e:
        _error(f"Cannot read '{path}': {e}")
    except (json.JSONDecodeError, ValueError) as e:
        _error(f"Invalid diagram file '{path}': {e}")


def _finish(args, diagram):
    """Write the laid-out diagram to --output, or print it."""
    data = diagram.to_json_dict()
    if args.output:
        with open(args.output, "w") as f:
            json.dump(data, f, indent=2)
        _json_out({"status": "ok", "output": args.output, "nodes": len(diagram.nodes)})
    _json_out({"status": "ok", "diagram": data})


def _root(graph, args):
    if not args.root:
        return None
    try:
        return graph.require_node(args.root)
    except KeyError as e:
        _error(str(e.args[0]))


def _config(args):
    return LayoutConfig(
        sort_order=SortOrder(args.sort_order),
        spacing_mode=LayoutMode(args.mode),
    )


def cmd_tree(args):
    diagram = _load(args.file)
    graph = DiagramGraph(diagram)
    try:
        apply_tree_layout(graph, args.direction, _root(graph, args), _config(args))
    except CyclicGraphError as e:
        _error(str(e))
    _finish(args, diagram)


def cmd_mindmap(args):
    diagram = _load(args.file)
    graph = DiagramGraph(diagram)
    try:
        apply_mindmap_layout(graph, args.direction, _root(graph, args), _config(args))
    except CyclicGraphError as e:
        _error(str(e))
    _finish(args, diagram)


def cmd_fishbone(args):
    diagram = _load(args.file)
    graph = DiagramGraph(diagram)
    apply_fishbone_layout(graph, _root(graph, args))
    _finish(args, diagram)


def cmd_timeline(args):
    diagram = _load(args.file)
    options = TimelineOptions(
        sort_by_date=not args.no_sort_by_date,
        show_date_labels=not args.no_date_labels,
        auto_spacing=not args.no_auto_spacing,
    )
    apply_timeline_layout(DiagramGraph(diagram), args.orientation, options)
    _finish(args, diagram)


def cmd_validate(args):
    diagram = _load(args.file)
    issues = validate_layout(diagram)
    _json_out({
        "status": "ok",
        "issues": [i.to_dict() for i in issues],
        "summary": validation_summary(issues),
    })


def cmd_summarize(args):
    diagram = _load(args.file)
    graph = DiagramGraph(diagram)
    root = _root(graph, args) or pick_root(graph)
    if root is None:
        _error("Diagram has no nodes")
    _json_out({"status": "ok", "summary": hierarchy_summary(graph, root).to_dict()})


def _add_common(p, with_root=True):
    p.add_argument("file", help="Diagram JSON file")
    if with_root:
        p.add_argument("--root", default=None, help="Root node ID")
    p.add_argument("--output", "-o", default=None, help="Write the result here instead of stdout")


def _add_preferences(p):
    p.add_argument("--mode", choices=[m.value for m in LayoutMode], default=LayoutMode.STANDARD.value)
    p.add_argument("--sort-order", choices=[s.value for s in SortOrder], default=SortOrder.TOP_TO_BOTTOM.value)


def build_parser():
    parser = argparse.ArgumentParser(prog="diagram-layout", description="Lay out diagram JSON files")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log layout passes to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("tree")
    _add_common(p)
    _add_preferences(p)
    p.add_argument("--direction", choices=[d.value for d in LayoutDirection], default=LayoutDirection.LR.value)

    p = sub.add_parser("mindmap")
    _add_common(p)
    _add_preferences(p)
    p.add_argument("--direction", choices=[d.value for d in MindmapDirection], default=MindmapDirection.RIGHT.value)

    p = sub.add_parser("fishbone")
    _add_common(p)

    p = sub.add_parser("timeline")
    _add_common(p, with_root=False)
    p.add_argument("--orientation", choices=[o.value for o in TimelineOrientation],
                   default=TimelineOrientation.HORIZONTAL.value)
    p.add_argument("--no-sort-by-date", action="store_true")
    p.add_argument("--no-date-labels", action="store_true")
    p.add_argument("--no-auto-spacing", action="store_true")

    p = sub.add_parser("validate")
    p.add_argument("file", help="Diagram JSON file")

    p = sub.add_parser("summarize")
    p.add_argument("file", help="Diagram JSON file")
    p.add_argument("--root", default=None, help="Root node ID")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    cmd_map = {
        "tree": cmd_tree,
        "mindmap": cmd_mindmap,
        "fishbone": cmd_fishbone,
        "timeline": cmd_timeline,
        "validate": cmd_validate,
        "summarize": cmd_summarize,
    }
    cmd_map[args.command](args)


if __name__ == "__main__":
    main()
