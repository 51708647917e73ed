"""
Chronological timeline layout.

Orders every node by its `date` (ISO string in node.data), spaces nodes
along a center line in proportion to the time between them, alternates
them on either side of the line, and links consecutive events with edges.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from .graph import LayoutGraph
from .models import Node, Port, TimelineOptions, TimelineOrientation

logger = logging.getLogger(__name__)

START_OFFSET = 100          # Primary-axis position of the first event
HORIZONTAL_CENTER_Y = 300   # Center line for horizontal timelines
VERTICAL_CENTER_X = 400     # Center line for vertical timelines
SIDE_OFFSET = 100           # Distance of events from the center line

BASE_GAP = 200
REFERENCE_DAYS = 30         # Elapsed days that map to exactly BASE_GAP
MIN_GAP_SCALE = 0.75
MAX_GAP_SCALE = 2.0


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a node's date value; None if it is missing or unreadable.

    Timezone-aware values are converted to naive UTC so any two parsed
    dates can be compared.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.debug("Unparsable timeline date %r", value)
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def node_date(node: Node) -> Optional[datetime]:
    return parse_date(node.data.get("date"))


def format_date_label(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def sort_chronologically(
    nodes: list[Node],
    orientation: TimelineOrientation,
    sort_by_date: bool = True
) -> list[Node]:
    """
    Order nodes along the timeline.

    Nodes are first ordered by position along the primary axis. With
    `sort_by_date`, the slots held by dated nodes are then refilled with
    those nodes in date order, so dated events are always chronological
    and undated ones stay where they were placed.
    """
    horizontal = orientation == TimelineOrientation.HORIZONTAL

    def position(node: Node) -> float:
        return node.x if horizontal else node.y

    ordered = sorted(nodes, key=position)
    if not sort_by_date:
        return ordered

    dated_slots = [i for i, node in enumerate(ordered) if node_date(node) is not None]
    by_date = sorted((ordered[i] for i in dated_slots), key=node_date)
    for slot, node in zip(dated_slots, by_date):
        ordered[slot] = node
    return ordered


def gap_between(previous: Node, current: Node, auto_spacing: bool = True) -> float:
    """Distance inserted between two consecutive events."""
    if not auto_spacing:
        return BASE_GAP

    prev_date, cur_date = node_date(previous), node_date(current)
    if prev_date is None or cur_date is None:
        return BASE_GAP

    days = (cur_date - prev_date).total_seconds() / 86400
    scale = min(max(days / REFERENCE_DAYS, MIN_GAP_SCALE), MAX_GAP_SCALE)
    return BASE_GAP * scale


def add_date_label(graph: LayoutGraph, node: Node) -> None:
    """Append the node's date to its label, once."""
    parsed = node_date(node)
    if parsed is None:
        return
    date_str = format_date_label(parsed)
    label = graph.get_label(node)
    if date_str in label:
        return
    graph.set_label(node, f"{label}\n{date_str}" if label else date_str)


def position_timeline(
    graph: LayoutGraph,
    nodes: list[Node],
    orientation: TimelineOrientation,
    options: TimelineOptions
) -> None:
    """Place already-sorted nodes along the timeline."""
    horizontal = orientation == TimelineOrientation.HORIZONTAL
    cursor = float(START_OFFSET)

    for i, node in enumerate(nodes):
        if i > 0:
            cursor += gap_between(nodes[i - 1], node, options.auto_spacing)

        side = -SIDE_OFFSET if i % 2 == 0 else SIDE_OFFSET
        if horizontal:
            graph.set_position(node, cursor, HORIZONTAL_CENTER_Y + side)
            cursor += node.width
        else:
            graph.set_position(node, VERTICAL_CENTER_X + side, cursor)
            cursor += node.height

        if options.show_date_labels:
            add_date_label(graph, node)


def connect_sequence(graph: LayoutGraph, nodes: list[Node], orientation: TimelineOrientation) -> None:
    """Make sure each event has an edge to the next one."""
    if orientation == TimelineOrientation.HORIZONTAL:
        ports = (Port.RIGHT, Port.LEFT)
    else:
        ports = (Port.BOTTOM, Port.TOP)

    for previous, current in zip(nodes, nodes[1:]):
        existing = graph.find_edges(previous, current)
        if existing:
            graph.set_ports(existing[0], *ports)
        else:
            graph.add_edge(previous, current, *ports)
