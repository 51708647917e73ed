"""
Core data models for diagrams and layout settings.

These models define the canonical schema the layout engine works against:
- Nodes with position, size and an opaque `data` bag (order, level, date, ...)
- Edges connecting nodes, with optional fixed ports on each end
- Layout settings passed explicitly into every layout call

Field Naming Convention:
- Edges use `source` and `target` (industry standard from D3, Cytoscape, etc.)
- Ports are stored as `source_side` / `target_side`
- For backward compatibility, `from`/`to` are accepted on input and converted
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, model_validator
import uuid


class Port(str, Enum):
    """Named attachment points on a node's bounding box."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


class LayoutDirection(str, Enum):
    """Axis-aligned tree directions."""
    LR = "LR"  # children to the right
    RL = "RL"  # children to the left
    TB = "TB"  # children below
    BT = "BT"  # children above

    @property
    def is_vertical(self) -> bool:
        return self in (LayoutDirection.TB, LayoutDirection.BT)


class MindmapDirection(str, Enum):
    """Directions offered by the mindmap layout."""
    RIGHT = "right"
    LEFT = "left"
    TOP = "top"
    BOTTOM = "bottom"
    BOTH = "both"
    RADIAL = "radial"


class TimelineOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SortOrder(str, Enum):
    """Sibling ordering preference (also sets the radial rotation)."""
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter-clockwise"
    TOP_TO_BOTTOM = "top-to-bottom"
    LEFT_TO_RIGHT = "left-to-right"


class LayoutMode(str, Enum):
    """Spacing density preset."""
    STANDARD = "standard"
    COMPACT = "compact"


def generate_node_id() -> str:
    """Generate a unique node ID."""
    return f"n{uuid.uuid4().hex[:8]}"


def generate_edge_id() -> str:
    """Generate a unique edge ID."""
    return f"e{uuid.uuid4().hex[:8]}"


class Node(BaseModel):
    """A node in the diagram."""
    id: str = Field(default_factory=generate_node_id)
    label: str = "New Node"
    type: str = "component"
    shape: str = "rectangle"
    color: str = "#3478f6"
    x: float = 100
    y: float = 100
    width: float = 150
    height: float = 80
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    # Layout-relevant payload: order, level, date, collapsed, visible
    data: dict[str, Any] = Field(default_factory=dict)

    def center(self) -> tuple[float, float]:
        """Get the center point of the node."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def bounds(self) -> tuple[float, float, float, float]:
        """Get the bounding box (x, y, right, bottom)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


class Edge(BaseModel):
    """
    An edge connecting two nodes.

    Uses `source` and `target` as canonical field names.
    Accepts `from`/`to` on input for backward compatibility.
    """
    id: str = Field(default_factory=generate_edge_id)
    source: str  # Source node ID
    target: str  # Target node ID
    label: str = ""
    # Connection ports (which side of each node the edge connects to)
    source_side: Optional[Port] = None  # None = router picks
    target_side: Optional[Port] = None
    # Cached routing points; cleared whenever the ports change
    waypoints: list[tuple[float, float]] = Field(default_factory=list)
    color: str = "#666666"
    width: float = 2.0

    @model_validator(mode='before')
    @classmethod
    def convert_legacy_fields(cls, data: Any) -> Any:
        """Convert legacy 'from'/'to' fields to 'source'/'target'."""
        if isinstance(data, dict):
            if 'from' in data and 'source' not in data:
                data['source'] = data.pop('from')
            if 'to' in data and 'target' not in data:
                data['target'] = data.pop('to')
        return data

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "color": self.color,
            "width": self.width,
        }
        # Only include sides and routing if they're set
        if self.source_side:
            result["source_side"] = self.source_side.value
        if self.target_side:
            result["target_side"] = self.target_side.value
        if self.waypoints:
            result["waypoints"] = [list(p) for p in self.waypoints]
        return result


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DiagramMetadata(BaseModel):
    """Metadata about the diagram."""
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Diagram(BaseModel):
    """
    The complete diagram structure.
    This is what the CLI reads/writes and the backend accepts.
    """
    id: str = Field(default_factory=lambda: f"diagram-{uuid.uuid4().hex[:8]}")
    name: str = "Untitled Diagram"
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    metadata: DiagramMetadata = Field(default_factory=DiagramMetadata)

    def to_json_dict(self) -> dict:
        """Convert to JSON-serializable dict with proper field names."""
        return {
            "id": self.id,
            "name": self.name,
            "nodes": [n.model_dump() for n in self.nodes],
            "edges": [e.to_json_dict() for e in self.edges],
            "metadata": {
                "created_at": self.metadata.created_at.isoformat(),
                "updated_at": self.metadata.updated_at.isoformat(),
            }
        }

    @classmethod
    def from_json_dict(cls, data: dict) -> "Diagram":
        """Create a Diagram from a JSON dict (handles legacy formats)."""
        edges = [Edge(**e) for e in data.get('edges', [])]
        nodes = [Node(**n) for n in data.get('nodes', [])]

        meta_data = data.get('metadata', {})
        metadata = DiagramMetadata(
            created_at=datetime.fromisoformat(meta_data['created_at']) if 'created_at' in meta_data else utc_now(),
            updated_at=datetime.fromisoformat(meta_data['updated_at']) if 'updated_at' in meta_data else utc_now(),
        )

        return cls(
            id=data.get('id', f"diagram-{uuid.uuid4().hex[:8]}"),
            name=data.get('name', 'Untitled Diagram'),
            nodes=nodes,
            edges=edges,
            metadata=metadata
        )


# --- Layout settings ---

# (level gap, sibling gap) per spacing preset
TREE_GAPS: dict[LayoutMode, tuple[float, float]] = {
    LayoutMode.STANDARD: (140, 50),
    LayoutMode.COMPACT: (100, 30),
}

# Distance between consecutive rings of the radial layout
RADIUS_GAPS: dict[LayoutMode, float] = {
    LayoutMode.STANDARD: 220,
    LayoutMode.COMPACT: 160,
}


class LayoutConfig(BaseModel):
    """
    Caller preferences read by every layout call.

    Never mutated by the engine; pass a different instance to change
    behavior.
    """
    sort_order: SortOrder = SortOrder.TOP_TO_BOTTOM
    spacing_mode: LayoutMode = LayoutMode.STANDARD

    @property
    def level_gap(self) -> float:
        return TREE_GAPS[self.spacing_mode][0]

    @property
    def sibling_gap(self) -> float:
        return TREE_GAPS[self.spacing_mode][1]

    @property
    def radius_gap(self) -> float:
        return RADIUS_GAPS[self.spacing_mode]


class TimelineOptions(BaseModel):
    """Options for the chronological timeline layout."""
    sort_by_date: bool = True
    show_date_labels: bool = True
    auto_spacing: bool = True
