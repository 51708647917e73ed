"""
Layout validation - Check a diagram before laying it out.

Reports the structural problems that make a layout fail or come out
differently than the user expects: cycles, dangling edges, ambiguous or
missing roots, nodes shared between parents and unreadable dates.
"""

from dataclasses import dataclass
from enum import Enum

from .analysis import find_cycles, find_roots
from .graph import DiagramGraph
from .models import Diagram
from .timeline import node_date


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # Layout will fail or misplace nodes
    WARNING = "warning"  # Layout runs but may surprise
    INFO = "info"        # Informational, may be intentional


@dataclass
class ValidationIssue:
    """A single validation issue found in a diagram."""
    severity: IssueSeverity
    message: str
    node_id: str | None = None
    edge_id: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.node_id:
            result["node_id"] = self.node_id
        if self.edge_id:
            result["edge_id"] = self.edge_id
        return result


def validate_layout(diagram: Diagram) -> list[ValidationIssue]:
    """
    Validate a diagram for layout and return a list of issues.

    Checks for:
    - Empty diagram - INFO
    - Edges referencing missing nodes - ERROR
    - Self-referencing edges and cycles - ERROR
    - No node without incoming edges - WARNING
    - Several nodes without incoming edges - WARNING
    - Nodes with more than one parent - WARNING
    - Unparsable `date` values - WARNING

    Args:
        diagram: The diagram to validate

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    if not diagram.nodes:
        issues.append(ValidationIssue(
            severity=IssueSeverity.INFO,
            message="Diagram has no nodes"
        ))
        return issues

    node_ids = {n.id for n in diagram.nodes}

    # Dangling edges are ignored by every layout
    for edge in diagram.edges:
        if edge.source not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Edge references non-existent source node: {edge.source}",
                edge_id=edge.id
            ))
        if edge.target not in node_ids:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Edge references non-existent target node: {edge.target}",
                edge_id=edge.id
            ))

    graph = DiagramGraph(diagram)

    for cycle in find_cycles(graph):
        if len(cycle) == 2:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message="Self-referencing edge (node points to itself)",
                node_id=cycle[0]
            ))
        else:
            issues.append(ValidationIssue(
                severity=IssueSeverity.ERROR,
                message=f"Cycle: {' -> '.join(cycle)}",
                node_id=cycle[0]
            ))

    roots = find_roots(graph)
    if not roots:
        issues.append(ValidationIssue(
            severity=IssueSeverity.WARNING,
            message=f"No node without incoming edges; '{diagram.nodes[0].id}' will be used as root"
        ))
    elif len(roots) > 1:
        issues.append(ValidationIssue(
            severity=IssueSeverity.WARNING,
            message=(
                f"{len(roots)} candidate roots ({', '.join(r.id for r in roots)}); "
                f"tree layout will use '{roots[0].id}' unless a root is given"
            )
        ))

    # A node with several parents is placed under the first one only
    for node in diagram.nodes:
        parents = {e.source for e in graph.incoming_edges(node)}
        if len(parents) > 1:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Node has {len(parents)} parents: {', '.join(sorted(parents))}",
                node_id=node.id
            ))

    for node in diagram.nodes:
        value = node.data.get("date")
        if value not in (None, "") and node_date(node) is None:
            issues.append(ValidationIssue(
                severity=IssueSeverity.WARNING,
                message=f"Unreadable date '{value}'; timeline falls back to position",
                node_id=node.id
            ))

    return issues


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    return {
        "total": len(issues),
        "errors": len([i for i in issues if i.severity == IssueSeverity.ERROR]),
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "info": len([i for i in issues if i.severity == IssueSeverity.INFO]),
        "valid": len([i for i in issues if i.severity == IssueSeverity.ERROR]) == 0
    }
