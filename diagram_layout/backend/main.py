"""
Diagram Layout Backend - FastAPI Application

Stateless layout service for the diagram editor. Every request carries
the diagram to arrange; the response carries the same diagram with new
node positions and edge ports. Nothing is stored between requests.

It provides:
- REST endpoints for each layout topology
- Pre-layout validation
- CORS configuration for local frontend development
"""
import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from diagram_layout import (
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
    validate_layout,
    validation_summary,
)

logger = logging.getLogger(__name__)

HOST = os.environ.get("DIAGRAM_LAYOUT_HOST", "127.0.0.1")
PORT = int(os.environ.get("DIAGRAM_LAYOUT_PORT", "8765"))
CORS_ORIGINS = os.environ.get(
    "DIAGRAM_LAYOUT_CORS_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173"
).split(",")


# --- FastAPI App ---

app = FastAPI(
    title="Diagram Layout API",
    description="Layout engine for the diagram editor",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Request models ---

class LayoutRequest(BaseModel):
    diagram: Diagram
    root_id: Optional[str] = None


class TreeLayoutRequest(LayoutRequest):
    direction: LayoutDirection = LayoutDirection.LR
    spacing_mode: LayoutMode = LayoutMode.STANDARD
    sort_order: SortOrder = SortOrder.TOP_TO_BOTTOM


class MindmapLayoutRequest(LayoutRequest):
    direction: MindmapDirection = MindmapDirection.RIGHT
    spacing_mode: LayoutMode = LayoutMode.STANDARD
    sort_order: SortOrder = SortOrder.TOP_TO_BOTTOM


class TimelineLayoutRequest(BaseModel):
    diagram: Diagram
    orientation: TimelineOrientation = TimelineOrientation.HORIZONTAL
    options: TimelineOptions = Field(default_factory=TimelineOptions)


class ValidateRequest(BaseModel):
    diagram: Diagram


def _resolve_root(graph: DiagramGraph, root_id: Optional[str]):
    """Look up the requested root, 404 if it does not exist."""
    if root_id is None:
        return None
    try:
        return graph.require_node(root_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Node not found: {root_id}")


def _layout_response(diagram: Diagram) -> dict:
    return {"success": True, "diagram": diagram.to_json_dict()}


# --- Health ---

@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


# --- Layout ---

@app.post("/api/layout/tree")
async def tree_layout(request: TreeLayoutRequest):
    """Arrange a hierarchy growing in one direction."""
    graph = DiagramGraph(request.diagram)
    root = _resolve_root(graph, request.root_id)
    config = LayoutConfig(sort_order=request.sort_order, spacing_mode=request.spacing_mode)
    try:
        apply_tree_layout(graph, request.direction, root, config)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _layout_response(request.diagram)


@app.post("/api/layout/mindmap")
async def mindmap_layout(request: MindmapLayoutRequest):
    """Arrange a mindmap and anchor its edges."""
    graph = DiagramGraph(request.diagram)
    root = _resolve_root(graph, request.root_id)
    config = LayoutConfig(sort_order=request.sort_order, spacing_mode=request.spacing_mode)
    try:
        apply_mindmap_layout(graph, request.direction, root, config)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _layout_response(request.diagram)


@app.post("/api/layout/fishbone")
async def fishbone_layout(request: LayoutRequest):
    """Arrange a cause/effect diagram."""
    graph = DiagramGraph(request.diagram)
    root = _resolve_root(graph, request.root_id)
    apply_fishbone_layout(graph, root)
    return _layout_response(request.diagram)


@app.post("/api/layout/timeline")
async def timeline_layout(request: TimelineLayoutRequest):
    """Arrange dated events along a timeline."""
    graph = DiagramGraph(request.diagram)
    apply_timeline_layout(graph, request.orientation, request.options)
    return _layout_response(request.diagram)


# --- Validation ---

@app.post("/api/layout/validate")
async def validate(request: ValidateRequest):
    """
    Check a diagram for structural issues before laying it out.

    Returns a list of issues (errors, warnings, info) and a summary.
    """
    issues = validate_layout(request.diagram)
    return {
        "success": True,
        "issues": [issue.to_dict() for issue in issues],
        "summary": validation_summary(issues)
    }


# --- Run with uvicorn ---

def run():
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting layout backend on %s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
