"""Tests for backend/main.py: the stateless layout HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from diagram_layout.backend.main import app


@pytest.fixture
def client():
    return TestClient(app)


def diagram_payload(*edges: tuple[str, str], **node_data) -> dict:
    ids: list[str] = []
    for src, tgt in edges:
        for node_id in (src, tgt):
            if node_id not in ids:
                ids.append(node_id)
    return {
        "id": "diagram-test",
        "name": "Test",
        "nodes": [
            {"id": i, "label": i, "x": 0, "y": 0, "width": 100, "height": 40,
             "data": {"order": n, **node_data.get(i, {})}}
            for n, i in enumerate(ids)
        ],
        "edges": [{"source": s, "target": t} for s, t in edges],
    }


def nodes_by_id(response) -> dict[str, dict]:
    return {n["id"]: n for n in response.json()["diagram"]["nodes"]}


class TestLayoutEndpoints:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_tree(self, client):
        response = client.post("/api/layout/tree", json={
            "diagram": diagram_payload(("R", "A"), ("R", "B")),
            "direction": "TB",
        })
        assert response.status_code == 200
        nodes = nodes_by_id(response)
        assert nodes["A"]["y"] == 40 + 140
        assert nodes["R"]["x"] == 0

    def test_tree_compact(self, client):
        response = client.post("/api/layout/tree", json={
            "diagram": diagram_payload(("R", "A")),
            "direction": "LR",
            "spacing_mode": "compact",
        })
        assert nodes_by_id(response)["A"]["x"] == 100 + 100

    def test_mindmap_sets_ports(self, client):
        response = client.post("/api/layout/mindmap", json={
            "diagram": diagram_payload(("R", "A"), ("R", "B")),
            "direction": "both",
            "root_id": "R",
        })
        assert response.status_code == 200
        edges = response.json()["diagram"]["edges"]
        assert [(e["source_side"], e["target_side"]) for e in edges] == [("right", "left"), ("left", "right")]

    def test_fishbone(self, client):
        response = client.post("/api/layout/fishbone", json={
            "diagram": diagram_payload(("C1", "E"), ("C2", "E")),
        })
        nodes = nodes_by_id(response)
        assert (nodes["E"]["x"], nodes["E"]["y"]) == (800, 300)
        assert nodes["C1"]["y"] < 300 < nodes["C2"]["y"]

    def test_timeline(self, client):
        payload = diagram_payload(("A", "B"), A={"date": "2024-02-01"}, B={"date": "2024-01-01"})
        payload["edges"] = []
        response = client.post("/api/layout/timeline", json={
            "diagram": payload,
            "orientation": "horizontal",
            "options": {"show_date_labels": False},
        })
        nodes = nodes_by_id(response)
        assert nodes["B"]["x"] < nodes["A"]["x"]
        assert nodes["A"]["label"] == "A"
        edges = response.json()["diagram"]["edges"]
        assert [(e["source"], e["target"]) for e in edges] == [("B", "A")]

    def test_unknown_root(self, client):
        response = client.post("/api/layout/tree", json={
            "diagram": diagram_payload(("R", "A")),
            "root_id": "nope",
        })
        assert response.status_code == 404

    def test_cycle_is_bad_request(self, client):
        response = client.post("/api/layout/mindmap", json={
            "diagram": diagram_payload(("A", "B"), ("B", "A")),
            "direction": "right",
        })
        assert response.status_code == 400
        assert "not a forest" in response.json()["detail"]

    def test_invalid_direction(self, client):
        response = client.post("/api/layout/tree", json={
            "diagram": diagram_payload(("R", "A")),
            "direction": "diagonal",
        })
        assert response.status_code == 422


class TestValidateEndpoint:
    def test_reports_issues(self, client):
        response = client.post("/api/layout/validate", json={
            "diagram": diagram_payload(("A", "B"), ("B", "A")),
        })
        body = response.json()
        assert body["success"] is True
        assert body["summary"]["errors"] == 1
        assert body["summary"]["valid"] is False
