"""Tests for cli.py: running layouts over diagram JSON files."""

from __future__ import annotations

import json

import pytest

from diagram_layout.cli import main
from diagram_layout.models import Diagram, Edge, Node


@pytest.fixture
def diagram_file(tmp_path):
    diagram = Diagram(
        name="Org chart",
        nodes=[
            Node(id="ceo", label="CEO", x=400, y=50, width=120, height=60),
            Node(id="cto", label="CTO", x=0, y=0, data={"order": 0}),
            Node(id="cfo", label="CFO", x=0, y=0, data={"order": 1}),
        ],
        edges=[Edge(source="ceo", target="cto"), Edge(source="ceo", target="cfo")],
    )
    path = tmp_path / "org.json"
    path.write_text(json.dumps(diagram.to_json_dict()))
    return path


def run(argv, capsys) -> tuple[int, dict]:
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code, json.loads(capsys.readouterr().out)


class TestCli:
    def test_tree_prints_diagram(self, diagram_file, capsys):
        code, out = run(["tree", str(diagram_file), "--direction", "TB"], capsys)
        assert code == 0
        nodes = {n["id"]: n for n in out["diagram"]["nodes"]}
        assert nodes["ceo"]["x"] == 400
        assert nodes["cto"]["y"] == 50 + 60 + 140

    def test_output_file(self, diagram_file, tmp_path, capsys):
        target = tmp_path / "out.json"
        code, out = run(["mindmap", str(diagram_file), "--direction", "right", "-o", str(target)], capsys)
        assert code == 0
        assert out == {"status": "ok", "output": str(target), "nodes": 3}
        written = Diagram.from_json_dict(json.loads(target.read_text()))
        assert all(e.source_side.value == "right" for e in written.edges)

    def test_unknown_root(self, diagram_file, capsys):
        code, out = run(["fishbone", str(diagram_file), "--root", "ghost"], capsys)
        assert code == 1
        assert out["status"] == "error"

    def test_missing_file(self, tmp_path, capsys):
        code, out = run(["timeline", str(tmp_path / "missing.json")], capsys)
        assert code == 1
        assert "Cannot read" in out["error"]

    def test_timeline_flags(self, diagram_file, capsys):
        code, out = run(["timeline", str(diagram_file), "--orientation", "vertical", "--no-auto-spacing"], capsys)
        assert code == 0
        ys = sorted(n["y"] for n in out["diagram"]["nodes"])
        assert ys[0] == 100

    def test_validate(self, diagram_file, capsys):
        code, out = run(["validate", str(diagram_file)], capsys)
        assert code == 0
        assert out["summary"]["valid"] is True

    def test_summarize(self, diagram_file, capsys):
        code, out = run(["summarize", str(diagram_file)], capsys)
        assert out["summary"] == {"root_id": "ceo", "node_count": 3, "depth": 1, "leaf_count": 2}
