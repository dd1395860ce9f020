import json

import pytest
from typer.testing import CliRunner

from netviz.cli import app

from conftest import edge_record, node_record

runner = CliRunner()


@pytest.fixture
def broken_data(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(
        json.dumps(
            {
                "nodes": [node_record("me", 0, 0, category="self")],
                "edges": [edge_record("me", "ghost")],
            }
        ),
        encoding="utf-8",
    )
    return path


def test_stats_reports_sample_network():
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 0
    assert "Total connections" in result.output
    assert "Strong connections" in result.output


def test_search_lists_matches():
    result = runner.invoke(app, ["search", "react"])
    assert result.exit_code == 0
    assert "sarah" in result.output
    assert "2 match(es)" in result.output


def test_pick_resolves_node_under_view():
    assert "sarah" in runner.invoke(app, ["pick", "300", "200"]).output
    zoomed = runner.invoke(app, ["pick", "600", "400", "--zoom", "2"])
    assert zoomed.exit_code == 0
    assert "sarah" in zoomed.output


def test_pick_on_empty_space():
    result = runner.invoke(app, ["pick", "5", "5"])
    assert result.exit_code == 0
    assert "No node" in result.output


def test_path_between_people():
    result = runner.invoke(app, ["path", "alex", "maria"])
    assert result.exit_code == 0
    assert "Alex Kumar" in result.output
    assert "Maria Gonzalez" in result.output


def test_path_with_unknown_node_fails():
    result = runner.invoke(app, ["path", "alex", "nobody"])
    assert result.exit_code == 1


def test_render_writes_svg(tmp_path):
    target = tmp_path / "frame.svg"
    result = runner.invoke(app, ["render", str(target), "--search", "react", "--select", "sarah"])
    assert result.exit_code == 0
    svg = target.read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert "Sarah Johnson" in svg


def test_render_rejects_unknown_selection_and_category(tmp_path):
    target = tmp_path / "frame.svg"
    assert runner.invoke(app, ["render", str(target), "--select", "nobody"]).exit_code == 1
    assert runner.invoke(app, ["render", str(target), "--category", "enemies"]).exit_code == 1
    assert not target.exists()


def test_export_writes_json(tmp_path):
    target = tmp_path / "network.json"
    result = runner.invoke(app, ["export", str(target)])
    assert result.exit_code == 0
    data = json.loads(target.read_text(encoding="utf-8"))
    assert len(data["nodes"]) == 9
    assert data["stats"]["total_edges"] == 6


def test_invalid_data_file_is_reported(broken_data):
    result = runner.invoke(app, ["stats", "--data", str(broken_data)])
    assert result.exit_code == 1
    assert "Invalid graph data" in result.output


@pytest.mark.parametrize("payload", [{"nodes": ["bare-string"]}, {"nodes": 7}, {"nodes": [], "edges": "x"}])
def test_malformed_records_are_reported(tmp_path, payload):
    path = tmp_path / "malformed.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    result = runner.invoke(app, ["stats", "--data", str(path)])
    assert result.exit_code == 1
    assert "Invalid graph data" in result.output
