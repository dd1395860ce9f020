from fastapi.testclient import TestClient

from netviz.api import app

client = TestClient(app)


def test_graph_endpoint():
    response = client.get("/graph")
    assert response.status_code == 200
    body = response.json()
    assert len(body["nodes"]) == 9
    assert len(body["edges"]) == 6


def test_node_endpoint():
    response = client.get("/nodes/sarah")
    assert response.status_code == 200
    assert response.json()["node"]["display_name"] == "Sarah Johnson"
    assert response.json()["neighbors"] == ["user", "alex"]
    assert client.get("/nodes/nobody").status_code == 404


def test_stats_endpoint():
    body = client.get("/stats").json()
    assert body["total_nodes"] == 9
    assert body["weak_connections"] == 1


def test_search_endpoint_keeps_draw_order():
    body = client.get("/search", params={"term": "python"}).json()
    assert body["matches"] == ["alex", "maria"]
    assert client.get("/search").json()["matches"] == []


def test_pick_endpoint():
    assert client.get("/pick", params={"x": 300, "y": 200}).json()["node_id"] == "sarah"
    zoomed = client.get("/pick", params={"x": 610, "y": 410, "scale": 2, "tx": 10, "ty": 10}).json()
    assert zoomed == {"node_id": "sarah", "scale": 2.0}
    assert client.get("/pick", params={"x": 5, "y": 5}).json()["node_id"] is None
    assert client.get("/pick", params={"x": 5, "y": 5, "scale": 0}).status_code == 422


def test_path_endpoint():
    assert client.get("/path", params={"source": "user", "target": "alex"}).json()["path"] == [
        "user",
        "sarah",
        "alex",
    ]
    assert client.get("/path", params={"source": "user", "target": "james"}).json()["path"] is None
    assert client.get("/path", params={"source": "user", "target": "nobody"}).status_code == 404


def test_render_endpoint():
    response = client.get("/render.svg", params={"term": "aws", "selected": "david"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith("<svg")
    assert client.get("/render.svg", params={"selected": "nobody"}).status_code == 404
    assert client.get("/render.svg", params={"category": "enemies"}).status_code == 400
