from typing import Any, Dict

import pytest

from netviz.config import Settings
from netviz.controller import ViewportController
from netviz.graph import GraphModel
from netviz.models import GraphDataset
from netviz.sample import build_model, sample_dataset
from netviz.surface import RecordingSurface


def node_record(node_id: str, x: float, y: float, **overrides: Any) -> Dict[str, Any]:
    record = {
        "id": node_id,
        "display_name": node_id.title(),
        "title": "Engineer",
        "position": [x, y],
        "visual_size": 10,
        "category": "direct",
        "skills": [],
        "last_activity_at": "2024-11-01T10:00:00Z",
    }
    record.update(overrides)
    return record


def edge_record(source: str, target: str, strength: float = 0.5, **overrides: Any) -> Dict[str, Any]:
    record = {
        "id": f"{source}-{target}",
        "source_id": source,
        "target_id": target,
        "strength": strength,
    }
    record.update(overrides)
    return record


def make_model(nodes, edges=()) -> GraphModel:
    return GraphModel(GraphDataset.from_records(nodes, edges))


@pytest.fixture
def sample_model() -> GraphModel:
    return build_model(sample_dataset())


@pytest.fixture
def small_model() -> GraphModel:
    return make_model(
        [
            node_record("me", 0, 0, category="self", visual_size=20),
            node_record("sarah", 300, 200, visual_size=16, skills=["React", "TypeScript"]),
            node_record("michael", 500, 200, visual_size=14, skills=["Figma"], title="UI/UX Designer"),
            node_record("emily", 350, 400, visual_size=15, category="mutual"),
            node_record("david", 450, 400, visual_size=13, category="recommended"),
        ],
        [
            edge_record("me", "sarah", 0.9),
            edge_record("me", "michael", 0.7),
            edge_record("sarah", "emily", 0.3),
        ],
    )


@pytest.fixture
def config() -> Settings:
    return Settings()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def controller(small_model, surface, config) -> ViewportController:
    return ViewportController(small_model, surface=surface, config=config)
