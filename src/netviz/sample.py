"""
Bundled sample network and a JSON loader for externally supplied graphs.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .graph import GraphModel
from .models import GraphDataset

logger = logging.getLogger(__name__)


def sample_dataset() -> Dict[str, List[Dict[str, Any]]]:
    nodes = [
        {
            "id": "user",
            "display_name": "You",
            "title": "Full-Stack Developer",
            "position": [400, 300],
            "visual_size": 20,
            "category": "self",
            "skills": ["React", "Node.js", "TypeScript", "AWS"],
            "connections": 247,
            "projects": 89,
            "rating": 4.8,
            "connection_strength": 1.0,
            "last_activity_at": "2024-11-01T10:00:00Z",
        },
        {
            "id": "sarah",
            "display_name": "Sarah Johnson",
            "title": "Senior React Developer",
            "company": "TechCorp",
            "profile_image": "https://i.pravatar.cc/150?u=sarah",
            "position": [300, 200],
            "visual_size": 16,
            "category": "direct",
            "skills": ["React", "TypeScript", "GraphQL"],
            "connections": 189,
            "projects": 67,
            "rating": 4.9,
            "connection_strength": 0.9,
            "last_activity_at": "2024-11-01T09:30:00Z",
        },
        {
            "id": "michael",
            "display_name": "Michael Chen",
            "title": "UI/UX Designer",
            "company": "Design Studio",
            "profile_image": "https://i.pravatar.cc/150?u=michael",
            "position": [500, 200],
            "visual_size": 14,
            "category": "direct",
            "skills": ["Figma", "Design Systems", "Prototyping"],
            "connections": 156,
            "projects": 45,
            "rating": 4.7,
            "connection_strength": 0.8,
            "last_activity_at": "2024-10-31T16:45:00Z",
        },
        {
            "id": "emily",
            "display_name": "Emily Rodriguez",
            "title": "Marketing Specialist",
            "company": "Marketing Pro",
            "profile_image": "https://i.pravatar.cc/150?u=emily",
            "position": [350, 400],
            "visual_size": 15,
            "category": "direct",
            "skills": ["SEO", "Content Marketing", "Analytics"],
            "connections": 203,
            "projects": 78,
            "rating": 4.6,
            "connection_strength": 0.85,
            "last_activity_at": "2024-11-01T08:15:00Z",
        },
        {
            "id": "david",
            "display_name": "David Park",
            "title": "DevOps Engineer",
            "company": "Cloud Solutions",
            "profile_image": "https://i.pravatar.cc/150?u=david",
            "position": [450, 400],
            "visual_size": 13,
            "category": "direct",
            "skills": ["Docker", "Kubernetes", "AWS"],
            "connections": 134,
            "projects": 34,
            "rating": 4.5,
            "connection_strength": 0.7,
            "last_activity_at": "2024-10-30T14:22:00Z",
        },
        {
            "id": "alex",
            "display_name": "Alex Kumar",
            "title": "Backend Developer",
            "company": "StartupXYZ",
            "profile_image": "https://i.pravatar.cc/150?u=alex",
            "position": [200, 150],
            "visual_size": 12,
            "category": "mutual",
            "skills": ["Python", "Django", "PostgreSQL"],
            "connections": 89,
            "projects": 23,
            "rating": 4.4,
            "connection_strength": 0.6,
            "last_activity_at": "2024-10-29T11:30:00Z",
        },
        {
            "id": "maria",
            "display_name": "Maria Gonzalez",
            "title": "Data Scientist",
            "company": "Analytics Hub",
            "profile_image": "https://i.pravatar.cc/150?u=maria",
            "position": [600, 250],
            "visual_size": 11,
            "category": "mutual",
            "skills": ["Python", "Machine Learning", "SQL"],
            "connections": 67,
            "projects": 19,
            "rating": 4.3,
            "connection_strength": 0.5,
            "last_activity_at": "2024-10-28T15:45:00Z",
        },
        {
            "id": "priya",
            "display_name": "Priya Patel",
            "title": "Cloud Architect",
            "company": "Google",
            "profile_image": "https://i.pravatar.cc/150?u=priya",
            "position": [250, 350],
            "visual_size": 10,
            "category": "recommended",
            "skills": ["AWS", "Azure", "Terraform"],
            "connections": 234,
            "projects": 56,
            "rating": 4.8,
            "connection_strength": 0.4,
            "last_activity_at": "2024-10-27T09:20:00Z",
        },
        {
            "id": "james",
            "display_name": "James Wilson",
            "title": "Product Manager",
            "company": "Stripe",
            "profile_image": "https://i.pravatar.cc/150?u=james",
            "position": [550, 350],
            "visual_size": 9,
            "category": "recommended",
            "skills": ["Product Strategy", "Agile", "Analytics"],
            "connections": 178,
            "projects": 42,
            "rating": 4.7,
            "connection_strength": 0.3,
            "last_activity_at": "2024-10-26T13:15:00Z",
        },
    ]
    edges = [
        {"id": "user-sarah", "source_id": "user", "target_id": "sarah", "strength": 0.9,
         "strength_class": "strong", "projects": 5, "connected_at": "2024-01-15T00:00:00Z"},
        {"id": "user-michael", "source_id": "user", "target_id": "michael", "strength": 0.8,
         "strength_class": "strong", "projects": 3, "connected_at": "2024-02-20T00:00:00Z"},
        {"id": "user-emily", "source_id": "user", "target_id": "emily", "strength": 0.85,
         "strength_class": "strong", "projects": 4, "connected_at": "2024-03-10T00:00:00Z"},
        {"id": "user-david", "source_id": "user", "target_id": "david", "strength": 0.7,
         "strength_class": "medium", "projects": 2, "connected_at": "2024-05-05T00:00:00Z"},
        {"id": "sarah-alex", "source_id": "sarah", "target_id": "alex", "strength": 0.6,
         "strength_class": "medium", "projects": 1, "connected_at": "2024-04-12T00:00:00Z"},
        {"id": "michael-maria", "source_id": "michael", "target_id": "maria", "strength": 0.5,
         "strength_class": "weak", "projects": 0, "connected_at": "2024-06-08T00:00:00Z"},
    ]
    return {"nodes": nodes, "edges": edges}


def build_model(dataset: Dict[str, List[Dict[str, Any]]]) -> GraphModel:
    return GraphModel(GraphDataset.from_records(dataset["nodes"], dataset.get("edges", [])))


def load_dataset(path: Optional[Path] = None) -> GraphModel:
    """
    Load ``{"nodes": [...], "edges": [...]}`` from a JSON file, or the bundled
    sample network when no path is given.
    """
    if path is None:
        return build_model(sample_dataset())
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "nodes" not in data:
        raise ValueError(f"{path} must contain a JSON object with a 'nodes' array")
    if not isinstance(data["nodes"], list) or not isinstance(data.get("edges", []), list):
        raise ValueError(f"{path}: 'nodes' and 'edges' must be arrays")
    logger.info("Loading graph dataset from %s", path)
    return build_model(data)
