"""
Data models for people, relationships, and graph statistics.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DataIntegrityError(ValueError):
    """Raised when a dataset is structurally inconsistent."""


class NodeNotFoundError(KeyError):
    """Raised when a node id does not exist in the graph."""


class Point(BaseModel):
    """
    A 2D point. The same type carries world and screen coordinates; which
    space a point lives in is decided by the function that receives it.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (tuple, list)) and len(data) == 2:
            return {"x": data[0], "y": data[1]}
        return data

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(x=self.x * factor, y=self.y * factor)

    def __truediv__(self, factor: float) -> "Point":
        return Point(x=self.x / factor, y=self.y / factor)

    def distance_to(self, other: "Point") -> float:
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5


class NodeCategory(str, Enum):
    SELF = "self"
    DIRECT = "direct"
    MUTUAL = "mutual"
    RECOMMENDED = "recommended"
    POTENTIAL = "potential"


class StrengthClass(str, Enum):
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"

    @classmethod
    def from_strength(cls, strength: float) -> "StrengthClass":
        if strength >= 0.8:
            return cls.STRONG
        if strength >= 0.6:
            return cls.MEDIUM
        return cls.WEAK


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable identifier (e.g., slug)")
    display_name: str
    title: str = ""
    company: Optional[str] = None
    position: Point
    visual_size: float = Field(..., gt=0, description="Base radius in world units")
    category: NodeCategory
    skills: Tuple[str, ...] = ()
    connection_strength: float = Field(0.0, ge=0.0, le=1.0)
    last_activity_at: datetime
    connections: int = Field(0, ge=0)
    projects: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0.0, le=5.0)
    profile_image: Optional[str] = None


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    source_id: str
    target_id: str
    strength: float = Field(..., ge=0.0, le=1.0)
    strength_class: StrengthClass
    projects: int = Field(0, ge=0)
    connected_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_strength_class(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("strength_class") is None and "strength" in data:
            data = dict(data)
            data["strength_class"] = StrengthClass.from_strength(float(data["strength"]))
        return data

    def touches(self, node_id: str) -> bool:
        return node_id in (self.source_id, self.target_id)


class GraphDataset(BaseModel):
    """
    Aggregate handed over by the data source. Node insertion order is the
    node draw order; edge list order is the edge draw order.
    """

    nodes: Dict[str, Node] = Field(default_factory=dict)
    edges: List[Edge] = Field(default_factory=list)

    @classmethod
    def from_records(
        cls,
        nodes: Iterable[Node | Dict[str, Any]],
        edges: Iterable[Edge | Dict[str, Any]] = (),
    ) -> "GraphDataset":
        mapping: Dict[str, Node] = {}
        for record in nodes:
            node = _coerce(Node, record)
            if node.id in mapping:
                raise DataIntegrityError(f"Duplicate node id: {node.id}")
            mapping[node.id] = node
        edge_list = [_coerce(Edge, record) for record in edges]
        return cls(nodes=mapping, edges=edge_list)


def _coerce(kind, record):
    if isinstance(record, kind):
        return record
    if not isinstance(record, dict):
        raise DataIntegrityError(f"{kind.__name__} record must be an object, got {type(record).__name__}")
    return kind(**record)


class NetworkStats(BaseModel):
    total_nodes: int
    total_edges: int
    average_connections: float
    network_density: float
    strong_connections: int
    medium_connections: int
    weak_connections: int
    clustering_coefficient: float
    average_shortest_path: float
