"""
FastAPI service exposing the network graph, search, hit-testing, and SVG frames.
"""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Response

from .config import settings
from .hit_test import pick
from .models import NetworkStats, NodeCategory, NodeNotFoundError, Point
from .render import RenderOptions, render
from .sample import load_dataset
from .search import ALL_CATEGORIES, search
from .surface import SvgSurface
from .transform import ViewTransform

app = FastAPI(title="Network Graph Viewer", version="0.1.0")
model = load_dataset()


def _transform(scale: float, tx: float, ty: float) -> ViewTransform:
    return ViewTransform(
        scale=scale,
        translate=Point(x=tx, y=ty),
        min_scale=settings.min_scale,
        max_scale=settings.max_scale,
    )


@app.get("/graph")
def read_graph():
    return model.to_dict()


@app.get("/nodes/{node_id}")
def read_node(node_id: str):
    try:
        node = model.get_node(node_id)
    except NodeNotFoundError:
        raise HTTPException(status_code=404, detail="Node not found")
    return {
        "node": node.model_dump(mode="json"),
        "neighbors": [n.id for n in model.neighbors(node_id)],
    }


@app.get("/stats", response_model=NetworkStats)
def read_stats():
    return model.stats()


@app.get("/search")
def search_nodes(term: str = ""):
    matches = search(term, model)
    return {"term": term, "matches": [node.id for node in model.all_nodes() if node.id in matches]}


@app.get("/pick")
def pick_node(
    x: float,
    y: float,
    scale: float = Query(1.0, gt=0),
    tx: float = 0.0,
    ty: float = 0.0,
):
    transform = _transform(scale, tx, ty)
    return {"node_id": pick(Point(x=x, y=y), transform, model), "scale": transform.scale}


@app.get("/path")
def connection_path(source: str, target: str):
    try:
        chain = model.connection_path(source, target)
    except NodeNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown node: {exc.args[0]}")
    return {"source": source, "target": target, "path": chain}


@app.get("/render.svg")
def render_svg(
    term: str = "",
    selected: Optional[str] = None,
    scale: float = Query(1.0, gt=0),
    tx: float = 0.0,
    ty: float = 0.0,
    labels: bool = True,
    category: Optional[str] = None,
):
    if selected is not None and not model.has_node(selected):
        raise HTTPException(status_code=404, detail="Node not found")
    if category is not None and category != ALL_CATEGORIES:
        try:
            NodeCategory(category)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    surface = SvgSurface(settings.viewport_width, settings.viewport_height)
    render(
        surface,
        model,
        _transform(scale, tx, ty),
        selected_id=selected,
        highlight_ids=search(term, model),
        options=RenderOptions.from_settings(show_labels=labels, filter_category=category),
    )
    return Response(content=surface.to_svg(), media_type="image/svg+xml")
