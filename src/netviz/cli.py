"""
Typer-powered CLI for inspecting, searching, and rendering a network graph.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from .config import configure_logging, settings
from .graph import GraphModel
from .hit_test import pick as pick_node
from .models import NodeCategory, NodeNotFoundError, Point
from .render import RenderOptions, render as render_frame
from .sample import load_dataset
from .search import ALL_CATEGORIES, search as search_nodes
from .surface import SvgSurface
from .transform import ViewTransform

app = typer.Typer(add_completion=False, help="Professional network graph viewer CLI")

DataOption = typer.Option(None, "--data", "-d", help="JSON file with nodes and edges arrays")


@app.callback()
def main(log_level: str = typer.Option(settings.log_level, help="Logging level")):
    configure_logging(log_level)


def _load(data: Optional[Path]) -> GraphModel:
    try:
        return load_dataset(data)
    except ValueError as exc:
        print(f"[red]Invalid graph data: {exc}[/red]")
        raise typer.Exit(code=1)


def _transform(zoom: float, pan_x: float, pan_y: float) -> ViewTransform:
    return ViewTransform(
        scale=zoom,
        translate=Point(x=pan_x, y=pan_y),
        min_scale=settings.min_scale,
        max_scale=settings.max_scale,
    )


@app.command()
def stats(data: Optional[Path] = DataOption):
    """
    Summarize the network: size, density, and connection strength mix.
    """
    summary = _load(data).stats()
    table = Table("Metric", "Value")
    table.add_row("Total connections", str(summary.total_nodes))
    table.add_row("Total relationships", str(summary.total_edges))
    table.add_row("Average connections", f"{summary.average_connections:.1f}")
    table.add_row("Network density", f"{summary.network_density:.3f}")
    table.add_row("Clustering coefficient", f"{summary.clustering_coefficient:.3f}")
    table.add_row("Average path length", f"{summary.average_shortest_path:.1f}")
    table.add_row("Strong connections", str(summary.strong_connections))
    table.add_row("Medium connections", str(summary.medium_connections))
    table.add_row("Weak connections", str(summary.weak_connections))
    print(table)


@app.command()
def search(term: str, data: Optional[Path] = DataOption):
    """
    List people whose name, title, or skills match TERM.
    """
    model = _load(data)
    matches = search_nodes(term, model)
    table = Table("Node ID", "Name", "Title", "Skills")
    for node in model.all_nodes():
        if node.id in matches:
            table.add_row(node.id, node.display_name, node.title, ", ".join(node.skills))
    print(table)
    print(f"{len(matches)} match(es)")


@app.command()
def pick(
    x: float,
    y: float,
    zoom: float = typer.Option(1.0, help="View scale"),
    pan_x: float = typer.Option(0.0, help="Horizontal translation in pixels"),
    pan_y: float = typer.Option(0.0, help="Vertical translation in pixels"),
    data: Optional[Path] = DataOption,
):
    """
    Resolve the node under screen point X Y for the given view.
    """
    model = _load(data)
    node_id = pick_node(Point(x=x, y=y), _transform(zoom, pan_x, pan_y), model)
    if node_id is None:
        print("[yellow]No node at that point[/yellow]")
        return
    node = model.get_node(node_id)
    print(f"[green]{node.id}[/green] {node.display_name} ({node.title})")


@app.command()
def path(source: str, target: str, data: Optional[Path] = DataOption):
    """
    Show the shortest chain of connections between two people.
    """
    model = _load(data)
    try:
        chain = model.connection_path(source, target)
    except NodeNotFoundError as exc:
        print(f"[red]Unknown node: {exc.args[0]}[/red]")
        raise typer.Exit(code=1)
    if chain is None:
        print(f"[yellow]No connection between {source} and {target}[/yellow]")
        return
    print(" -> ".join(model.get_node(node_id).display_name for node_id in chain))


@app.command()
def render(
    output: Path = typer.Argument(..., help="Destination SVG file"),
    term: Optional[str] = typer.Option(None, "--search", help="Highlight matching nodes"),
    select: Optional[str] = typer.Option(None, help="Node id to mark as selected"),
    zoom: float = typer.Option(1.0, help="View scale"),
    pan_x: float = typer.Option(0.0, help="Horizontal translation in pixels"),
    pan_y: float = typer.Option(0.0, help="Vertical translation in pixels"),
    labels: bool = typer.Option(True, "--labels/--no-labels", help="Draw node names"),
    category: Optional[str] = typer.Option(None, help="Dim nodes outside this category"),
    data: Optional[Path] = DataOption,
):
    """
    Render one frame of the network to an SVG file.
    """
    model = _load(data)
    if select is not None and not model.has_node(select):
        print(f"[red]Unknown node: {select}[/red]")
        raise typer.Exit(code=1)
    if category is not None and category != ALL_CATEGORIES:
        try:
            NodeCategory(category)
        except ValueError:
            print(f"[red]Unknown category: {category}[/red]")
            raise typer.Exit(code=1)
    surface = SvgSurface(settings.viewport_width, settings.viewport_height)
    options = RenderOptions.from_settings(show_labels=labels, filter_category=category)
    render_frame(
        surface,
        model,
        _transform(zoom, pan_x, pan_y),
        selected_id=select,
        highlight_ids=search_nodes(term, model),
        options=options,
    )
    surface.save(output)
    print(f"[green]Rendered {len(model)} nodes to {output}[/green]")


@app.command()
def export(output: Path = typer.Argument(..., help="Destination JSON file"), data: Optional[Path] = DataOption):
    """
    Export nodes, edges, and statistics as JSON.
    """
    model = _load(data)
    output.write_text(json.dumps(model.to_dict(), indent=2), encoding="utf-8")
    print(f"[green]Exported network data to {output}[/green]")


if __name__ == "__main__":
    app()
