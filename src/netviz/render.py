"""
Frame rendering: edges, then nodes with their decorations, then labels.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Dict, Optional

from pydantic import BaseModel

from .config import Settings, settings
from .graph import GraphModel
from .models import NodeCategory, Point, StrengthClass
from .search import filter_by_category
from .surface import DrawingSurface
from .transform import ViewTransform

logger = logging.getLogger(__name__)

EDGE_COLORS: Dict[StrengthClass, str] = {
    StrengthClass.STRONG: "rgb(59,130,246)",
    StrengthClass.MEDIUM: "rgb(16,185,129)",
    StrengthClass.WEAK: "rgb(156,163,175)",
}

CATEGORY_COLORS: Dict[NodeCategory, str] = {
    NodeCategory.SELF: "#2563EB",
    NodeCategory.DIRECT: "#3B82F6",
    NodeCategory.MUTUAL: "#10B981",
    NodeCategory.RECOMMENDED: "#F59E0B",
    NodeCategory.POTENTIAL: "#EF4444",
}

SELECTION_COLOR = "#1F2937"
SELECTION_WIDTH = 3.0
HIGHLIGHT_COLOR = "#F59E0B"
HIGHLIGHT_WIDTH = 2.0
SELF_RING_COLOR = "#1F2937"
SELF_RING_GAP = 3.0
SELF_RING_WIDTH = 2.0
LABEL_COLOR = "#1F2937"
LABEL_OFFSET = 15.0
DIMMED_OPACITY = 0.15


class RenderOptions(BaseModel):
    show_labels: bool = True
    label_visibility_scale_threshold: float = 0.5
    min_font_size: float = 10.0
    base_font_size: float = 12.0
    max_font_size: float = 24.0
    filter_category: Optional[str] = None

    @classmethod
    def from_settings(cls, config: Settings | None = None, **overrides) -> "RenderOptions":
        config = config or settings
        values = {
            "label_visibility_scale_threshold": config.label_visibility_scale_threshold,
            "min_font_size": config.min_font_size,
            "base_font_size": config.base_font_size,
            "max_font_size": config.max_font_size,
        }
        values.update(overrides)
        return cls(**values)


def edge_width(strength: float) -> float:
    return max(1.0, strength * 4)


def label_font_size(scale: float, options: RenderOptions) -> float:
    return min(options.max_font_size, max(options.min_font_size, options.base_font_size * scale))


def labels_visible(transform: ViewTransform, options: RenderOptions) -> bool:
    return options.show_labels and transform.scale > options.label_visibility_scale_threshold


def render(
    surface: Optional[DrawingSurface],
    model: GraphModel,
    transform: ViewTransform,
    selected_id: Optional[str] = None,
    highlight_ids: AbstractSet[str] = frozenset(),
    options: Optional[RenderOptions] = None,
) -> bool:
    """
    Draw one full frame. Returns False without drawing when the surface is
    missing or not ready yet.
    """
    if surface is None or not surface.is_ready:
        logger.debug("Skipping render: drawing surface unavailable")
        return False
    options = options or RenderOptions.from_settings()
    visible = filter_by_category(options.filter_category, model)

    surface.clear()
    surface.push_transform(transform)
    try:
        for edge in model.all_edges():
            source = model.get_node(edge.source_id)
            target = model.get_node(edge.target_id)
            opacity = edge.strength
            if source.id not in visible or target.id not in visible:
                opacity *= DIMMED_OPACITY
            surface.draw_line(
                source.position,
                target.position,
                color=EDGE_COLORS[edge.strength_class],
                width=edge_width(edge.strength),
                opacity=opacity,
            )

        for node in model.all_nodes():
            opacity = 1.0 if node.id in visible else DIMMED_OPACITY
            surface.draw_circle(
                node.position,
                node.visual_size,
                fill=CATEGORY_COLORS[node.category],
                opacity=opacity,
            )
            if node.id == selected_id:
                surface.draw_circle(
                    node.position,
                    node.visual_size,
                    stroke=SELECTION_COLOR,
                    stroke_width=SELECTION_WIDTH,
                )
            elif node.id in highlight_ids:
                surface.draw_circle(
                    node.position,
                    node.visual_size,
                    stroke=HIGHLIGHT_COLOR,
                    stroke_width=HIGHLIGHT_WIDTH,
                )
            if node.category == NodeCategory.SELF:
                surface.draw_circle(
                    node.position,
                    node.visual_size + SELF_RING_GAP,
                    stroke=SELF_RING_COLOR,
                    stroke_width=SELF_RING_WIDTH,
                )

        if labels_visible(transform, options):
            font_size = label_font_size(transform.scale, options)
            for node in model.all_nodes():
                anchor = node.position + Point(x=0.0, y=node.visual_size + LABEL_OFFSET)
                surface.draw_text(
                    node.display_name,
                    anchor,
                    font_size=font_size,
                    color=LABEL_COLOR,
                    opacity=1.0 if node.id in visible else DIMMED_OPACITY,
                )
    finally:
        surface.pop_transform()
    return True
