"""
Interaction state machine binding pointer, keyboard, and toolbar events to
the view transform, selection, and highlight state.

The controller is the only owner of that state. Each public handler mutates
what it needs and then redraws exactly once, so a frame never shows half of
an interaction.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, FrozenSet, Optional

from .config import Settings, settings
from .graph import GraphModel
from .hit_test import pick
from .models import Node, NodeCategory, Point
from .render import RenderOptions, render
from .search import ALL_CATEGORIES, search
from .surface import DrawingSurface
from .transform import ViewTransform

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[Optional[str]], None]


class InteractionState(str, Enum):
    IDLE = "idle"
    PANNING = "panning"
    ZOOMING = "zooming"


class ViewportController:
    def __init__(
        self,
        model: GraphModel,
        surface: Optional[DrawingSurface] = None,
        config: Optional[Settings] = None,
        on_selection_change: Optional[SelectionCallback] = None,
    ) -> None:
        self.model = model
        self.surface = surface
        self.config = config or settings
        self.on_selection_change = on_selection_change
        self._transform = ViewTransform.from_settings(self.config)
        self._options = RenderOptions.from_settings(self.config)
        self._viewport = Point(x=self.config.viewport_width, y=self.config.viewport_height)
        self._state = InteractionState.IDLE
        self._selected_id: Optional[str] = None
        self._highlighted: FrozenSet[str] = frozenset()
        self._search_term = ""
        self._pointer_anchor: Optional[Point] = None
        self._last_pointer: Optional[Point] = None
        self._dragged = False
        self._swallow_click = False

    # ------------------------------------------------------------------
    # Read-only view of the session state
    # ------------------------------------------------------------------
    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    @property
    def selected_node_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_node(self) -> Optional[Node]:
        if self._selected_id is None:
            return None
        return self.model.get_node(self._selected_id)

    @property
    def highlighted_node_ids(self) -> FrozenSet[str]:
        return self._highlighted

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def options(self) -> RenderOptions:
        return self._options

    @property
    def viewport_center(self) -> Point:
        return self._viewport / 2

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def redraw(self) -> bool:
        return render(
            self.surface,
            self.model,
            self._transform,
            self._selected_id,
            self._highlighted,
            self._options,
        )

    def attach_surface(self, surface: DrawingSurface) -> None:
        self.surface = surface
        self.redraw()

    def set_viewport_size(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("viewport dimensions must be positive")
        self._viewport = Point(x=width, y=height)
        self.redraw()

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------
    def on_pointer_down(self, point: Point) -> None:
        if self._state != InteractionState.IDLE:
            logger.debug("pointer down ignored in state %s", self._state.value)
            return
        self._state = InteractionState.PANNING
        self._pointer_anchor = point
        self._last_pointer = point
        self._dragged = False

    def on_pointer_move(self, point: Point) -> None:
        if self._state != InteractionState.PANNING:
            return
        delta = point - self._last_pointer
        self._last_pointer = point
        self._note_displacement(point)
        if delta.x == 0 and delta.y == 0:
            return
        self._transform = self._transform.pan_by(delta)
        self.redraw()

    def on_pointer_up(self, point: Point) -> None:
        if self._state != InteractionState.PANNING:
            return
        self._note_displacement(point)
        self._swallow_click = self._dragged
        self._state = InteractionState.IDLE
        self._pointer_anchor = None
        self._last_pointer = None
        self._dragged = False

    def on_click(self, point: Point) -> None:
        if self._swallow_click:
            # The click closes a drag gesture, not a selection.
            self._swallow_click = False
            logger.debug("click after drag ignored")
            return
        if self._state != InteractionState.IDLE:
            return
        self._set_selection(pick(point, self._transform, self.model))
        self.redraw()

    def _note_displacement(self, point: Point) -> None:
        if self._pointer_anchor.distance_to(point) > self.config.drag_threshold_pixels:
            self._dragged = True

    # ------------------------------------------------------------------
    # Toolbar and keyboard requests
    # ------------------------------------------------------------------
    def zoom_in(self) -> None:
        self._zoom(self.config.zoom_step)

    def zoom_out(self) -> None:
        self._zoom(1 / self.config.zoom_step)

    def _zoom(self, factor: float) -> None:
        if self._state != InteractionState.IDLE:
            logger.debug("zoom ignored in state %s", self._state.value)
            return
        self._state = InteractionState.ZOOMING
        try:
            self._transform = self._transform.zoom_at(self.viewport_center, factor)
        finally:
            self._state = InteractionState.IDLE
        self.redraw()

    def pan_by(self, delta: Point) -> None:
        if self._state != InteractionState.IDLE:
            return
        self._transform = self._transform.pan_by(delta)
        self.redraw()

    def reset_view(self) -> None:
        self._transform = self._transform.reset()
        self._set_selection(None)
        self._highlighted = frozenset()
        self._search_term = ""
        self.redraw()

    def select_node(self, node_id: Optional[str]) -> None:
        if node_id is not None:
            self.model.get_node(node_id)
        self._set_selection(node_id)
        self.redraw()

    def set_search_term(self, term: Optional[str]) -> None:
        self._search_term = term or ""
        self._highlighted = search(self._search_term, self.model)
        self.redraw()

    def set_show_labels(self, show: bool) -> None:
        self._options = self._options.model_copy(update={"show_labels": bool(show)})
        self.redraw()

    def set_filter_category(self, category: Optional[str]) -> None:
        if category is not None and category != ALL_CATEGORIES:
            category = NodeCategory(category).value
        self._options = self._options.model_copy(update={"filter_category": category})
        self.redraw()

    def _set_selection(self, node_id: Optional[str]) -> None:
        if node_id == self._selected_id:
            return
        self._selected_id = node_id
        logger.debug("selection changed to %s", node_id)
        if self.on_selection_change is not None:
            self.on_selection_change(node_id)
