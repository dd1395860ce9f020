"""
Affine mapping between world (graph) coordinates and screen pixels.

    screen = world * scale + translate
    world  = (screen - translate) / scale

Transforms are immutable values: every operation returns a new transform, so
the renderer and hit-tester can hold one without it changing underneath them.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import Settings, settings
from .models import Point


class ViewTransform(BaseModel):
    model_config = ConfigDict(frozen=True)

    scale: float = 1.0
    translate: Point = Field(default_factory=lambda: Point(x=0.0, y=0.0))
    min_scale: float = Field(default_factory=lambda: settings.min_scale)
    max_scale: float = Field(default_factory=lambda: settings.max_scale)

    @model_validator(mode="before")
    @classmethod
    def _clamp_scale(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        low = float(data.get("min_scale", settings.min_scale))
        high = float(data.get("max_scale", settings.max_scale))
        if low <= 0 or low > high:
            raise ValueError(f"invalid scale range [{low}, {high}]")
        scale = float(data.get("scale", 1.0))
        return {**data, "min_scale": low, "max_scale": high, "scale": min(high, max(low, scale))}

    @classmethod
    def from_settings(cls, config: Settings) -> "ViewTransform":
        return cls(min_scale=config.min_scale, max_scale=config.max_scale)

    def world_to_screen(self, point: Point) -> Point:
        return point * self.scale + self.translate

    def screen_to_world(self, point: Point) -> Point:
        return (point - self.translate) / self.scale

    def zoom_at(self, anchor: Point, factor: float) -> "ViewTransform":
        """
        Rescale by ``factor`` keeping the world point under ``anchor`` fixed on screen.
        """
        if factor <= 0:
            raise ValueError("zoom factor must be positive")
        new_scale = min(self.max_scale, max(self.min_scale, self.scale * factor))
        ratio = new_scale / self.scale
        translate = anchor - (anchor - self.translate) * ratio
        return self._replace(scale=new_scale, translate=translate)

    def pan_by(self, delta: Point) -> "ViewTransform":
        return self._replace(scale=self.scale, translate=self.translate + delta)

    def reset(self) -> "ViewTransform":
        return self._replace(scale=1.0, translate=Point(x=0.0, y=0.0))

    def _replace(self, scale: float, translate: Point) -> "ViewTransform":
        return ViewTransform(
            scale=scale,
            translate=translate,
            min_scale=self.min_scale,
            max_scale=self.max_scale,
        )
