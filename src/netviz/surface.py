"""
Drawing surfaces the render pipeline can target.

Coordinates handed to the draw methods are always world coordinates; the
surface applies whatever transform was pushed last.
"""
from __future__ import annotations

import html
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .models import Point
from .transform import ViewTransform

logger = logging.getLogger(__name__)


class DrawingSurface(ABC):
    """Minimal 2D drawing capability injected into the render pipeline."""

    @property
    def is_ready(self) -> bool:
        return True

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def push_transform(self, transform: ViewTransform) -> None: ...

    @abstractmethod
    def pop_transform(self) -> None: ...

    @abstractmethod
    def draw_line(
        self, start: Point, end: Point, color: str, width: float, opacity: float = 1.0
    ) -> None: ...

    @abstractmethod
    def draw_circle(
        self,
        center: Point,
        radius: float,
        fill: Optional[str] = None,
        stroke: Optional[str] = None,
        stroke_width: float = 1.0,
        opacity: float = 1.0,
    ) -> None: ...

    @abstractmethod
    def draw_text(
        self, text: str, position: Point, font_size: float, color: str, opacity: float = 1.0
    ) -> None: ...


class DrawCommand(BaseModel):
    kind: str
    args: Dict[str, Any] = Field(default_factory=dict)


class RecordingSurface(DrawingSurface):
    """
    Keeps every draw call in order. Each ``clear()`` starts a new frame.
    """

    def __init__(self, ready: bool = True) -> None:
        self.ready = ready
        self.commands: List[DrawCommand] = []
        self.frames = 0
        self.transform_depth = 0

    @property
    def is_ready(self) -> bool:
        return self.ready

    def _record(self, kind: str, **args: Any) -> None:
        self.commands.append(DrawCommand(kind=kind, args=args))

    def clear(self) -> None:
        self.frames += 1
        self._record("clear")

    def push_transform(self, transform: ViewTransform) -> None:
        self.transform_depth += 1
        self._record("push_transform", transform=transform)

    def pop_transform(self) -> None:
        if self.transform_depth == 0:
            raise RuntimeError("pop_transform without matching push_transform")
        self.transform_depth -= 1
        self._record("pop_transform")

    def draw_line(self, start, end, color, width, opacity=1.0) -> None:
        self._record("line", start=start, end=end, color=color, width=width, opacity=opacity)

    def draw_circle(
        self, center, radius, fill=None, stroke=None, stroke_width=1.0, opacity=1.0
    ) -> None:
        self._record(
            "circle",
            center=center,
            radius=radius,
            fill=fill,
            stroke=stroke,
            stroke_width=stroke_width,
            opacity=opacity,
        )

    def draw_text(self, text, position, font_size, color, opacity=1.0) -> None:
        self._record(
            "text", text=text, position=position, font_size=font_size, color=color, opacity=opacity
        )

    def last_frame(self) -> List[DrawCommand]:
        for idx in range(len(self.commands) - 1, -1, -1):
            if self.commands[idx].kind == "clear":
                return self.commands[idx:]
        return []

    def of_kind(self, kind: str) -> List[DrawCommand]:
        return [cmd for cmd in self.last_frame() if cmd.kind == kind]


def _num(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class SvgSurface(DrawingSurface):
    """Renders frames into a standalone SVG document."""

    def __init__(self, width: int, height: int, background: str = "#f8fafc") -> None:
        self.width = width
        self.height = height
        self.background = background
        self._elements: List[str] = []
        self._open_groups = 0

    def clear(self) -> None:
        self._elements = []
        self._open_groups = 0

    def push_transform(self, transform: ViewTransform) -> None:
        self._open_groups += 1
        self._elements.append(
            f'<g transform="translate({_num(transform.translate.x)},{_num(transform.translate.y)}) '
            f'scale({_num(transform.scale)})">'
        )

    def pop_transform(self) -> None:
        if self._open_groups == 0:
            raise RuntimeError("pop_transform without matching push_transform")
        self._open_groups -= 1
        self._elements.append("</g>")

    def draw_line(self, start, end, color, width, opacity=1.0) -> None:
        self._elements.append(
            f'<line x1="{_num(start.x)}" y1="{_num(start.y)}" x2="{_num(end.x)}" y2="{_num(end.y)}" '
            f'stroke="{color}" stroke-width="{_num(width)}" stroke-opacity="{_num(opacity)}"/>'
        )

    def draw_circle(
        self, center, radius, fill=None, stroke=None, stroke_width=1.0, opacity=1.0
    ) -> None:
        self._elements.append(
            f'<circle cx="{_num(center.x)}" cy="{_num(center.y)}" r="{_num(radius)}" '
            f'fill="{fill or "none"}" stroke="{stroke or "none"}" '
            f'stroke-width="{_num(stroke_width)}" opacity="{_num(opacity)}"/>'
        )

    def draw_text(self, text, position, font_size, color, opacity=1.0) -> None:
        self._elements.append(
            f'<text x="{_num(position.x)}" y="{_num(position.y)}" font-family="Arial" '
            f'font-size="{_num(font_size)}" text-anchor="middle" fill="{color}" '
            f'opacity="{_num(opacity)}">{html.escape(text)}</text>'
        )

    def to_svg(self) -> str:
        body = "\n  ".join(self._elements)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">\n'
            f'  <rect width="100%" height="100%" fill="{self.background}"/>\n'
            f"  {body}\n"
            "</svg>\n"
        )

    def save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_svg(), encoding="utf-8")
        logger.info("Wrote SVG frame to %s", path)
        return path
