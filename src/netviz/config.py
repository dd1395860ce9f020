"""
Central configuration for the network visualization engine.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, model_validator


class Settings(BaseModel):
    min_scale: float = 0.1
    max_scale: float = 3.0
    zoom_step: float = 1.1
    label_visibility_scale_threshold: float = 0.5
    drag_threshold_pixels: float = 4.0
    viewport_width: int = 800
    viewport_height: int = 600
    min_font_size: float = 10.0
    base_font_size: float = 12.0
    max_font_size: float = 24.0
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def _check_ranges(self) -> "Settings":
        if self.min_scale <= 0:
            raise ValueError("min_scale must be positive")
        if self.min_scale > self.max_scale:
            raise ValueError("min_scale must not exceed max_scale")
        if self.zoom_step <= 1:
            raise ValueError("zoom_step must be greater than 1")
        return self

    @classmethod
    def from_file(cls, path: Path) -> "Settings":
        """
        Load overrides from a JSON object; missing keys keep their defaults.
        """
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(**data)


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
