"""Viewport — zoom scale and pan offset of the rendered diagram."""

from __future__ import annotations

import logging

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig
from workflow_diagram.layout.types import Point

logger = logging.getLogger(__name__)

ZOOM_IN = "in"
ZOOM_OUT = "out"


class ViewportController:
    """Device coordinates map to diagram coordinates as
    ``device = diagram * scale + pan``.

    Pan is tracked so pointer input can be converted back to diagram space;
    the SVG renderer only applies the scale.
    """

    def __init__(self, config: DiagramConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.scale = 1.0
        self.pan = Point(x=0.0, y=0.0)

    def current_scale(self) -> float:
        return self.scale

    def zoom(self, direction: str) -> float:
        """Zoom one step in or out, clamped to the configured scale bounds."""
        if direction not in (ZOOM_IN, ZOOM_OUT):
            raise ValueError(f"Zoom direction must be {ZOOM_IN!r} or {ZOOM_OUT!r}, got {direction!r}")
        if not self.config.zoom_enabled:
            return self.scale

        if direction == ZOOM_IN:
            scale = self.scale * self.config.zoom_step
        else:
            scale = self.scale / self.config.zoom_step
        self.scale = min(self.config.max_scale, max(self.config.min_scale, scale))
        logger.debug("Zoom %s -> %.3f", direction, self.scale)
        return self.scale

    def reset_zoom(self) -> float:
        self.scale = 1.0
        return self.scale

    def pan_by(self, dx: float, dy: float) -> Point:
        self.pan = Point(x=self.pan.x + dx, y=self.pan.y + dy)
        return self.pan

    def reset_pan(self) -> None:
        self.pan = Point(x=0.0, y=0.0)

    def to_diagram(self, x: float, y: float) -> Point:
        """Convert a device pointer coordinate into diagram space."""
        return Point(x=(x - self.pan.x) / self.scale, y=(y - self.pan.y) / self.scale)
