"""Diagram configuration: geometry constants and interaction flags."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from enum import Enum

from dotenv import load_dotenv

ENV_PREFIX = "WORKFLOW_DIAGRAM_"


class GesturePolicy(Enum):
    """How a pointer-down on a job is told apart from the start of a drag."""

    MOVE_THRESHOLD = "move_threshold"  # press, then move past drag_threshold to drag
    DRAG_HANDLE = "drag_handle"  # only presses on the drag handle drag


@dataclass(frozen=True)
class DiagramConfig:
    """Geometry is in diagram-space units; every layout coordinate is a
    multiple of ``grid_unit``.
    """

    grid_unit: int = 20
    box_width: int = 180
    box_height: int = 80
    canvas_half_height: int = 300
    min_width: int = 1200
    min_height: int = 600

    zoom_step: float = 1.2
    min_scale: float = 0.5
    max_scale: float = 2.0
    zoom_enabled: bool = True

    gesture: GesturePolicy = GesturePolicy.MOVE_THRESHOLD
    drag_threshold: float = 4.0

    strict_dependencies: bool = False

    @property
    def margin(self) -> int:
        return 2 * self.grid_unit

    @property
    def level_pitch(self) -> int:
        """Horizontal distance between consecutive levels."""
        return self.box_width + 2 * self.grid_unit

    @property
    def row_pitch(self) -> int:
        """Vertical distance between consecutive jobs in one level."""
        return self.box_height + self.grid_unit


DEFAULT_CONFIG = DiagramConfig()


def _coerce(raw: str, current: object) -> object:
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    if isinstance(current, GesturePolicy):
        return GesturePolicy(raw.strip().lower())
    return raw


def load_config(base: DiagramConfig = DEFAULT_CONFIG, env: dict[str, str] | None = None) -> DiagramConfig:
    """Build a config from ``base`` with ``WORKFLOW_DIAGRAM_<FIELD>`` overrides.

    When ``env`` is not given, a ``.env`` file is loaded first and the process
    environment is used.
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    overrides: dict[str, object] = {}
    for f in fields(base):
        raw = env.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        try:
            overrides[f.name] = _coerce(raw, getattr(base, f.name))
        except ValueError as exc:
            raise ValueError(f"Invalid value for {ENV_PREFIX}{f.name.upper()}: {raw!r}") from exc
    return replace(base, **overrides)
