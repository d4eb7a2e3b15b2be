"""Diagram layout: level resolution, grid placement and connection routing."""

from workflow_diagram.layout.engine import (
    diagram_extents,
    group_by_level,
    layout,
    resolve_levels,
    route,
    route_edges,
    snap_to_grid,
)
from workflow_diagram.layout.types import ConnectionPath, LayoutResult, ParallelGroup, Point, Position

__all__ = [
    "ConnectionPath",
    "LayoutResult",
    "ParallelGroup",
    "Point",
    "Position",
    "diagram_extents",
    "group_by_level",
    "layout",
    "resolve_levels",
    "route",
    "route_edges",
    "snap_to_grid",
]
