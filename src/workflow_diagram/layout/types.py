"""Layout types shared by the layout engine, the controllers and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    """Top-left corner of a job box in diagram space."""

    x: float
    y: float


@dataclass(frozen=True)
class ParallelGroup:
    """Jobs sharing a level, in graph insertion order."""

    level: int
    job_ids: tuple[str, ...]

    @property
    def is_parallel(self) -> bool:
        return len(self.job_ids) > 1


@dataclass(frozen=True)
class Point:
    """A 2D point in diagram space."""

    x: float
    y: float


@dataclass(frozen=True)
class ConnectionPath:
    """An orthogonal connection between two job boxes.

    Waypoints: exit on the source's right edge, the bend column going out,
    the bend column coming in, entry on the target's left edge.
    """

    points: tuple[Point, ...]

    def to_svg(self) -> str:
        """SVG path ``d`` attribute: one move followed by H/V/H segments."""
        start, bend_out, bend_in, end = self.points
        return (
            f"M {format_coord(start.x)} {format_coord(start.y)} "
            f"H {format_coord(bend_out.x)} V {format_coord(bend_in.y)} H {format_coord(end.x)}"
        )


@dataclass
class LayoutResult:
    """Initial positions and the level grouping they were computed from."""

    positions: dict[str, Position]
    groups: dict[int, ParallelGroup] = field(default_factory=dict)

    @property
    def level_count(self) -> int:
        return len(self.groups)

    @property
    def max_group_size(self) -> int:
        return max((len(g.job_ids) for g in self.groups.values()), default=0)


def format_coord(value: float) -> str:
    """Format a coordinate without a trailing ``.0`` for whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
