"""Layout engine — level resolution, grid layout and connection routing.

Phases:
  1. Level resolution (longest dependency chain ending at each job)
  2. Grid layout (one column per level, parallel groups stacked vertically)
  3. Connection routing (orthogonal right-edge → left-edge paths)

Phases 1 and 2 run once per graph; phase 3 runs on demand every time a
position changes, and its results are never cached.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from typing import Protocol

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig
from workflow_diagram.errors import DependencyCycleError, EmptyGraphError, UnresolvedDependencyError
from workflow_diagram.graph import EdgeId, JobGraph
from workflow_diagram.layout.types import ConnectionPath, LayoutResult, ParallelGroup, Point, Position

logger = logging.getLogger(__name__)


class PositionLookup(Protocol):
    def get(self, job_id: str) -> Position | None: ...


# ─── Level Resolution ─────────────────────────────────────────────────────────


def resolve_levels(graph: JobGraph, strict: bool = False) -> dict[str, int]:
    """Assign every job its dependency depth.

    level = 0 for jobs without dependencies, else 1 + max(level of each
    dependency). Depth-first with memoisation, so each job is evaluated once
    (O(V + E)). The DFS keeps an explicit stack instead of recursing, and a
    job seen again while still on that stack closes a cycle.

    Dependencies naming a missing job are ignored for depth purposes (the
    edge is dropped at render time); with ``strict=True`` they raise
    ``UnresolvedDependencyError`` instead.

    Raises:
        DependencyCycleError: the graph contains a cycle.
    """
    levels: dict[str, int] = {}
    on_stack: set[str] = set()

    def deps(job_id: str) -> Iterator[str]:
        for dep in graph[job_id].needs:
            if dep in graph:
                yield dep
            elif strict:
                raise UnresolvedDependencyError(dep, job_id)

    for root in graph.job_ids():
        if root in levels:
            continue

        path: list[str] = [root]
        stack: list[tuple[str, Iterator[str]]] = [(root, deps(root))]
        on_stack.add(root)

        while stack:
            job_id, pending = stack[-1]
            descended = False
            for dep in pending:
                if dep in levels:
                    continue
                if dep in on_stack:
                    cycle = path[path.index(dep) :] + [dep]
                    logger.error("Dependency cycle: %s", " -> ".join(cycle))
                    raise DependencyCycleError(cycle)
                path.append(dep)
                on_stack.add(dep)
                stack.append((dep, deps(dep)))
                descended = True
                break
            if descended:
                continue

            # Every resolvable dependency of job_id has a level by now.
            stack.pop()
            path.pop()
            on_stack.discard(job_id)
            dep_levels = [levels[d] for d in graph[job_id].needs if d in levels]
            levels[job_id] = max(dep_levels) + 1 if dep_levels else 0

    return levels


# ─── Grid Layout ──────────────────────────────────────────────────────────────


def snap_to_grid(value: float, grid_unit: int) -> int:
    """Round to the nearest multiple of ``grid_unit`` (halves round up)."""
    return int(math.floor(value / grid_unit + 0.5)) * grid_unit


def group_by_level(graph: JobGraph, levels: dict[str, int]) -> dict[int, ParallelGroup]:
    """Group job ids by level, preserving insertion order inside each level.

    The returned dict is ordered by increasing level.
    """
    buckets: dict[int, list[str]] = {}
    for job_id in graph.job_ids():
        buckets.setdefault(levels[job_id], []).append(job_id)
    return {level: ParallelGroup(level=level, job_ids=tuple(buckets[level])) for level in sorted(buckets)}


def layout(graph: JobGraph, levels: dict[str, int], config: DiagramConfig = DEFAULT_CONFIG) -> LayoutResult:
    """Compute the initial grid position of every job.

    Each level is a column: x = grid + Σ over earlier levels of
    (box_width + 2·grid), so x strictly increases with level. A column's
    jobs are stacked with pitch box_height + grid, centred on
    ``canvas_half_height``. The top of the stack is snapped to the grid and
    never placed above one grid unit, which keeps every coordinate
    grid-aligned and non-negative.

    Raises:
        EmptyGraphError: the graph has no jobs.
    """
    if len(graph) == 0:
        raise EmptyGraphError("No jobs to lay out")

    grid = config.grid_unit
    groups = group_by_level(graph, levels)
    positions: dict[str, Position] = {}

    x = grid
    for group in groups.values():
        count = len(group.job_ids)
        stack_height = count * config.box_height + (count - 1) * grid
        top = max(grid, snap_to_grid(config.canvas_half_height - stack_height / 2, grid))
        for index, job_id in enumerate(group.job_ids):
            positions[job_id] = Position(x=x, y=top + index * config.row_pitch)
        x += config.level_pitch

    logger.debug("Laid out %d jobs in %d levels", len(positions), len(groups))
    return LayoutResult(positions=positions, groups=groups)


def diagram_extents(result: LayoutResult, config: DiagramConfig = DEFAULT_CONFIG) -> tuple[int, int]:
    """Canvas (width, height) for a layout, never below the configured minimum."""
    diagram_width = result.level_count * config.level_pitch
    diagram_height = result.max_group_size * config.row_pitch
    return (
        max(config.min_width, diagram_width + config.margin),
        max(config.min_height, diagram_height + config.margin),
    )


# ─── Connection Routing (Orthogonal) ──────────────────────────────────────────


def route(
    source: Position | None,
    target: Position | None,
    config: DiagramConfig = DEFAULT_CONFIG,
) -> ConnectionPath | None:
    """Route one dependency → dependent connection.

    Strategy:
      - Exit at the right edge of the source box, vertical midpoint.
      - Bend at mid_x, halfway between source right edge and target left edge.
      - Run vertically to the target's midpoint row.
      - Enter the target box at its left edge.

    Returns None when either endpoint has no position.
    """
    if source is None or target is None:
        return None

    exit_x = source.x + config.box_width
    exit_y = source.y + config.box_height / 2
    entry_x = target.x
    entry_y = target.y + config.box_height / 2
    mid_x = (exit_x + entry_x) / 2

    return ConnectionPath(
        points=(
            Point(x=exit_x, y=exit_y),
            Point(x=mid_x, y=exit_y),
            Point(x=mid_x, y=entry_y),
            Point(x=entry_x, y=entry_y),
        )
    )


def route_edges(
    edges: Iterable[EdgeId],
    positions: PositionLookup,
    config: DiagramConfig = DEFAULT_CONFIG,
) -> tuple[dict[EdgeId, ConnectionPath], list[EdgeId]]:
    """Route each edge against the current positions.

    Returns (routed, skipped): skipped edges have an endpoint without a
    position, typically a ``needs`` entry naming a missing job.
    """
    routed: dict[EdgeId, ConnectionPath] = {}
    skipped: list[EdgeId] = []
    for edge in edges:
        src, tgt = edge
        path = route(positions.get(src), positions.get(tgt), config)
        if path is None:
            skipped.append(edge)
            continue
        routed[edge] = path
    if skipped:
        logger.debug("Skipped %d unroutable edges: %s", len(skipped), skipped)
    return routed, skipped
