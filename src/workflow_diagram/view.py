"""Declarative view of a diagram: what to draw, not how to draw it.

``build_view`` is a pure function of its inputs; renderers consume the
resulting ``DiagramView`` and never touch the position store themselves.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig
from workflow_diagram.graph import EdgeId, JobGraph
from workflow_diagram.layout.engine import diagram_extents, group_by_level, route_edges
from workflow_diagram.layout.types import ConnectionPath, LayoutResult
from workflow_diagram.positions import PositionStore


@dataclass(frozen=True)
class NodeView:
    id: str
    level: int
    x: float
    y: float
    width: int
    height: int
    selected: bool = False
    hovered: bool = False


@dataclass(frozen=True)
class EdgeView:
    source: str
    target: str
    path: ConnectionPath
    highlighted: bool = False


@dataclass(frozen=True)
class DiagramView:
    width: int
    height: int
    scale: float = 1.0
    grid_unit: int = DEFAULT_CONFIG.grid_unit
    nodes: tuple[NodeView, ...] = ()
    edges: tuple[EdgeView, ...] = ()
    skipped_edges: tuple[EdgeId, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.nodes


def empty_view(scale: float = 1.0, config: DiagramConfig = DEFAULT_CONFIG) -> DiagramView:
    return DiagramView(width=config.min_width, height=config.min_height, scale=scale, grid_unit=config.grid_unit)


def build_view(
    graph: JobGraph,
    levels: Mapping[str, int],
    store: PositionStore,
    selected: str | None = None,
    hovered: str | None = None,
    highlighted: Mapping[EdgeId, bool] | None = None,
    scale: float = 1.0,
    config: DiagramConfig = DEFAULT_CONFIG,
) -> DiagramView:
    """Map (graph, levels, positions, selection, hover, scale) to a view.

    Nodes appear in graph order, edges in ``needs`` order. Edges whose
    endpoints cannot be positioned are listed in ``skipped_edges`` instead.
    """
    if len(graph) == 0:
        return empty_view(scale, config)

    highlighted = highlighted or {}
    groups = group_by_level(graph, dict(levels))
    width, height = diagram_extents(LayoutResult(positions={}, groups=groups), config)

    nodes: list[NodeView] = []
    for job_id in graph.job_ids():
        position = store.get(job_id)
        if position is None:
            continue
        nodes.append(
            NodeView(
                id=job_id,
                level=levels[job_id],
                x=position.x,
                y=position.y,
                width=config.box_width,
                height=config.box_height,
                selected=job_id == selected,
                hovered=job_id == hovered,
            )
        )

    routed, skipped = route_edges(graph.edges(), store, config)
    edges = tuple(
        EdgeView(source=src, target=tgt, path=path, highlighted=highlighted.get((src, tgt), False))
        for (src, tgt), path in routed.items()
    )

    return DiagramView(
        width=width,
        height=height,
        scale=scale,
        grid_unit=config.grid_unit,
        nodes=tuple(nodes),
        edges=edges,
        skipped_edges=tuple(skipped),
    )
