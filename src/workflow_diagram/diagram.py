"""Diagram — the host-facing boundary of the engine.

Owns the current graph, the position store and both controllers, and wires
them together:

    jobs mapping → JobGraph → resolve_levels → layout (only while the store
    is empty) → PositionStore → build_view → renderer

Pointer events go to ``Diagram.interaction``; zoom goes to
``Diagram.viewport``. Every draw recomputes levels and routes from scratch,
so drawing twice with nothing changed yields the same view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig
from workflow_diagram.errors import DiagramError, EmptyGraphError
from workflow_diagram.graph import Job, JobGraph
from workflow_diagram.interaction import InteractionController
from workflow_diagram.layout.engine import diagram_extents, layout, resolve_levels
from workflow_diagram.positions import PositionStore
from workflow_diagram.renderers.base import Renderer
from workflow_diagram.renderers.svg import SvgRenderer
from workflow_diagram.view import DiagramView, build_view, empty_view
from workflow_diagram.viewport import ViewportController

logger = logging.getLogger(__name__)


class DetailView(Protocol):
    """The job-detail collaborator: renders a job until ``on_close`` is called."""

    def __call__(self, job: Job, job_id: str, on_close: Callable[[], None]) -> Any: ...


class Diagram:
    def __init__(
        self,
        config: DiagramConfig = DEFAULT_CONFIG,
        on_select: Callable[[str], None] | None = None,
        on_resize: Callable[[int, int], None] | None = None,
        detail: DetailView | None = None,
    ) -> None:
        self.config = config
        self.on_select = on_select
        self.on_resize = on_resize
        self.detail = detail

        self.graph = JobGraph([])
        self.store = PositionStore(config.grid_unit)
        self.viewport = ViewportController(config)
        self.interaction = InteractionController(
            self.graph, self.store, self.viewport, config, on_select=self._handle_select
        )
        self.extents: tuple[int, int] = (config.min_width, config.min_height)
        self._signature: tuple | None = None

    def set_graph(self, jobs: Mapping[str, Any] | JobGraph | None) -> DiagramView:
        """Show a new (or updated) job graph and return its view.

        Positions are reseeded only when the set of jobs or their dependencies
        changed; otherwise the user's arrangement is kept.

        Raises:
            DependencyCycleError: the graph has a cycle. Nothing is seeded.
        """
        graph = jobs if isinstance(jobs, JobGraph) else JobGraph.from_mapping(jobs)
        signature = graph.signature()

        if signature != self._signature:
            if not self.store.is_empty():
                logger.info("Job set changed; discarding %d positions", len(self.store))
            self.store.clear()
            self.interaction.reset(graph)
            self._signature = signature
        else:
            self.interaction.graph = graph
        self.graph = graph

        try:
            levels = resolve_levels(graph, strict=self.config.strict_dependencies)
        except DiagramError:
            # Forget the signature so fixing the graph triggers a fresh layout.
            self._signature = None
            raise

        try:
            result = layout(graph, levels, self.config)
        except EmptyGraphError:
            logger.debug("Empty graph; nothing to draw")
            self._resize(self.config.min_width, self.config.min_height)
            return empty_view(self.viewport.current_scale(), self.config)

        if self.store.is_empty():
            self.store.seed(result.positions)
            logger.info("Seeded positions for %d jobs in %d levels", len(result.positions), result.level_count)

        self._resize(*diagram_extents(result, self.config))
        return self.draw()

    def draw(self) -> DiagramView:
        """Current view of the diagram. Pure with respect to engine state."""
        if len(self.graph) == 0:
            return empty_view(self.viewport.current_scale(), self.config)
        levels = resolve_levels(self.graph, strict=self.config.strict_dependencies)
        view = build_view(
            self.graph,
            levels,
            self.store,
            selected=self.interaction.selected,
            hovered=self.interaction.hovered,
            highlighted=self.interaction.highlighted,
            scale=self.viewport.current_scale(),
            config=self.config,
        )
        if view.skipped_edges:
            logger.warning("%d edges skipped: unresolved dependencies %s", len(view.skipped_edges), view.skipped_edges)
        return view

    def render(self, renderer: Renderer) -> str:
        return renderer.render(self.draw())

    def render_svg(self) -> str:
        return self.render(SvgRenderer())

    # ─── Host callbacks ─────────────────────────────────────────────────────

    def close_detail(self) -> None:
        self.interaction.close_detail()

    def _handle_select(self, job_id: str) -> None:
        if self.on_select is not None:
            self.on_select(job_id)
        if self.detail is not None:
            self.detail(self.graph[job_id], job_id, self.close_detail)

    def _resize(self, width: int, height: int) -> None:
        self.extents = (width, height)
        if self.on_resize is not None:
            self.on_resize(width, height)
