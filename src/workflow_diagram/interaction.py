"""Interaction controller — pointer input → drag, hover highlight, selection.

States:
  Idle
  Hovering(job_id)          pointer over a job, its edges highlighted
  Pressed(job_id, ...)      pointer down on a job, gesture not yet decided
  Dragging(job_id, offset)  job follows the pointer, snapped to the grid

Selection is kept apart from these states: a job stays selected while the
pointer hovers, drags or leaves, until the detail view is closed.

Pointer coordinates arrive in device space and go through the viewport
before anything touches the position store.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig, GesturePolicy
from workflow_diagram.graph import EdgeId, JobGraph
from workflow_diagram.layout.engine import route_edges
from workflow_diagram.layout.types import ConnectionPath, Point
from workflow_diagram.positions import PositionStore
from workflow_diagram.viewport import ViewportController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Hovering:
    job_id: str


@dataclass(frozen=True)
class Pressed:
    job_id: str
    offset: Point  # pointer minus the job's stored position, diagram space
    origin: Point  # where the press happened, diagram space


@dataclass(frozen=True)
class Dragging:
    job_id: str
    offset: Point


State = Union[Idle, Hovering, Pressed, Dragging]


class InteractionController:
    """Translates pointer events into effects on the position store and on
    the edge-highlight map consulted by the renderer.
    """

    def __init__(
        self,
        graph: JobGraph,
        store: PositionStore,
        viewport: ViewportController,
        config: DiagramConfig = DEFAULT_CONFIG,
        on_select: Callable[[str], None] | None = None,
    ) -> None:
        self.graph = graph
        self.store = store
        self.viewport = viewport
        self.config = config
        self.on_select = on_select

        self.state: State = Idle()
        self.selected: str | None = None
        self.highlighted: dict[EdgeId, bool] = {}

    # ─── Queries ────────────────────────────────────────────────────────────

    @property
    def hovered(self) -> str | None:
        return self.state.job_id if isinstance(self.state, Hovering) else None

    @property
    def dragging(self) -> str | None:
        return self.state.job_id if isinstance(self.state, Dragging) else None

    def is_highlighted(self, edge: EdgeId) -> bool:
        return self.highlighted.get(edge, False)

    # ─── Hover ──────────────────────────────────────────────────────────────

    def pointer_enter(self, job_id: str) -> None:
        """Pointer entered a job box: highlight every edge touching it."""
        if isinstance(self.state, (Dragging, Pressed)) or job_id not in self.graph:
            return
        self._hover(job_id)

    def pointer_leave(self, job_id: str) -> None:
        """Pointer left a job box: drop the highlight, back to Idle."""
        if isinstance(self.state, (Dragging, Pressed)):
            # The box is chasing the pointer; a leave here is not the user's.
            return
        if self.hovered != job_id:
            return
        self.state = Idle()
        self.highlighted = {}

    # ─── Press / drag / release ─────────────────────────────────────────────

    def pointer_down(self, job_id: str, x: float, y: float, on_handle: bool = False) -> None:
        """Pointer pressed on a job box at device coordinate (x, y).

        With ``GesturePolicy.MOVE_THRESHOLD`` the gesture stays pending until
        the pointer moves or is released. With ``GesturePolicy.DRAG_HANDLE`` a
        press on the handle drags at once and any other press is a click.
        """
        if not isinstance(self.state, (Idle, Hovering)):
            return
        position = self.store.get(job_id)
        if position is None:
            return

        pointer = self.viewport.to_diagram(x, y)
        offset = Point(x=pointer.x - position.x, y=pointer.y - position.y)

        if self.config.gesture is GesturePolicy.DRAG_HANDLE:
            if on_handle:
                self._start_drag(job_id, offset)
            else:
                self.select(job_id)
                self._hover(job_id)
            return

        self.state = Pressed(job_id=job_id, offset=offset, origin=pointer)

    def pointer_move(self, x: float, y: float) -> dict[EdgeId, ConnectionPath]:
        """Pointer moved to device coordinate (x, y).

        While dragging, the job's new grid-snapped position is written to the
        store and every edge touching the job is routed again; those fresh
        paths are returned. Returns an empty dict otherwise.
        """
        pointer = self.viewport.to_diagram(x, y)

        if isinstance(self.state, Pressed):
            moved = math.hypot(pointer.x - self.state.origin.x, pointer.y - self.state.origin.y)
            if moved <= self.config.drag_threshold:
                return {}
            self._start_drag(self.state.job_id, self.state.offset)

        if not isinstance(self.state, Dragging):
            return {}

        job_id = self.state.job_id
        offset = self.state.offset
        self.store.move(job_id, pointer.x - offset.x, pointer.y - offset.y)
        routed, _ = route_edges(self.graph.incident_edges(job_id), self.store, self.config)
        return routed

    def pointer_up(self) -> None:
        """Pointer released: a pending press is a click, a drag just ends."""
        if isinstance(self.state, Pressed):
            job_id = self.state.job_id
            self.select(job_id)
            self._hover(job_id)
            return
        if isinstance(self.state, Dragging):
            logger.debug("Drag of %r ended at %s", self.state.job_id, self.store.get(self.state.job_id))
            self.state = Idle()
            self.highlighted = {}

    def pointer_leave_canvas(self) -> None:
        """Pointer left the drawing surface: cancel any gesture in progress.

        A cancelled drag keeps the last position already written.
        """
        if isinstance(self.state, Dragging):
            logger.debug("Drag of %r cancelled by leaving the canvas", self.state.job_id)
        self.state = Idle()
        self.highlighted = {}

    # ─── Selection ──────────────────────────────────────────────────────────

    def select(self, job_id: str) -> None:
        self.selected = job_id
        logger.info("Selected job %r", job_id)
        if self.on_select is not None:
            self.on_select(job_id)

    def close_detail(self) -> None:
        """Detail view closed: clear the selection and any leftover highlight."""
        self.selected = None
        self.highlighted = {}
        if isinstance(self.state, Hovering):
            self.state = Idle()

    def reset(self, graph: JobGraph) -> None:
        """Start over against a new graph."""
        self.graph = graph
        self.state = Idle()
        self.selected = None
        self.highlighted = {}

    def _hover(self, job_id: str) -> None:
        self.state = Hovering(job_id)
        self.highlighted = {edge: True for edge in self.graph.incident_edges(job_id)}

    def _start_drag(self, job_id: str, offset: Point) -> None:
        self.state = Dragging(job_id=job_id, offset=offset)
        logger.debug("Drag of %r started", job_id)
