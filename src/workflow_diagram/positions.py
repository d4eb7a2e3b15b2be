"""Position store — the single mutable map of job id → on-canvas position."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from workflow_diagram.layout.engine import snap_to_grid
from workflow_diagram.layout.types import Position

logger = logging.getLogger(__name__)


class PositionStore:
    """Seeded once from the initial layout, then mutated one entry at a time.

    Re-renders and re-routing only read from the store; a drag moves exactly
    one entry, so the rest of a user's arrangement survives.
    """

    def __init__(self, grid_unit: int) -> None:
        self.grid_unit = grid_unit
        self._positions: dict[str, Position] = {}

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._positions

    def get(self, job_id: str) -> Position | None:
        return self._positions.get(job_id)

    def set(self, job_id: str, position: Position) -> None:
        self._positions[job_id] = position

    def is_empty(self) -> bool:
        return not self._positions

    def seed(self, positions: Mapping[str, Position]) -> None:
        """Populate an empty store. Seeding a populated store is an error."""
        if not self.is_empty():
            raise RuntimeError("PositionStore is already seeded; clear() it first")
        self._positions.update(positions)
        logger.debug("Seeded %d positions", len(positions))

    def clear(self) -> None:
        self._positions.clear()

    def move(self, job_id: str, x: float, y: float) -> Position:
        """Snap a raw pointer-derived coordinate to the grid and store it."""
        snapped = Position(x=snap_to_grid(x, self.grid_unit), y=snap_to_grid(y, self.grid_unit))
        self.set(job_id, snapped)
        return snapped

    def snapshot(self) -> dict[str, Position]:
        """A copy of every entry, safe to compare against later snapshots."""
        return dict(self._positions)
