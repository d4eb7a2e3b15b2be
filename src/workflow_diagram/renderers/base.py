"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from workflow_diagram.view import DiagramView


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, view: DiagramView) -> str:
        """Render a diagram view to an output string."""
        ...
