"""Convenience entry points for one-shot rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml

from workflow_diagram.config import DEFAULT_CONFIG, DiagramConfig
from workflow_diagram.diagram import Diagram
from workflow_diagram.errors import WorkflowFormatError
from workflow_diagram.graph import JobGraph


def load_workflow(text: str) -> dict[str, Any]:
    """Parse a workflow document and return its ``jobs`` mapping."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkflowFormatError(f"Invalid YAML: {exc}") from exc

    if not isinstance(document, Mapping):
        raise WorkflowFormatError("Workflow document must be a mapping")
    jobs = document.get("jobs")
    if jobs is None:
        return {}
    if not isinstance(jobs, Mapping):
        raise WorkflowFormatError("'jobs' must be a mapping of job id to job")
    return dict(jobs)


def render_svg(
    jobs: Mapping[str, Any] | JobGraph,
    config: DiagramConfig = DEFAULT_CONFIG,
    zoom: int = 0,
    selected: str | None = None,
) -> str:
    """Lay out ``jobs`` and render the diagram as SVG.

    ``zoom`` is a number of zoom steps: positive zooms in, negative out.
    ``selected`` marks one job as selected without firing any callback.
    """
    diagram = Diagram(config)
    diagram.set_graph(jobs)
    for _ in range(abs(zoom)):
        diagram.viewport.zoom("in" if zoom > 0 else "out")
    if selected is not None:
        diagram.interaction.selected = selected
    return diagram.render_svg()
