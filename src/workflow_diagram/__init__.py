"""Interactive dependency diagrams for CI workflow jobs."""

from workflow_diagram.config import DiagramConfig, GesturePolicy, load_config
from workflow_diagram.diagram import Diagram
from workflow_diagram.errors import (
    DependencyCycleError,
    DiagramError,
    EmptyGraphError,
    UnresolvedDependencyError,
    WorkflowFormatError,
)
from workflow_diagram.graph import Job, JobGraph, Step
from workflow_diagram.interaction import InteractionController
from workflow_diagram.positions import PositionStore
from workflow_diagram.viewport import ViewportController

__all__ = [
    "DependencyCycleError",
    "Diagram",
    "DiagramConfig",
    "DiagramError",
    "EmptyGraphError",
    "GesturePolicy",
    "InteractionController",
    "Job",
    "JobGraph",
    "PositionStore",
    "Step",
    "UnresolvedDependencyError",
    "ViewportController",
    "WorkflowFormatError",
    "load_config",
]
