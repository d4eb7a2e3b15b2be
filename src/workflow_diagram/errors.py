"""Error kinds raised by the diagram engine.

Graph-wide structural failures (cycles) are fatal and reported to the host.
Per-edge failures (a ``needs`` entry naming a missing job) are recoverable:
the edge is dropped and the node still renders.
"""

from __future__ import annotations


class DiagramError(Exception):
    """Base class for all diagram errors."""


class WorkflowFormatError(DiagramError):
    """The jobs mapping handed to the engine is not shaped like a workflow."""


class UnresolvedDependencyError(DiagramError):
    """A ``needs`` entry names a job that is not present in the graph."""

    def __init__(self, dependency: str, dependent: str) -> None:
        self.dependency = dependency
        self.dependent = dependent
        super().__init__(f"Job '{dependent}' needs missing job '{dependency}'")


class DependencyCycleError(DiagramError):
    """The job graph contains a dependency cycle; no layout is possible."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))


class EmptyGraphError(DiagramError):
    """The graph has no jobs. Benign: the host renders nothing."""
