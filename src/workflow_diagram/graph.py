"""Job graph — the in-memory form of a workflow's ``jobs`` mapping.

The graph is a ``networkx.DiGraph`` whose nodes are job ids (kept in
document order) and whose edges run dependency → dependent, so an edge's
source is always drawn to the left of its target.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from workflow_diagram.errors import WorkflowFormatError

logger = logging.getLogger(__name__)

EdgeId = tuple[str, str]


def as_list(value: Any) -> list[str]:
    """Normalise a ``needs`` / ``runs-on`` value: bare string or list → list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    raise WorkflowFormatError(f"Expected a string or a list of strings, got {type(value).__name__}")


def _scalar(value: Any) -> str:
    # YAML booleans read back the way they were written.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _string_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise WorkflowFormatError(f"Step '{key}' must be a mapping, got {type(value).__name__}")
    return {str(k): _scalar(v) for k, v in value.items()}


@dataclass(frozen=True)
class Step:
    """A single step of a job. Opaque to the layout engine."""

    name: str | None = None
    uses: str | None = None
    run: str | None = None
    with_: dict[str, str] = field(default_factory=dict)
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Step:
        if not isinstance(data, Mapping):
            raise WorkflowFormatError(f"Step must be a mapping, got {type(data).__name__}")
        return cls(
            name=data.get("name"),
            uses=data.get("uses"),
            run=data.get("run"),
            with_=_string_map(data, "with"),
            env=_string_map(data, "env"),
        )

    @property
    def title(self) -> str | None:
        return self.name or self.uses


@dataclass
class Job:
    """A node of the pipeline graph."""

    id: str
    runs_on: list[str] = field(default_factory=list)
    needs: list[str] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, job_id: str, data: Mapping[str, Any] | None) -> Job:
        data = data or {}
        if not isinstance(data, Mapping):
            raise WorkflowFormatError(f"Job '{job_id}' must be a mapping, got {type(data).__name__}")
        runs_on = data.get("runs-on", data.get("runsOn"))
        steps = [Step.from_mapping(s) for s in (data.get("steps") or [])]
        return cls(
            id=job_id,
            runs_on=as_list(runs_on),
            needs=as_list(data.get("needs")),
            steps=steps,
            raw=dict(data),
        )


class JobGraph:
    """Jobs keyed by id in insertion order, plus their dependency edges.

    Attributes:
        jobs: Maps job id → Job, in document order.
        digraph: Edges dependency → dependent, only between existing jobs.
        unresolved: (dependency, dependent) pairs whose dependency is missing.
    """

    def __init__(self, jobs: list[Job]) -> None:
        self.jobs: dict[str, Job] = {}
        for job in jobs:
            if job.id in self.jobs:
                raise WorkflowFormatError(f"Duplicate job id: {job.id!r}")
            self.jobs[job.id] = job

        self.digraph: nx.DiGraph = nx.DiGraph()
        self.unresolved: list[EdgeId] = []

        for job_id in self.jobs:
            self.digraph.add_node(job_id)

        for job in self.jobs.values():
            for dep in job.needs:
                if dep not in self.jobs:
                    logger.warning("Job %r needs unknown job %r; edge skipped", job.id, dep)
                    self.unresolved.append((dep, job.id))
                    continue
                self.digraph.add_edge(dep, job.id)

    @classmethod
    def from_mapping(cls, jobs: Mapping[str, Any] | None) -> JobGraph:
        """Build a graph from a parsed workflow ``jobs`` mapping."""
        if jobs is None:
            return cls([])
        if not isinstance(jobs, Mapping):
            raise WorkflowFormatError(f"'jobs' must be a mapping, got {type(jobs).__name__}")
        return cls([Job.from_mapping(str(job_id), data) for job_id, data in jobs.items()])

    def __len__(self) -> int:
        return len(self.jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self.jobs

    def __getitem__(self, job_id: str) -> Job:
        return self.jobs[job_id]

    def job_ids(self) -> list[str]:
        return list(self.jobs)

    def edges(self) -> list[EdgeId]:
        """Every (dependency, dependent) pair, following job and ``needs`` order."""
        result: list[EdgeId] = []
        for job in self.jobs.values():
            for dep in job.needs:
                if (dep, job.id) not in result:
                    result.append((dep, job.id))
        return result

    def incident_edges(self, job_id: str) -> list[EdgeId]:
        """Edges with ``job_id`` as either endpoint (resolved ones only)."""
        if job_id not in self.digraph:
            return []
        incoming = list(self.digraph.in_edges(job_id))
        outgoing = list(self.digraph.out_edges(job_id))
        return incoming + outgoing

    def signature(self) -> tuple[tuple[str, tuple[str, ...]], ...]:
        """Hashable key that changes whenever jobs or their dependencies change."""
        return tuple((job.id, tuple(job.needs)) for job in self.jobs.values())
