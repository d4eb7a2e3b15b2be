"""Tests for graph.py — workflow jobs mapping → JobGraph."""

from __future__ import annotations

import pytest

from workflow_diagram.errors import WorkflowFormatError
from workflow_diagram.graph import Job, JobGraph, Step, as_list


class TestAsList:
    def test_none(self):
        assert as_list(None) == []

    def test_bare_string(self):
        assert as_list("build") == ["build"]

    def test_list(self):
        assert as_list(["a", "b"]) == ["a", "b"]

    def test_rejects_mapping(self):
        with pytest.raises(WorkflowFormatError):
            as_list({"a": 1})


class TestJobFromMapping:
    def test_runs_on_string_and_list(self):
        """runs-on (document key) and runsOn both accepted, normalised to lists."""
        assert Job.from_mapping("a", {"runs-on": "ubuntu-latest"}).runs_on == ["ubuntu-latest"]
        assert Job.from_mapping("b", {"runsOn": ["self-hosted", "gpu"]}).runs_on == ["self-hosted", "gpu"]

    def test_steps(self):
        job = Job.from_mapping(
            "test",
            {
                "steps": [
                    {"uses": "actions/setup-python@v5", "with": {"python-version": 3.12}},
                    {"name": "Run tests", "run": "pytest", "env": {"CI": True, "DEBUG": False}},
                ]
            },
        )
        assert job.steps[0] == Step(uses="actions/setup-python@v5", with_={"python-version": "3.12"})
        assert job.steps[0].title == "actions/setup-python@v5"
        assert job.steps[1].title == "Run tests"
        assert job.steps[1].env == {"CI": "true", "DEBUG": "false"}

    def test_raw_is_kept(self):
        data = {"runs-on": "ubuntu-latest", "timeout-minutes": 10}
        assert Job.from_mapping("a", data).raw == data

    def test_empty_job(self):
        job = Job.from_mapping("a", None)
        assert job.needs == []
        assert job.steps == []

    def test_non_mapping_step_inputs(self):
        with pytest.raises(WorkflowFormatError):
            Job.from_mapping("a", {"steps": [{"uses": "actions/checkout@v4", "with": "fetch-depth=0"}]})
        with pytest.raises(WorkflowFormatError):
            Job.from_mapping("a", {"steps": [{"run": "make", "env": ["CI=1"]}]})

    def test_non_mapping_job(self):
        with pytest.raises(WorkflowFormatError):
            Job.from_mapping("a", ["not", "a", "job"])


class TestJobGraph:
    def test_insertion_order(self):
        graph = JobGraph.from_mapping({"z": {}, "a": {}, "m": {}})
        assert graph.job_ids() == ["z", "a", "m"]

    def test_edges_follow_needs(self):
        graph = JobGraph.from_mapping({"a": {}, "b": {}, "c": {"needs": ["b", "a"]}})
        assert graph.edges() == [("b", "c"), ("a", "c")]
        assert set(graph.digraph.edges()) == {("a", "c"), ("b", "c")}

    def test_duplicate_needs_give_one_edge(self):
        graph = JobGraph.from_mapping({"a": {}, "b": {"needs": ["a", "a"]}})
        assert graph.edges() == [("a", "b")]

    def test_incident_edges(self):
        """Both edges into the job and edges out of it."""
        graph = JobGraph.from_mapping(
            {"A": {}, "B": {"needs": "A"}, "C": {"needs": "A"}, "D": {"needs": ["B", "C"]}}
        )
        assert set(graph.incident_edges("B")) == {("A", "B"), ("B", "D")}
        assert set(graph.incident_edges("A")) == {("A", "B"), ("A", "C")}
        assert graph.incident_edges("nope") == []

    def test_unresolved_dependencies_recorded(self):
        graph = JobGraph.from_mapping({"a": {"needs": ["ghost"]}})
        assert graph.unresolved == [("ghost", "a")]
        assert graph.edges() == [("ghost", "a")]
        assert graph.digraph.number_of_edges() == 0

    def test_duplicate_ids(self):
        with pytest.raises(WorkflowFormatError):
            JobGraph([Job(id="a"), Job(id="a")])

    def test_jobs_must_be_mapping(self):
        with pytest.raises(WorkflowFormatError):
            JobGraph.from_mapping(["a", "b"])

    def test_signature_ignores_steps(self):
        before = JobGraph.from_mapping({"a": {"steps": [{"run": "x"}]}, "b": {"needs": "a"}})
        after = JobGraph.from_mapping({"a": {"steps": [{"run": "y"}]}, "b": {"needs": ["a"]}})
        assert before.signature() == after.signature()

    def test_signature_tracks_jobs_and_needs(self):
        base = JobGraph.from_mapping({"a": {}, "b": {"needs": "a"}})
        assert base.signature() != JobGraph.from_mapping({"a": {}, "b": {}}).signature()
        assert base.signature() != JobGraph.from_mapping({"a": {}, "b": {"needs": "a"}, "c": {}}).signature()
