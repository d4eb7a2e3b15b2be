"""Tests for cli.py — render, levels and show commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from workflow_diagram.cli import cli

WORKFLOW = """\
jobs:
  A:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
  B:
    runs-on: ubuntu-latest
    needs: A
    steps:
      - name: Test
        run: pytest -q
  C:
    runs-on: [ubuntu-latest, windows-latest]
    needs: A
  D:
    runs-on: ubuntu-latest
    needs: [B, C]
"""


@pytest.fixture
def workflow(tmp_path: Path) -> Path:
    path = tmp_path / "ci.yml"
    path.write_text(WORKFLOW)
    return path


def run(*args: str):
    return CliRunner().invoke(cli, list(args))


class TestRender:
    def test_to_stdout(self, workflow: Path):
        result = run("render", str(workflow))
        assert result.exit_code == 0, result.output
        assert "<svg" in result.output
        assert result.output.count('class="job-node"') == 4

    def test_to_file(self, workflow: Path, tmp_path: Path):
        out = tmp_path / "ci.svg"
        result = run("render", str(workflow), "-o", str(out), "--zoom", "1", "--select", "B")
        assert result.exit_code == 0, result.output
        svg = out.read_text()
        assert 'transform="scale(1.2)"' in svg
        assert "job-box selected" in svg

    def test_unknown_selection(self, workflow: Path):
        result = run("render", str(workflow), "--select", "nope")
        assert result.exit_code != 0

    def test_cycle_is_an_error(self, tmp_path: Path):
        path = tmp_path / "cycle.yml"
        path.write_text("jobs:\n  A:\n    needs: B\n  B:\n    needs: A\n")
        result = run("render", str(path))
        assert result.exit_code == 1
        assert "Dependency cycle detected: A -> B -> A" in result.output

    def test_bad_yaml(self, tmp_path: Path):
        path = tmp_path / "bad.yml"
        path.write_text("jobs: [unclosed\n")
        result = run("render", str(path))
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output


class TestLevels:
    def test_groups(self, workflow: Path):
        result = run("levels", str(workflow))
        assert result.exit_code == 0, result.output
        assert "Level 0: A" in result.output
        assert "Level 1 (parallel): B, C" in result.output
        assert "Level 2: D" in result.output


class TestShow:
    def test_job_detail(self, workflow: Path):
        result = run("show", str(workflow), "C")
        assert result.exit_code == 0, result.output
        assert "Runs on: ubuntu-latest, windows-latest" in result.output
        assert "Depends on: A" in result.output

    def test_steps(self, workflow: Path):
        result = run("show", str(workflow), "B")
        assert "1. Test" in result.output
        assert "$ pytest -q" in result.output

    def test_unknown_job(self, workflow: Path):
        result = run("show", str(workflow), "Z")
        assert result.exit_code == 1
        assert "Known jobs: A, B, C, D" in result.output
