# cli.py
from __future__ import annotations

import logging
from pathlib import Path

import click

from workflow_diagram.api import load_workflow, render_svg
from workflow_diagram.config import load_config
from workflow_diagram.errors import DiagramError
from workflow_diagram.graph import Job, JobGraph
from workflow_diagram.layout.engine import group_by_level, resolve_levels
from workflow_diagram.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def read_graph(path: Path) -> JobGraph:
    """Load a workflow file into a job graph, as a CLI error on failure."""
    try:
        graph = JobGraph.from_mapping(load_workflow(path.read_text()))
    except DiagramError as exc:
        raise click.ClickException(f"{path}: {exc}") from exc
    logger.debug("Loaded %d jobs from %s", len(graph), path)
    return graph


def format_job(job: Job) -> list[str]:
    """Text form of a job's detail: runners, dependencies and steps."""
    lines = [job.id, "-" * len(job.id)]
    lines.append(f"Runs on: {', '.join(job.runs_on) or '-'}")
    if job.needs:
        lines.append(f"Depends on: {', '.join(job.needs)}")
    if job.steps:
        lines.append("Steps:")
        for index, step in enumerate(job.steps, start=1):
            lines.append(f"  {index}. {step.title or f'Step {index}'}")
            if step.run:
                for run_line in step.run.rstrip().splitlines():
                    lines.append(f"       $ {run_line}")
            for key, value in step.with_.items():
                lines.append(f"       {key}: {value}")
    return lines


@click.group()
@click.option("--log-level", default="WARNING", show_default=True, help="Logging level.")
@click.option("--json-logs/--plain-logs", default=False, help="Emit logs as JSON lines.")
def cli(log_level: str, json_logs: bool) -> None:
    """Draw dependency diagrams of CI workflow jobs."""
    setup_logging(log_level.upper(), json=json_logs)


@cli.command()
@click.argument("workflow", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write SVG here.")
@click.option("--zoom", default=0, show_default=True, help="Zoom steps: positive in, negative out.")
@click.option("--select", "selected", default=None, help="Highlight this job as selected.")
def render(workflow: Path, output: Path | None, zoom: int, selected: str | None) -> None:
    """Render WORKFLOW's job graph as SVG."""
    graph = read_graph(workflow)
    if selected is not None and selected not in graph:
        raise click.BadParameter(f"Unknown job {selected!r}", param_hint="--select")
    try:
        svg = render_svg(graph, config=load_config(), zoom=zoom, selected=selected)
    except DiagramError as exc:
        raise click.ClickException(str(exc)) from exc

    if not svg:
        click.echo("No jobs to draw.", err=True)
        return
    if output is None:
        click.echo(svg)
    else:
        output.write_text(svg + "\n")
        click.echo(f"Wrote {output}", err=True)


@cli.command()
@click.argument("workflow", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def levels(workflow: Path) -> None:
    """Print WORKFLOW's jobs grouped by dependency level."""
    graph = read_graph(workflow)
    try:
        resolved = resolve_levels(graph)
    except DiagramError as exc:
        raise click.ClickException(str(exc)) from exc

    for level, group in group_by_level(graph, resolved).items():
        marker = " (parallel)" if group.is_parallel else ""
        click.echo(f"Level {level}{marker}: {', '.join(group.job_ids)}")
    for dependency, dependent in graph.unresolved:
        click.echo(f"warning: {dependent} needs unknown job {dependency}", err=True)


@cli.command()
@click.argument("workflow", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("job_id")
def show(workflow: Path, job_id: str) -> None:
    """Print the detail of JOB_ID from WORKFLOW."""
    graph = read_graph(workflow)
    if job_id not in graph:
        raise click.ClickException(f"Unknown job {job_id!r}. Known jobs: {', '.join(graph.job_ids())}")
    for line in format_job(graph[job_id]):
        click.echo(line)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
