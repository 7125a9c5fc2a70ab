# src/multikmeans/cli.py
"""multikmeans Command Line Interface.

Entry point for the multikmeans CLI tool.
"""

from __future__ import annotations

import csv
import json
from enum import StrEnum
from pathlib import Path
from typing import Any

import typer
import yaml
from dynaconf.vendor.ruamel.yaml.parser import ParserError as YamlParserError
from dynaconf.vendor.ruamel.yaml.scanner import ScannerError as YamlScannerError
from pydantic import ValidationError

from multikmeans import __version__
from multikmeans.cli_formatters import (
    create_console_formatters,
    create_json_formatters,
    subscribe_formatters,
)
from multikmeans.contracts.errors import ClusteringError
from multikmeans.core.config import MultiKMeansSettings, load_settings
from multikmeans.core.events import EventBus
from multikmeans.core.logging import configure_logging, get_logger
from multikmeans.data.partitioned import LocalPartitionedData
from multikmeans.engine.coordinator import RunCoordinator
from multikmeans.geometry.euclidean import EuclideanPointOps, Vector, as_vector

__all__ = ["app"]

logger = get_logger(__name__)


class ProgressFormat(StrEnum):
    """Where per-iteration progress events are rendered."""

    NONE = "none"
    CONSOLE = "console"
    JSON = "json"


app = typer.Typer(
    name="multikmeans",
    help="Run several K-means seeds over one dataset and keep the best.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"multikmeans version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """multikmeans: multi-run K-means clustering."""


def read_points(path: Path) -> list[Vector]:
    """Read one point per CSV row; blank rows and a non-numeric header are skipped.

    Raises:
        ValueError: On a non-numeric row after the first, or ragged dimensions
    """
    points: list[Vector] = []
    with path.open(newline="", encoding="utf-8") as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            cells = [cell.strip() for cell in row if cell.strip()]
            if not cells:
                continue
            try:
                point = as_vector([float(cell) for cell in cells])
            except ValueError:
                if line_no == 1:
                    continue
                raise ValueError(f"{path}:{line_no}: non-numeric value in {row!r}") from None
            if points and point.shape != points[0].shape:
                raise ValueError(f"{path}:{line_no}: expected {points[0].shape[0]} columns, got {point.shape[0]}")
            points.append(point)
    return points


def read_centers(path: Path) -> list[list[Vector]]:
    """Read initial centers: a YAML list of runs, each a list of center vectors."""
    with path.open(encoding="utf-8") as f:
        raw: Any = yaml.safe_load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a list of runs, got {type(raw).__name__}")
    runs: list[list[Vector]] = []
    for index, run in enumerate(raw):
        if not isinstance(run, list):
            raise ValueError(f"{path}: run {index} must be a list of centers")
        runs.append([as_vector(center) for center in run])
    return runs


def check_dimensions(points: list[Vector], runs: list[list[Vector]]) -> None:
    """Every center must have as many dimensions as the points.

    Raises:
        ValueError: Naming the first run and center that do not match
    """
    if not points:
        return
    expected = points[0].shape
    for run, centers in enumerate(runs):
        for index, center in enumerate(centers):
            if center.shape != expected:
                raise ValueError(
                    f"run {run} center {index} has {center.shape[0]} dimension(s), points have {expected[0]}"
                )


def _resolve_settings(settings: Path | None) -> MultiKMeansSettings:
    if settings is None:
        return MultiKMeansSettings()
    try:
        return load_settings(settings.expanduser())
    except (YamlParserError, YamlScannerError) as e:
        typer.echo(f"YAML syntax error in {settings}: {e.problem}", err=True)
        raise typer.Exit(1) from None
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


@app.command()
def cluster(
    points: Path = typer.Argument(..., help="CSV file with one point per row."),
    centers: Path = typer.Option(
        ...,
        "--centers",
        "-c",
        help="YAML file listing the initial centers of each run.",
    ),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        "-s",
        help="Path to settings YAML file.",
    ),
    max_iterations: int | None = typer.Option(
        None,
        "--max-iterations",
        "-n",
        min=0,
        help="Override clustering.max_iterations.",
    ),
    progress: ProgressFormat = typer.Option(
        ProgressFormat.NONE,
        "--progress",
        "-p",
        help="Per-iteration progress on stderr: 'none', 'console' or 'json'.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
) -> None:
    """Cluster POINTS once per seed in --centers and print the winning run as JSON."""
    config = _resolve_settings(settings)
    configure_logging(
        json_output=json_logs or config.logging.json_output,
        level=config.logging.level,
    )

    try:
        point_list = read_points(points)
        seeds = read_centers(centers)
        check_dimensions(point_list, seeds)
    except (OSError, ValueError, yaml.YAMLError) as e:
        typer.secho(f"Error reading input: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    iterations_cap = max_iterations if max_iterations is not None else config.clustering.max_iterations
    event_bus = EventBus()
    if progress is ProgressFormat.CONSOLE:
        subscribe_formatters(event_bus, create_console_formatters())
    elif progress is ProgressFormat.JSON:
        subscribe_formatters(event_bus, create_json_formatters())

    coordinator: RunCoordinator[Vector, Vector] = RunCoordinator(
        EuclideanPointOps(epsilon=config.clustering.epsilon),
        max_iterations=iterations_cap,
        event_bus=event_bus,
    )

    logger.info(
        "clustering_requested",
        points=len(point_list),
        runs=len(seeds),
        partitions=config.concurrency.effective_partitions,
        max_workers=config.concurrency.max_workers,
        max_iterations=iterations_cap,
    )
    try:
        with LocalPartitionedData.from_points(
            point_list,
            num_partitions=config.concurrency.effective_partitions,
            max_workers=config.concurrency.max_workers,
        ) as data:
            result = coordinator.run(data, seeds)
    except ClusteringError as e:
        typer.secho(f"Clustering failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from None

    typer.echo(
        json.dumps(
            {
                "best_run": result.best_run,
                "cost": result.best_cost,
                "k": result.model.k,
                "centers": [center.tolist() for center in result.model.centers],
                "iterations": result.iterations,
                "runs": [
                    {
                        "run": run.index,
                        "status": run.status.value,
                        "cost": run.cost,
                        "k": run.k,
                        "converged_at": run.converged_at,
                    }
                    for run in result.runs
                ],
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    app()
