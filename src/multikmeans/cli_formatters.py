# src/multikmeans/cli_formatters.py
"""CLI event formatters for clustering progress.

Each factory returns a dict mapping event types to handlers, ready to be
subscribed to an EventBus. Progress goes to stderr so stdout carries only
the final result.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict

import typer

from multikmeans.contracts.events import (
    ClusteringCompleted,
    IterationStarted,
    RunConverged,
    RunDistortion,
    RunExhausted,
)
from multikmeans.core.events import EventBusProtocol


def create_console_formatters() -> dict[type, Callable[..., None]]:
    """Human-readable progress lines."""

    def _format_iteration(event: IterationStarted) -> None:
        counts = ", ".join(f"run {r}: k={k}" for r, k in zip(event.active_runs, event.center_counts, strict=True))
        typer.echo(f"[ITER {event.iteration}] {len(event.active_runs)} active ({counts})", err=True)

    def _format_distortion(event: RunDistortion) -> None:
        typer.echo(f"  run {event.run} distortion {event.distortion:.6g}", err=True)

    def _format_converged(event: RunConverged) -> None:
        typer.echo(f"  run {event.run} ✓ converged in {event.iterations} iteration(s)", err=True)

    def _format_exhausted(event: RunExhausted) -> None:
        typer.secho(f"  run {event.run} ✗ lost all clusters at iteration {event.iteration}", fg=typer.colors.YELLOW, err=True)

    def _format_completed(event: ClusteringCompleted) -> None:
        typer.echo(
            f"Done: run {event.best_run} wins with cost {event.best_cost:.6g} "
            f"after {event.iterations} iteration(s), {event.converged_runs} run(s) converged",
            err=True,
        )

    return {
        IterationStarted: _format_iteration,
        RunDistortion: _format_distortion,
        RunConverged: _format_converged,
        RunExhausted: _format_exhausted,
        ClusteringCompleted: _format_completed,
    }


def create_json_formatters() -> dict[type, Callable[..., None]]:
    """One JSON object per event, tagged with the event type."""

    def _emit(event: object) -> None:
        payload = {"event": type(event).__name__, **asdict(event)}  # type: ignore[call-overload]
        typer.echo(json.dumps(payload), err=True)

    return {
        event_type: _emit
        for event_type in (IterationStarted, RunDistortion, RunConverged, RunExhausted, ClusteringCompleted)
    }


def subscribe_formatters(
    event_bus: EventBusProtocol,
    formatters: dict[type, Callable[..., None]],
) -> None:
    for event_type, handler in formatters.items():
        event_bus.subscribe(event_type, handler)
