"""Command line entry point for grouprefresh."""

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from . import __version__, config, operations
from . import log as grouprefresh_log
from .compiler import StaticChangeCompiler
from .error_handler import ErrorClassifier, ErrorHandler
from .errors import ConfigError, error_kind
from .io import die, say
from .service import RecordingPullRequestService, ServiceCall

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Plan refreshes of grouped dependency-update pull requests.",
)


class LogLevelChoice(str, Enum):
    trace = "trace"
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


CloseFailureChoice = Enum(  # type: ignore[misc]
    "CloseFailureChoice",
    {value: value for value in operations.CLOSE_FAILURE_POLICY_VALUES},
    type=str,
)


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


def _version_callback(value: bool) -> None:
    if value:
        say(f"grouprefresh {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    log_level: Optional[LogLevelChoice] = typer.Option(
        None, "--log-level", help="Log verbosity (default: GROUPREFRESH_LOG_LEVEL or info)."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colorized output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    if log_level is not None:
        grouprefresh_log.set_level(log_level.value)
    if no_color:
        grouprefresh_log.set_no_color(True)


def _render_table(calls: list[ServiceCall]) -> None:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Call")
    table.add_column("Details")
    for call in calls:
        details = ", ".join(f"{key}={value}" for key, value in call.payload.items())
        table.add_row(call.kind, details)
    Console(no_color=grouprefresh_log.color_disabled()).print(table)


@app.command("plan")
def plan(
    job_path: Path = typer.Option(..., "--job", help="Job payload (JSON)."),
    snapshot_path: Path = typer.Option(
        ..., "--snapshot", help="Dependency snapshot payload (JSON)."
    ),
    changes_path: Path = typer.Option(
        ..., "--changes", help="Precomputed change sets keyed by group name (JSON)."
    ),
    close_failure: CloseFailureChoice = typer.Option(
        CloseFailureChoice("propagate"),
        "--close-failure",
        help="How failures closing a pull request are handled.",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.table, "--format", help="Output format for recorded calls."
    ),
) -> None:
    """Show what a refresh would tell the pull-request backend to do."""
    if output_format is OutputFormat.json:
        grouprefresh_log.set_stderr_only(True)
    try:
        job = config.load_job(job_path)
        snapshot = config.load_snapshot(snapshot_path, job=job)
        changes = config.load_changes(changes_path, groups=snapshot.groups)
    except ConfigError as exc:
        die(str(exc))

    operation_class = operations.class_for(job)
    if operation_class is None:
        die("no operation applies to this job", code=2)

    service = RecordingPullRequestService()
    context = operations.RefreshContext(
        job=job,
        dependency_snapshot=snapshot,
        service=service,
        error_handler=ErrorHandler(service=service),
        compiler=StaticChangeCompiler(changes),
        classifier=ErrorClassifier(),
        close_failure_policy=close_failure.value,
    )
    grouprefresh_log.debug(f"Performing {operation_class.name}")
    try:
        operation_class(context).perform()
    except Exception as exc:
        kind = error_kind(exc)
        if kind is None:
            raise
        die(f"run halted ({kind.value}): {exc}")

    if output_format is OutputFormat.json:
        say(json.dumps([call.to_json() for call in service.calls], indent=2))
        return
    if not service.calls:
        say("No backend calls.")
        return
    _render_table(service.calls)


def main() -> None:
    app()
