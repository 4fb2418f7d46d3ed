"""Loading helpers for refresh job payloads.

Jobs, dependency snapshots and precomputed change sets are JSON documents
validated with Pydantic models.

Example:
    >>> from pathlib import Path
    >>> load_json(Path("missing.json")) is None
    True
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from .errors import ConfigError
from .models import DependencyChange, DependencyGroup, DependencySnapshot, Job

M = TypeVar("M", bound=BaseModel)


def load_json(path: Path) -> dict | None:
    """Load a JSON file if it exists.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed payload as a dict, or ``None`` if the file does not exist.
    """
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON at {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"expected a JSON object at {path}")
    return payload


def _require_json(path: Path, label: str) -> dict:
    payload = load_json(path)
    if payload is None:
        raise ConfigError(f"{label} file not found: {path}")
    return payload


def _parse(model: type[M], payload: object, label: str, source: Path | str | None) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        location = f" at {source}" if source else ""
        raise ConfigError(f"invalid {label}{location}:\n{exc}") from exc


def parse_job(payload: dict, source: Path | str | None = None) -> Job:
    """Validate a job payload.

    The payload may nest the job under a top-level ``job`` key.
    """
    if isinstance(payload.get("job"), dict):
        payload = payload["job"]
    return _parse(Job, payload, "job", source)


def parse_snapshot(
    payload: dict, source: Path | str | None = None, *, job: Job | None = None
) -> DependencySnapshot:
    """Validate a dependency snapshot payload.

    When the payload does not name the job's group, it is taken from ``job``.
    """
    payload = dict(payload)
    if payload.get("job_group_name") is None and job is not None:
        payload["job_group_name"] = job.dependency_group_to_refresh
    return _parse(DependencySnapshot, payload, "dependency snapshot", source)


def parse_changes(
    payload: dict,
    source: Path | str | None = None,
    *,
    groups: Iterable[DependencyGroup] = (),
) -> dict[str, DependencyChange]:
    """Validate precomputed change sets keyed by group name.

    Change sets that do not carry their group pick it up from ``groups``.
    """
    raw_changes = payload.get("changes", payload)
    if not isinstance(raw_changes, dict):
        raise ConfigError(f"invalid dependency changes at {source}: expected an object")
    by_name = {group.name: group for group in groups}
    changes: dict[str, DependencyChange] = {}
    for group_name, raw in raw_changes.items():
        change = _parse(DependencyChange, raw, f"dependency change '{group_name}'", source)
        if change.dependency_group is None and group_name in by_name:
            change = change.model_copy(update={"dependency_group": by_name[group_name]})
        changes[group_name] = change
    return changes


def load_job(path: Path) -> Job:
    return parse_job(_require_json(path, "job"), path)


def load_snapshot(path: Path, *, job: Job | None = None) -> DependencySnapshot:
    return parse_snapshot(_require_json(path, "dependency snapshot"), path, job=job)


def load_changes(
    path: Path, *, groups: Iterable[DependencyGroup] = ()
) -> dict[str, DependencyChange]:
    return parse_changes(_require_json(path, "dependency changes"), path, groups=groups)
