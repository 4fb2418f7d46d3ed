"""Experiment flags attached to refresh jobs."""

from __future__ import annotations

import os

from .models import Job

GROUPED_UPDATES_PROTOTYPE = "grouped_updates_prototype"

_ENV_VAR = "GROUPREFRESH_EXPERIMENTS"


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def env_enabled() -> frozenset[str]:
    """Return experiment names force-enabled through the environment."""
    raw = os.environ.get(_ENV_VAR, "")
    names = (_normalize_name(part) for part in raw.split(","))
    return frozenset(name for name in names if name)


def enabled(job: Job, name: str) -> bool:
    """Return whether an experiment is enabled for a job."""
    normalized = _normalize_name(name)
    if normalized in env_enabled():
        return True
    for key, value in job.experiments.items():
        if _normalize_name(key) != normalized:
            continue
        return bool(value)
    return False
