"""Job operations and the registry used to pick one for a job."""

from __future__ import annotations

from ..models import Job
from .refresh_group_update_pull_request import (
    CLOSE_FAILURE_POLICY_VALUES,
    CloseFailurePolicy,
    RefreshContext,
    RefreshGroupUpdatePullRequest,
)

# Order matters: the first operation that applies to a job wins.
OPERATIONS: tuple[type[RefreshGroupUpdatePullRequest], ...] = (RefreshGroupUpdatePullRequest,)


def class_for(job: Job) -> type[RefreshGroupUpdatePullRequest] | None:
    """Return the first operation class that applies to ``job``."""
    for operation in OPERATIONS:
        if operation.applies_to(job):
            return operation
    return None


__all__ = [
    "CLOSE_FAILURE_POLICY_VALUES",
    "OPERATIONS",
    "CloseFailurePolicy",
    "RefreshContext",
    "RefreshGroupUpdatePullRequest",
    "class_for",
]
