"""Refresh a pull request that updates a dependency group.

Refreshing a group pull request recomputes the group's dependency change on the
current head of the target branch. A non-empty change is handed to the backend
as an update of the existing pull request; the backend decides whether the
change can be applied in place or the pull request must be superseded because
the set of dependencies or their target versions moved. An empty change means
the group is up to date and the pull request is closed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .. import experiments, log
from ..compiler import compile_all_dependency_changes_for
from ..error_handler import ErrorClassifier
from ..errors import UpdaterError
from ..models import DependencyGroup, DependencySnapshot, Job
from ..ports import (
    DependencyChangeCompiler,
    PullRequestService,
    RecoverableErrorHandler,
    RunHaltingPredicate,
)

CLOSE_FAILURE_POLICY_VALUES = ("propagate", "classify")
CloseFailurePolicy = Literal["propagate", "classify"]

CloseReason = Literal["up_to_date"]

MISSING_GROUP_MESSAGE = "Attempted to update a missing group."


def humanize_reason(reason: str) -> str:
    """Render a reason code for log output.

    Example:
        >>> humanize_reason("up_to_date")
        'up to date'
    """
    return reason.replace("_", " ")


@dataclass(frozen=True)
class RefreshContext:
    """Everything a refresh needs, fixed at construction."""

    job: Job
    dependency_snapshot: DependencySnapshot
    service: PullRequestService
    error_handler: RecoverableErrorHandler
    compiler: DependencyChangeCompiler
    classifier: RunHaltingPredicate = field(default_factory=ErrorClassifier)
    close_failure_policy: CloseFailurePolicy = "propagate"


class RefreshGroupUpdatePullRequest:
    """Update or close an existing group pull request."""

    name = "refresh_group_update_pull_request"

    @classmethod
    def applies_to(cls, job: Job) -> bool:
        if job.security_updates_only:
            return False
        # Without the pull request's dependencies and the group that created
        # it there is nothing to refresh against.
        if not job.dependencies:
            return False
        if not job.dependency_group_to_refresh:
            return False
        return job.updating_a_pull_request and experiments.enabled(
            job, experiments.GROUPED_UPDATES_PROTOTYPE
        )

    def __init__(self, context: RefreshContext) -> None:
        self._context = context

    def perform(self) -> None:
        ctx = self._context
        snapshot = ctx.dependency_snapshot
        group = snapshot.job_group
        # A missing group means the job and configuration payloads were
        # emitted out of sync upstream.
        if group is None:
            log.warning(
                f"The '{snapshot.job_group_name or 'unknown'}' group has been "
                "removed from the update config."
            )
            ctx.service.capture_exception(
                error=UpdaterError(MISSING_GROUP_MESSAGE), job=ctx.job
            )
            return

        dependency_change = compile_all_dependency_changes_for(ctx.compiler, group, snapshot)

        if dependency_change.has_updates:
            log.info(f"Updating pull request for '{group.name}'")
            try:
                ctx.service.update_pull_request(dependency_change, snapshot.base_commit_sha)
            except Exception as exc:
                if ctx.classifier.is_run_halting(exc):
                    raise
                self._report_failure(exc, group)
        else:
            self._close_pull_request(group, reason="up_to_date")

    def _close_pull_request(self, group: DependencyGroup, *, reason: CloseReason) -> None:
        ctx = self._context
        log.info(
            f"Telling backend to close pull request for the {group.name} group "
            f"({', '.join(ctx.job.dependencies)}) - {humanize_reason(reason)}"
        )
        if ctx.close_failure_policy == "propagate":
            ctx.service.close_pull_request(ctx.job.dependencies, reason)
            return
        try:
            ctx.service.close_pull_request(ctx.job.dependencies, reason)
        except Exception as exc:
            if ctx.classifier.is_run_halting(exc):
                raise
            self._report_failure(exc, group)

    def _report_failure(self, error: Exception, group: DependencyGroup) -> None:
        ctx = self._context
        # The group name stands in for the dependency name; the whole group
        # is updated as one unit.
        ctx.error_handler.handle_dependency_error(error=error, dependency=group.name)
