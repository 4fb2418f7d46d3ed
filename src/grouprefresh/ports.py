"""Typed ports for the collaborators a refresh depends on."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models import DependencyChange, DependencyGroup, DependencySnapshot, Job


class DependencyChangeCompiler(Protocol):
    """Resolver that recomputes a group's change set against a snapshot."""

    def compile_changes_for(
        self, group: DependencyGroup, snapshot: DependencySnapshot
    ) -> DependencyChange: ...


class PullRequestService(Protocol):
    """Backend sink that persists refresh decisions and diagnostics."""

    def update_pull_request(
        self, dependency_change: DependencyChange, base_commit_sha: str
    ) -> None: ...

    def close_pull_request(self, dependency_names: Sequence[str], reason: str) -> None: ...

    def capture_exception(self, *, error: BaseException, job: Job | None = None) -> None: ...

    def record_update_job_error(
        self,
        *,
        error_type: str,
        error_details: dict[str, object],
        dependency: str | None = None,
    ) -> None: ...


class RecoverableErrorHandler(Protocol):
    """Delegate used for update failures that do not halt the run."""

    def handle_dependency_error(self, *, error: BaseException, dependency: str) -> None: ...


class RunHaltingPredicate(Protocol):
    """Classifier answering whether an error must abort the whole job."""

    def is_run_halting(self, error: BaseException) -> bool: ...
