"""In-process pull-request service that records decisions instead of applying them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from .models import DependencyChange, Job

ServiceCallKind = Literal[
    "update_pull_request",
    "close_pull_request",
    "capture_exception",
    "record_update_job_error",
]


@dataclass(frozen=True)
class ServiceCall:
    """One recorded call against the pull-request backend."""

    kind: ServiceCallKind
    payload: dict[str, object] = field(default_factory=dict)

    def to_json(self) -> dict[str, object]:
        return {"kind": self.kind, **self.payload}


class RecordingPullRequestService:
    """Collect backend calls for dry-run planning and inspection."""

    def __init__(self) -> None:
        self.calls: list[ServiceCall] = []

    def update_pull_request(
        self, dependency_change: DependencyChange, base_commit_sha: str
    ) -> None:
        group = dependency_change.dependency_group
        self.calls.append(
            ServiceCall(
                kind="update_pull_request",
                payload={
                    "group": group.name if group else None,
                    "base_commit_sha": base_commit_sha,
                    "dependencies": [
                        {
                            "name": dep.name,
                            "previous_version": dep.previous_version,
                            "version": dep.version,
                        }
                        for dep in dependency_change.updated_dependencies
                    ],
                },
            )
        )

    def close_pull_request(self, dependency_names: Sequence[str], reason: str) -> None:
        self.calls.append(
            ServiceCall(
                kind="close_pull_request",
                payload={"dependencies": list(dependency_names), "reason": reason},
            )
        )

    def capture_exception(self, *, error: BaseException, job: Job | None = None) -> None:
        self.calls.append(
            ServiceCall(
                kind="capture_exception",
                payload={
                    "error_class": type(error).__name__,
                    "message": str(error),
                    "group": job.dependency_group_to_refresh if job else None,
                },
            )
        )

    def record_update_job_error(
        self,
        *,
        error_type: str,
        error_details: dict[str, object],
        dependency: str | None = None,
    ) -> None:
        self.calls.append(
            ServiceCall(
                kind="record_update_job_error",
                payload={
                    "error_type": error_type,
                    "error_details": dict(error_details),
                    "dependency": dependency,
                },
            )
        )

    def calls_of(self, kind: ServiceCallKind) -> list[ServiceCall]:
        return [call for call in self.calls if call.kind == kind]

    @property
    def mutations(self) -> list[ServiceCall]:
        return [
            call
            for call in self.calls
            if call.kind in ("update_pull_request", "close_pull_request")
        ]
