"""Run-halting classification and recoverable error reporting."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from . import log
from .errors import HaltingKind, UpdaterError, error_kind
from .ports import PullRequestService

RUN_HALTING_KINDS: frozenset[HaltingKind] = frozenset(HaltingKind)

UNKNOWN_ERROR_TYPE = "unknown_error"


class ErrorClassifier:
    """Static lookup of errors against the run-halting category set."""

    def __init__(self, run_halting: Iterable[HaltingKind] = RUN_HALTING_KINDS) -> None:
        self._run_halting = frozenset(run_halting)

    @property
    def run_halting(self) -> frozenset[HaltingKind]:
        return self._run_halting

    def is_run_halting(self, error: BaseException) -> bool:
        kind = error_kind(error)
        return kind is not None and kind in self._run_halting


@dataclass(frozen=True)
class ErrorDetails:
    """Recorded shape of a recoverable failure.

    Args:
        error_type: Stable failure code for the backend.
        error_details: Extra structured context for the failure.
    """

    error_type: str
    error_details: dict[str, object] = field(default_factory=dict)

    @property
    def unknown(self) -> bool:
        return self.error_type == UNKNOWN_ERROR_TYPE


def error_details_for(error: BaseException) -> ErrorDetails:
    """Map an error to the details recorded against the job."""
    if isinstance(error, UpdaterError):
        details: dict[str, object] = {"message": str(error)}
        details.update(error.details)
        return ErrorDetails(error_type=error.error_type, error_details=details)
    return ErrorDetails(
        error_type=UNKNOWN_ERROR_TYPE,
        error_details={"error-class": type(error).__name__, "message": str(error)},
    )


class ErrorHandler:
    """Report recoverable per-dependency failures to the backend."""

    def __init__(self, *, service: PullRequestService) -> None:
        self._service = service

    def handle_dependency_error(self, *, error: BaseException, dependency: str) -> None:
        details = error_details_for(error)
        log.error(f"Error processing {dependency} ({type(error).__name__})")
        log.error(str(error))
        if details.unknown:
            self._service.capture_exception(error=error)
        self._service.record_update_job_error(
            error_type=details.error_type,
            error_details=details.error_details,
            dependency=dependency,
        )
