from __future__ import annotations

import errno

import pytest

from grouprefresh.error_handler import (
    RUN_HALTING_KINDS,
    ErrorClassifier,
    ErrorHandler,
    error_details_for,
)
from grouprefresh.errors import (
    AllVersionsIgnoredError,
    BackendUnauthorizedError,
    DependencyFileNotParseableError,
    DependencyFileNotResolvableError,
    HaltingKind,
    OutOfDiskError,
    OutOfMemoryError,
    UnexpectedExternalCodeError,
    UpdaterError,
    error_kind,
)
from grouprefresh.service import RecordingPullRequestService


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (OutOfDiskError("disk"), HaltingKind.OUT_OF_DISK),
        (OutOfMemoryError("memory"), HaltingKind.OUT_OF_MEMORY),
        (AllVersionsIgnoredError("ignored"), HaltingKind.ALL_VERSIONS_IGNORED),
        (UnexpectedExternalCodeError("postinstall"), HaltingKind.UNEXPECTED_EXTERNAL_CODE),
        (BackendUnauthorizedError("401"), HaltingKind.BACKEND_UNAUTHORIZED),
        (MemoryError(), HaltingKind.OUT_OF_MEMORY),
        (OSError(errno.ENOSPC, "No space left on device"), HaltingKind.OUT_OF_DISK),
    ],
)
def test_error_kind_maps_run_halting_errors(error: BaseException, kind: HaltingKind) -> None:
    assert error_kind(error) is kind
    assert ErrorClassifier().is_run_halting(error) is True


@pytest.mark.parametrize(
    "error",
    [
        UpdaterError("generic"),
        DependencyFileNotResolvableError("resolve"),
        DependencyFileNotParseableError("parse", file_path="package.json"),
        OSError(errno.EACCES, "Permission denied"),
        RuntimeError("boom"),
        KeyError("missing"),
    ],
)
def test_other_errors_are_not_run_halting(error: BaseException) -> None:
    assert error_kind(error) is None
    assert ErrorClassifier().is_run_halting(error) is False


def test_default_classifier_covers_every_halting_kind() -> None:
    assert ErrorClassifier().run_halting == RUN_HALTING_KINDS
    assert RUN_HALTING_KINDS == frozenset(HaltingKind)


def test_classifier_honors_a_narrowed_registry() -> None:
    classifier = ErrorClassifier(run_halting=[HaltingKind.OUT_OF_DISK])

    assert classifier.is_run_halting(OutOfDiskError("disk")) is True
    assert classifier.is_run_halting(BackendUnauthorizedError("401")) is False


def test_error_details_for_updater_error_uses_error_type_and_details() -> None:
    details = error_details_for(
        DependencyFileNotParseableError("bad json", file_path="package.json")
    )

    assert details.error_type == "dependency_file_not_parseable"
    assert details.error_details == {"message": "bad json", "file-path": "package.json"}
    assert details.unknown is False


def test_error_details_for_unknown_error() -> None:
    details = error_details_for(ValueError("nope"))

    assert details.unknown is True
    assert details.error_details == {"error-class": "ValueError", "message": "nope"}


def test_handler_records_known_error_against_dependency(
    capsys: pytest.CaptureFixture[str],
) -> None:
    service = RecordingPullRequestService()

    ErrorHandler(service=service).handle_dependency_error(
        error=DependencyFileNotResolvableError("registry down"), dependency="frontend-deps"
    )

    assert service.calls_of("capture_exception") == []
    (recorded,) = service.calls_of("record_update_job_error")
    assert recorded.payload == {
        "error_type": "dependency_file_not_resolvable",
        "error_details": {"message": "registry down"},
        "dependency": "frontend-deps",
    }
    assert "Error processing frontend-deps" in capsys.readouterr().err


def test_handler_captures_unknown_errors_before_recording() -> None:
    service = RecordingPullRequestService()

    ErrorHandler(service=service).handle_dependency_error(
        error=RuntimeError("boom"), dependency="frontend-deps"
    )

    assert [call.kind for call in service.calls] == [
        "capture_exception",
        "record_update_job_error",
    ]
    assert service.calls[1].payload["error_type"] == "unknown_error"
