"""Updater failure contracts.

Operations raise ``UpdaterError`` subclasses for expected updater conditions.
Each error carries a stable ``error_type`` code used when the failure is
recorded against the job. Errors whose ``halting_kind`` is set describe
conditions that make the rest of the job meaningless; everything else is
reported per dependency and the job carries on.
"""

from __future__ import annotations

import errno
from enum import Enum


class HaltingKind(str, Enum):
    """Closed set of run-halting failure categories."""

    OUT_OF_DISK = "out_of_disk"
    OUT_OF_MEMORY = "out_of_memory"
    ALL_VERSIONS_IGNORED = "all_versions_ignored"
    UNEXPECTED_EXTERNAL_CODE = "unexpected_external_code"
    BACKEND_UNAUTHORIZED = "backend_unauthorized"


class UpdaterError(Exception):
    """Expected updater failure.

    Use ``raise UpdaterError(...) from exc`` to chain a causing exception; it is
    available as ``__cause__``.
    """

    error_type = "updater_error"
    halting_kind: HaltingKind | None = None

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.details = dict(details or {})


class OutOfDiskError(UpdaterError):
    """The job ran out of disk space."""

    error_type = "out_of_disk"
    halting_kind = HaltingKind.OUT_OF_DISK


class OutOfMemoryError(UpdaterError):
    """The job ran out of memory."""

    error_type = "out_of_memory"
    halting_kind = HaltingKind.OUT_OF_MEMORY


class AllVersionsIgnoredError(UpdaterError):
    """Every candidate version is excluded by ignore rules."""

    error_type = "all_versions_ignored"
    halting_kind = HaltingKind.ALL_VERSIONS_IGNORED


class UnexpectedExternalCodeError(UpdaterError):
    """The repository tried to execute code during dependency resolution."""

    error_type = "unexpected_external_code"
    halting_kind = HaltingKind.UNEXPECTED_EXTERNAL_CODE


class BackendUnauthorizedError(UpdaterError):
    """The pull-request backend rejected the job's credentials."""

    error_type = "backend_unauthorized"
    halting_kind = HaltingKind.BACKEND_UNAUTHORIZED


class DependencyFileNotResolvableError(UpdaterError):
    """A manifest could not be resolved against the registry."""

    error_type = "dependency_file_not_resolvable"


class DependencyFileNotParseableError(UpdaterError):
    """A manifest could not be parsed."""

    error_type = "dependency_file_not_parseable"

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        merged = dict(details or {})
        if file_path is not None:
            merged.setdefault("file-path", file_path)
        super().__init__(message, details=merged)
        self.file_path = file_path


class ConfigError(UpdaterError):
    """A job, snapshot or change payload failed validation."""

    error_type = "invalid_config"


def error_kind(error: BaseException) -> HaltingKind | None:
    """Return the run-halting category for an error, if it has one.

    Example:
        >>> error_kind(OutOfDiskError("disk full"))
        <HaltingKind.OUT_OF_DISK: 'out_of_disk'>
        >>> error_kind(ValueError("nope")) is None
        True
    """
    if isinstance(error, UpdaterError):
        return error.halting_kind
    if isinstance(error, MemoryError):
        return HaltingKind.OUT_OF_MEMORY
    if isinstance(error, OSError) and error.errno == errno.ENOSPC:
        return HaltingKind.OUT_OF_DISK
    return None
