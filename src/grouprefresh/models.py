"""Pydantic models for refresh jobs, snapshots and change sets."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DependencyType = Literal["all", "production", "development"]


def _clean_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None


class GroupRules(BaseModel):
    """Dependency-matching rules for a group.

    Attributes:
        patterns: Glob patterns a dependency name must match (any of).
        exclude_patterns: Glob patterns that remove a dependency from the group.
        dependency_type: Restrict the group to production or development deps.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    patterns: tuple[str, ...] = ("*",)
    exclude_patterns: tuple[str, ...] = ()
    dependency_type: DependencyType = "all"

    @field_validator("patterns", "exclude_patterns", mode="before")
    @classmethod
    def _normalize_patterns(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple)):
            return tuple(p for p in (_clean_str(entry) for entry in value) if p)
        return value


class DependencyGroup(BaseModel):
    """A named, configured set of dependency-matching rules.

    Example:
        >>> group = DependencyGroup(name=" frontend-deps ", rules={"patterns": "react*"})
        >>> group.name
        'frontend-deps'
        >>> group.rules.patterns
        ('react*',)
    """

    model_config = ConfigDict(frozen=True)

    name: str
    rules: GroupRules = Field(default_factory=GroupRules)

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: object) -> object:
        normalized = _clean_str(value)
        if normalized is None:
            raise ValueError("group name must not be empty")
        return normalized


class Dependency(BaseModel):
    """A single dependency update specification."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str | None = None
    previous_version: str | None = None
    package_manager: str | None = None
    production: bool | None = None
    metadata: dict[str, object] = Field(default_factory=dict)

    @property
    def humanized_version_change(self) -> str:
        previous = self.previous_version or "unknown"
        current = self.version or "removed"
        return f"{previous} -> {current}"


class Job(BaseModel):
    """The unit of work requesting a refresh.

    Attributes:
        security_updates_only: Whether the job only performs security updates.
        dependencies: Dependency names covered by the pull request, verbatim.
        dependency_group_to_refresh: Name of the group the pull request belongs to.
        updating_a_pull_request: Whether the job targets an existing pull request.
        experiments: Named experiment flags enabled for the job.
    """

    model_config = ConfigDict(frozen=True)

    security_updates_only: bool = False
    dependencies: tuple[str, ...] = ()
    dependency_group_to_refresh: str | None = None
    updating_a_pull_request: bool = False
    experiments: dict[str, bool] = Field(default_factory=dict)

    @field_validator("dependency_group_to_refresh", mode="before")
    @classmethod
    def _normalize_group_name(cls, value: object) -> object:
        if value is None:
            return None
        return _clean_str(value)


class DependencySnapshot(BaseModel):
    """State of the target branch at refresh time."""

    model_config = ConfigDict(frozen=True)

    base_commit_sha: str
    groups: tuple[DependencyGroup, ...] = ()
    job_group_name: str | None = None

    @field_validator("job_group_name", mode="before")
    @classmethod
    def _normalize_group_name(cls, value: object) -> object:
        if value is None:
            return None
        return _clean_str(value)

    @property
    def job_group(self) -> DependencyGroup | None:
        if self.job_group_name is None:
            return None
        for group in self.groups:
            if group.name == self.job_group_name:
                return group
        return None

    @classmethod
    def for_job(
        cls,
        job: Job,
        *,
        base_commit_sha: str,
        groups: tuple[DependencyGroup, ...] = (),
    ) -> DependencySnapshot:
        """Build a snapshot that resolves the job's group against ``groups``."""
        return cls(
            base_commit_sha=base_commit_sha,
            groups=groups,
            job_group_name=job.dependency_group_to_refresh,
        )


class DependencyChange(BaseModel):
    """Recomputed set of dependency updates required right now.

    An empty ``updated_dependencies`` means the group needs nothing.
    """

    model_config = ConfigDict(frozen=True)

    updated_dependencies: tuple[Dependency, ...] = ()
    dependency_group: DependencyGroup | None = None
    updated_dependency_files: tuple[str, ...] = ()

    @property
    def has_updates(self) -> bool:
        return bool(self.updated_dependencies)

    @property
    def updated_dependency_names(self) -> tuple[str, ...]:
        return tuple(dep.name for dep in self.updated_dependencies)
