from __future__ import annotations

import pytest
from pydantic import ValidationError

from grouprefresh.models import (
    Dependency,
    DependencyChange,
    DependencyGroup,
    DependencySnapshot,
    Job,
)


def test_group_rules_default_to_matching_everything() -> None:
    group = DependencyGroup(name="all-deps")

    assert group.rules.patterns == ("*",)
    assert group.rules.exclude_patterns == ()
    assert group.rules.dependency_type == "all"


def test_group_rules_reject_unknown_dependency_type() -> None:
    with pytest.raises(ValidationError):
        DependencyGroup(name="dev", rules={"dependency_type": "optional"})


def test_group_name_is_required() -> None:
    with pytest.raises(ValidationError):
        DependencyGroup(name="   ")


def test_single_pattern_string_is_accepted() -> None:
    group = DependencyGroup(name="only-react", rules={"patterns": " react "})

    assert group.rules.patterns == ("react",)


def test_job_normalizes_blank_group_name() -> None:
    assert Job(dependency_group_to_refresh="  ").dependency_group_to_refresh is None
    assert Job(dependency_group_to_refresh=" web ").dependency_group_to_refresh == "web"


def test_job_is_immutable() -> None:
    job = Job(dependencies=["react"])

    assert job.dependencies == ("react",)
    with pytest.raises(ValidationError):
        job.security_updates_only = True  # type: ignore[misc]


def test_snapshot_resolves_job_group_by_name() -> None:
    web = DependencyGroup(name="web")
    api = DependencyGroup(name="api")
    job = Job(dependency_group_to_refresh="api")

    snapshot = DependencySnapshot.for_job(job, base_commit_sha="abc123", groups=(web, api))

    assert snapshot.job_group == api
    assert snapshot.job_group_name == "api"


def test_snapshot_job_group_is_none_when_group_was_removed() -> None:
    snapshot = DependencySnapshot(
        base_commit_sha="abc123",
        groups=(DependencyGroup(name="web"),),
        job_group_name="api",
    )

    assert snapshot.job_group is None


def test_snapshot_job_group_is_none_without_a_name() -> None:
    snapshot = DependencySnapshot(base_commit_sha="abc123", groups=(DependencyGroup(name="web"),))

    assert snapshot.job_group is None


def test_dependency_change_exposes_ordered_names() -> None:
    change = DependencyChange(
        updated_dependencies=(
            Dependency(name="react-dom", previous_version="18.2.0", version="18.3.1"),
            Dependency(name="react", previous_version="18.2.0", version="18.3.1"),
        )
    )

    assert change.has_updates is True
    assert change.updated_dependency_names == ("react-dom", "react")
    assert DependencyChange().has_updates is False


def test_humanized_version_change() -> None:
    assert Dependency(name="a", previous_version="1.0", version="2.0").humanized_version_change == (
        "1.0 -> 2.0"
    )
    assert Dependency(name="a").humanized_version_change == "unknown -> removed"


def test_snapshot_strips_job_group_name_before_resolving() -> None:
    frontend = DependencyGroup(name="frontend-deps")

    snapshot = DependencySnapshot(
        base_commit_sha="abc123", groups=(frontend,), job_group_name=" frontend-deps "
    )

    assert snapshot.job_group_name == "frontend-deps"
    assert snapshot.job_group == frontend


def test_snapshot_blank_job_group_name_becomes_none() -> None:
    snapshot = DependencySnapshot(
        base_commit_sha="abc123", groups=(DependencyGroup(name="web"),), job_group_name="   "
    )

    assert snapshot.job_group_name is None
    assert snapshot.job_group is None
