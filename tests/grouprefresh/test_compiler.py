from __future__ import annotations

from grouprefresh.compiler import (
    CallableChangeCompiler,
    StaticChangeCompiler,
    compile_all_dependency_changes_for,
)
from grouprefresh.models import Dependency, DependencyChange, DependencyGroup, DependencySnapshot

WEB = DependencyGroup(name="web")
SNAPSHOT = DependencySnapshot(base_commit_sha="abc123", groups=(WEB,), job_group_name="web")


def test_static_compiler_serves_change_for_group() -> None:
    change = DependencyChange(
        dependency_group=WEB,
        updated_dependencies=(Dependency(name="react", version="18.3.1"),),
    )

    assert StaticChangeCompiler({"web": change}).compile_changes_for(WEB, SNAPSHOT) is change


def test_static_compiler_returns_empty_change_for_unknown_group() -> None:
    change = StaticChangeCompiler({}).compile_changes_for(WEB, SNAPSHOT)

    assert change.has_updates is False
    assert change.dependency_group == WEB


def test_callable_compiler_forwards_group_and_snapshot() -> None:
    seen: list[tuple[DependencyGroup, DependencySnapshot]] = []

    def compile_fn(group: DependencyGroup, snapshot: DependencySnapshot) -> DependencyChange:
        seen.append((group, snapshot))
        return DependencyChange(dependency_group=group)

    CallableChangeCompiler(compile_fn).compile_changes_for(WEB, SNAPSHOT)

    assert seen == [(WEB, SNAPSHOT)]


def test_compile_all_dependency_changes_for_returns_compiler_result() -> None:
    change = DependencyChange(
        dependency_group=WEB,
        updated_dependencies=(Dependency(name="react", previous_version="18.2.0", version="18.3.1"),),
    )
    compiler = StaticChangeCompiler({"web": change})

    assert compile_all_dependency_changes_for(compiler, WEB, SNAPSHOT) is change
