"""Adapters between refresh operations and the dependency change compiler."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from . import log
from .models import DependencyChange, DependencyGroup, DependencySnapshot
from .ports import DependencyChangeCompiler

CompileFn = Callable[[DependencyGroup, DependencySnapshot], DependencyChange]


class CallableChangeCompiler:
    """Expose a plain function as a ``DependencyChangeCompiler``."""

    def __init__(self, compile_fn: CompileFn) -> None:
        self._compile_fn = compile_fn

    def compile_changes_for(
        self, group: DependencyGroup, snapshot: DependencySnapshot
    ) -> DependencyChange:
        return self._compile_fn(group, snapshot)


class StaticChangeCompiler:
    """Serve precomputed change sets keyed by group name.

    A group with no entry compiles to an empty change set.
    """

    def __init__(self, changes: Mapping[str, DependencyChange]) -> None:
        self._changes = dict(changes)

    def compile_changes_for(
        self, group: DependencyGroup, snapshot: DependencySnapshot
    ) -> DependencyChange:
        del snapshot
        change = self._changes.get(group.name)
        if change is None:
            return DependencyChange(dependency_group=group)
        return change


def compile_all_dependency_changes_for(
    compiler: DependencyChangeCompiler,
    group: DependencyGroup,
    snapshot: DependencySnapshot,
) -> DependencyChange:
    """Recompute every update the group needs on the snapshot's branch state."""
    log.debug(f"Compiling dependency changes for '{group.name}' at {snapshot.base_commit_sha}")
    change = compiler.compile_changes_for(group, snapshot)
    if change.has_updates:
        for dependency in change.updated_dependencies:
            log.trace(f"  {dependency.name} {dependency.humanized_version_change}")
    else:
        log.debug(f"No dependency changes required for '{group.name}'")
    return change
