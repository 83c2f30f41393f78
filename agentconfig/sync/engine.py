# AgentConfig Sync Engine
# Orchestrates mapping resolution, conflict decisions, apply and state refresh

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from agentconfig.config.schema import AgentConfigFile, Scope, SyncMode
from agentconfig.errors import ConflictError, FilesystemError, ValidationError
from agentconfig.sync.apply import apply_mapping, resolve_sync_mode
from agentconfig.sync.conflict import (
    ConflictEngine,
    ConflictPolicy,
    ConflictResolver,
    TargetClass,
    backup_target,
    classify_target,
)
from agentconfig.sync.mapping import ResolvedMapping, resolve_mappings
from agentconfig.sync.state import StateManager, build_record, merge_state
from agentconfig.utils.filesystem import exists
from agentconfig.utils.paths import PathContext, backup_timestamp
from agentconfig.utils.platform import can_create_symlinks


@dataclass
class SyncOptions:
    """
    Inputs of one sync run.

    The engine reads the environment, working directory and home directory
    only through ``context``.
    """

    config: AgentConfigFile
    source_root: Path
    scope: Scope = Scope.GLOBAL
    project_root: Optional[Path] = None
    mode: Optional[SyncMode] = None  # None uses defaults.mode
    dry_run: bool = False
    force: bool = False
    conflict_policy: Optional[ConflictPolicy] = None
    agent_filter: Optional[str] = None
    strict: bool = False
    profile: Optional[str] = None
    context: PathContext = field(default_factory=PathContext.from_environment)
    conflict_resolver: Optional[ConflictResolver] = None
    interactive: bool = False
    symlink_check: Callable[[], bool] = can_create_symlinks


@dataclass
class SyncResult:
    """Result of a sync run."""

    planned: list[ResolvedMapping] = field(default_factory=list)
    updated: list[ResolvedMapping] = field(default_factory=list)
    skipped: list[ResolvedMapping] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    # Link mappings that already pointed at their source; also in updated
    unchanged: list[ResolvedMapping] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


def sync_configs(options: SyncOptions) -> SyncResult:
    """
    Sync every planned mapping and refresh the state snapshot.

    Mappings are processed strictly in resolution order. Nothing applied
    before a cancel or an error is rolled back.

    Args:
        options: Run options.

    Returns:
        SyncResult with planned, updated and skipped mappings and warnings.

    Raises:
        ValidationError: Missing project root, malformed state, or a missing
            source in strict mode.
        ConflictError: The operator cancelled at a conflict.
        FilesystemError: A non-empty directory could not be replaced, or I/O
            failed while applying.
    """
    mode = resolve_sync_mode(options.mode or options.config.defaults.mode, options.symlink_check)
    mappings = resolve_mappings(
        options.config,
        options.source_root,
        options.scope,
        options.project_root,
        mode,
        options.context,
        agent_filter=options.agent_filter,
        profile=options.profile,
    )
    result = SyncResult(planned=mappings)

    state_manager = StateManager(options.source_root)
    previous_state = state_manager.load()
    conflicts = ConflictEngine(
        options.conflict_policy,
        resolver=options.conflict_resolver,
        interactive=options.interactive,
    )
    timestamp = backup_timestamp()
    applied: set[Path] = set()

    for mapping in mappings:
        target_class = classify_target(mapping.target, previous_state, applied)
        allow_non_empty_dir = (
            options.force
            or (conflicts.policy is not None and conflicts.policy.allows_replace)
            or target_class == TargetClass.MANAGED
        )

        if not exists(mapping.source):
            if options.strict:
                raise ValidationError(f"Missing source: {mapping.source}")
            result.warnings.append(f"Skipping missing source: {mapping.source}")
            result.skipped.append(mapping)
            continue

        if target_class == TargetClass.UNMANAGED and not options.force:
            action = conflicts.decide(mapping.target)
            if action == ConflictPolicy.CANCEL:
                raise ConflictError("Sync cancelled")
            if action == ConflictPolicy.SKIP:
                result.warnings.append(f"Skipping unmanaged target: {mapping.target}")
                result.skipped.append(mapping)
                continue
            if action == ConflictPolicy.BACKUP and not options.dry_run:
                try:
                    backup_target(mapping.target, options.source_root, timestamp)
                except OSError as e:
                    raise FilesystemError(f"Failed to back up {mapping.target}") from e
            allow_non_empty_dir = True

        applied.add(mapping.target)
        if options.dry_run:
            continue

        try:
            changed = apply_mapping(mapping, result.warnings, allow_non_empty_dir=allow_non_empty_dir)
        except OSError as e:
            raise FilesystemError(f"Failed to sync {mapping.target}") from e

        result.updated.append(mapping)
        if not changed:
            result.unchanged.append(mapping)

    if not options.dry_run:
        records = [build_record(mapping) for mapping in result.updated]
        state_manager.save(merge_state(previous_state, options.scope.value, options.project_root, records))

    return result
