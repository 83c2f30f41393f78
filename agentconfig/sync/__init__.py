# AgentConfig Sync Module
# Core synchronization engine and components

from agentconfig.sync.apply import apply_mapping, resolve_sync_mode
from agentconfig.sync.conflict import (
    ConflictChoice,
    ConflictEngine,
    ConflictPolicy,
    ConflictResolver,
    TargetClass,
    backup_target,
    classify_target,
)
from agentconfig.sync.engine import SyncOptions, SyncResult, sync_configs
from agentconfig.sync.mapping import ResolvedMapping, resolve_mappings
from agentconfig.sync.state import StateManager, SyncRecord, SyncState
from agentconfig.sync.status import DriftStatus, StatusEntry, get_status

__all__ = [
    # Mapping
    "ResolvedMapping",
    "resolve_mappings",
    # Conflicts
    "ConflictPolicy",
    "ConflictChoice",
    "ConflictResolver",
    "ConflictEngine",
    "TargetClass",
    "classify_target",
    "backup_target",
    # Apply
    "apply_mapping",
    "resolve_sync_mode",
    # State
    "SyncRecord",
    "SyncState",
    "StateManager",
    # Engine
    "SyncOptions",
    "SyncResult",
    "sync_configs",
    # Status
    "DriftStatus",
    "StatusEntry",
    "get_status",
]
