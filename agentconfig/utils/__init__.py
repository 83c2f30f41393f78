# AgentConfig Utilities Module
# Path resolution, filesystem probing, hashing and platform helpers

from agentconfig.utils.filesystem import (
    PathInfo,
    PathKind,
    exists,
    kind_of,
    read_link_target,
)
from agentconfig.utils.hashing import (
    content_hash,
    directory_hash,
    file_hash,
    hash_path,
)
from agentconfig.utils.paths import (
    PathContext,
    atomic_write,
    backup_destination,
    backup_timestamp,
    copy_file_or_dir,
    ensure_dir,
    expand_placeholders,
    is_directory_mapping,
    remove_directory,
    resolve_absolute,
    resolve_from_root,
    strip_anchor,
)
from agentconfig.utils.platform import (
    can_create_symlinks,
    get_current_platform,
)

__all__ = [
    # Platform
    "get_current_platform",
    "can_create_symlinks",
    # Paths
    "PathContext",
    "expand_placeholders",
    "resolve_absolute",
    "resolve_from_root",
    "is_directory_mapping",
    "strip_anchor",
    "ensure_dir",
    "copy_file_or_dir",
    "remove_directory",
    "atomic_write",
    "backup_timestamp",
    "backup_destination",
    # Filesystem inspection
    "PathKind",
    "PathInfo",
    "exists",
    "kind_of",
    "read_link_target",
    # Hashing
    "content_hash",
    "file_hash",
    "directory_hash",
    "hash_path",
]
