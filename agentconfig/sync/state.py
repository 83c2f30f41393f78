# AgentConfig Sync State
# Persisted snapshot of synced targets for drift detection

import json
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from agentconfig.errors import ValidationError
from agentconfig.sync.mapping import ResolvedMapping
from agentconfig.utils.hashing import hash_path
from agentconfig.utils.paths import atomic_write

STATE_FILENAME = ".sync-state.json"
STATE_VERSION = 1


@dataclass
class SyncRecord:
    """
    What was synced to one target.

    ``hash`` is meaningful for copy records, ``link_target`` for link records.
    """

    path: str
    source: str
    agent: str
    mode: str
    size: int = 0
    mtime_ms: float = 0
    hash: Optional[str] = None
    link_target: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON document shape."""
        return {
            "path": self.path,
            "source": self.source,
            "agent": self.agent,
            "mode": self.mode,
            "size": self.size,
            "mtimeMs": self.mtime_ms,
            "hash": self.hash,
            "linkTarget": self.link_target,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncRecord":
        """Create from the JSON document shape."""
        return cls(
            path=data["path"],
            source=data["source"],
            agent=data["agent"],
            mode=data["mode"],
            size=data.get("size", 0),
            mtime_ms=data.get("mtimeMs", 0),
            hash=data.get("hash"),
            link_target=data.get("linkTarget"),
        )


@dataclass
class SyncState:
    """
    Snapshot of every target synced from one source root.

    Keyed by absolute target path.
    """

    mode: str
    version: int = STATE_VERSION
    updated_at: str = ""
    project_root: Optional[str] = None
    files: dict[str, SyncRecord] = field(default_factory=dict)

    def is_managed(self, target: Path | str) -> bool:
        """Check whether a target was created by a previous sync."""
        return str(target) in self.files

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "version": self.version,
            "updatedAt": self.updated_at,
            "mode": self.mode,
            "projectRoot": self.project_root,
            "files": {key: record.to_dict() for key, record in self.files.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncState":
        """Create from dictionary."""
        files = {key: SyncRecord.from_dict(record) for key, record in data.get("files", {}).items()}
        return cls(
            version=data.get("version", STATE_VERSION),
            updated_at=data.get("updatedAt", ""),
            mode=data.get("mode", "global"),
            project_root=data.get("projectRoot"),
            files=files,
        )


class StateManager:
    """
    Manages sync state persistence.

    The snapshot lives at a fixed filename under the source root.
    """

    def __init__(self, root: Path):
        """
        Initialize state manager.

        Args:
            root: Source root that owns the snapshot.
        """
        self.root = root
        self.state_path = root / STATE_FILENAME

    def load(self) -> Optional[SyncState]:
        """
        Load the snapshot.

        Returns:
            SyncState, or None if no snapshot has been written yet.

        Raises:
            ValidationError: If the file is not valid JSON or not a state document.
        """
        try:
            raw = self.state_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {self.state_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError(f"Invalid state format in {self.state_path}")

        try:
            return SyncState.from_dict(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise ValidationError(f"Invalid state format in {self.state_path}: {e}") from e

    def save(self, state: SyncState) -> None:
        """Write the snapshot as indented JSON."""
        atomic_write(self.state_path, json.dumps(state.to_dict(), indent=2))


def build_record(mapping: ResolvedMapping) -> SyncRecord:
    """
    Re-inspect an applied target and describe it.

    The recorded mode reflects what is actually on disk, so a link mapping
    that fell back to copying is recorded as a copy.
    """
    st = os.lstat(mapping.target)
    is_link = stat.S_ISLNK(st.st_mode)

    return SyncRecord(
        path=str(mapping.target),
        source=str(mapping.source),
        agent=mapping.agent,
        mode="link" if is_link else "copy",
        size=st.st_size,
        mtime_ms=st.st_mtime * 1000,
        hash=None if is_link else hash_path(mapping.target),
        link_target=os.readlink(mapping.target) if is_link else None,
    )


def merge_state(
    previous: Optional[SyncState],
    mode: str,
    project_root: Optional[Path],
    records: list[SyncRecord],
) -> SyncState:
    """
    Merge new records into the previous snapshot.

    Records for targets no longer in the configuration are kept; newer
    records replace older ones for the same target.
    """
    files: dict[str, SyncRecord] = dict(previous.files) if previous else {}
    for record in records:
        files[record.path] = record

    return SyncState(
        version=STATE_VERSION,
        updated_at=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        mode=mode,
        project_root=str(project_root) if project_root is not None else None,
        files=files,
    )
