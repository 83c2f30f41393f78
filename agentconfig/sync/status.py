# AgentConfig Drift Detector
# Compares synced targets against the persisted snapshot

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from agentconfig.sync.state import StateManager, SyncRecord
from agentconfig.utils.filesystem import kind_of
from agentconfig.utils.hashing import hash_path


class DriftStatus(str, Enum):
    """Drift classification of a synced target."""

    OK = "ok"
    DRIFTED = "drifted"
    MISSING = "missing"


@dataclass
class StatusEntry:
    """Drift status of one target."""

    path: str
    status: DriftStatus
    reason: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.status == DriftStatus.OK


def check_record(record: SyncRecord) -> StatusEntry:
    """
    Classify one record against the current filesystem.

    Records stored with the legacy ``auto`` mode are checked as links when
    the target is currently a symlink and as copies otherwise.
    """
    target = Path(record.path)
    info = kind_of(target)

    if not info.exists:
        return StatusEntry(record.path, DriftStatus.MISSING, "target missing")

    mode = record.mode
    if mode == "auto":
        mode = "link" if info.is_symlink else "copy"

    if mode == "link":
        if not info.is_symlink or not record.link_target or info.link_target != record.link_target:
            return StatusEntry(record.path, DriftStatus.DRIFTED, "link target changed")
        return StatusEntry(record.path, DriftStatus.OK)

    if not record.hash or hash_path(target) != record.hash:
        return StatusEntry(record.path, DriftStatus.DRIFTED, "content changed")
    return StatusEntry(record.path, DriftStatus.OK)


def get_status(root: Path) -> list[StatusEntry]:
    """
    Report drift for every target in the snapshot under root.

    Args:
        root: Source root owning the snapshot.

    Returns:
        One StatusEntry per record, in snapshot order. Empty if nothing has
        been synced yet.
    """
    state = StateManager(root).load()
    if state is None:
        return []
    return [check_record(record) for record in state.files.values()]
