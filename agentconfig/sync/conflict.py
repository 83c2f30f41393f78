# AgentConfig Conflict Engine
# Target classification and per-run conflict policy decisions

import errno
import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from agentconfig.sync.state import SyncState
from agentconfig.utils.filesystem import exists
from agentconfig.utils.paths import backup_destination, copy_file_or_dir, ensure_dir, strip_anchor


class ConflictPolicy(str, Enum):
    """What to do with an existing target the tool doesn't manage."""

    OVERWRITE = "overwrite"
    BACKUP = "backup"
    SKIP = "skip"
    CANCEL = "cancel"

    @property
    def allows_replace(self) -> bool:
        """Whether the policy permits destroying the existing target."""
        return self in (ConflictPolicy.OVERWRITE, ConflictPolicy.BACKUP)


class TargetClass(str, Enum):
    """Classification of a planned target before applying."""

    ABSENT = "absent"
    MANAGED = "managed"
    UNMANAGED = "unmanaged"


@dataclass(frozen=True)
class ConflictChoice:
    """An operator's answer to a single conflict."""

    action: ConflictPolicy
    apply_to_all: bool = False


# Synchronous decision callback: receives the conflicting target path
ConflictResolver = Callable[[Path], ConflictChoice]


def classify_target(
    target: Path,
    previous_state: Optional[SyncState],
    applied: Optional[set[Path]] = None,
) -> TargetClass:
    """
    Classify a target against the filesystem and the previous snapshot.

    A target recorded in the previous snapshot is managed even if it has
    since disappeared. So is a target already written earlier in the
    current run (``applied``), since several agents may share one target.
    """
    if applied is not None and target in applied:
        return TargetClass.MANAGED
    if previous_state is not None and previous_state.is_managed(target):
        return TargetClass.MANAGED
    if exists(target):
        return TargetClass.UNMANAGED
    return TargetClass.ABSENT


class ConflictEngine:
    """
    Conflict policy state shared by every mapping in one run.

    A policy supplied up front, or chosen interactively with "apply to all",
    is fixed for the rest of the run. A run that cannot prompt fixes ``skip``
    at its first conflict.
    """

    def __init__(
        self,
        policy: Optional[ConflictPolicy] = None,
        *,
        resolver: Optional[ConflictResolver] = None,
        interactive: bool = False,
    ):
        """
        Initialize conflict engine.

        Args:
            policy: Fixed policy for all conflicts, if already known.
            resolver: Callback asked for each conflict while no policy is fixed.
            interactive: Whether the operator can be prompted at all.
        """
        self.policy = policy
        self.resolver = resolver
        self.interactive = interactive
        self.can_ask = True

    def decide(self, target: Path) -> ConflictPolicy:
        """
        Decide what to do with an unmanaged existing target.

        Args:
            target: The conflicting target path.

        Returns:
            The policy to apply to this target.
        """
        if self.policy is not None:
            return self.policy

        if not self.can_ask or not self.interactive or self.resolver is None:
            self.policy = ConflictPolicy.SKIP
            return self.policy

        choice = self.resolver(target)
        if choice.apply_to_all:
            self.policy = choice.action
            self.can_ask = False
        return choice.action


def backup_target(target: Path, source_root: Path, timestamp: str) -> Path:
    """
    Copy an existing target into the source root's backup directory.

    The backup keeps the target's absolute path below the timestamp
    directory: ``<source_root>/backup/<timestamp>/<target without anchor>``.

    Returns:
        Path of the backup copy.

    Raises:
        FileExistsError: If a backup already exists at the destination.
    """
    destination = backup_destination(source_root, timestamp, strip_anchor(target))
    if exists(destination):
        raise FileExistsError(errno.EEXIST, "Backup already exists", str(destination))
    ensure_dir(destination.parent)
    if target.is_symlink():
        os.symlink(os.readlink(target), destination)
    else:
        copy_file_or_dir(target, destination)
    return destination
