# AgentConfig Filesystem Inspection
# Existence and kind queries that never follow the final symlink

import os
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class PathKind(str, Enum):
    """Kind of filesystem node at a path."""

    ABSENT = "absent"
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class PathInfo:
    """Result of probing a path."""

    kind: PathKind
    link_target: Optional[str] = None

    @property
    def exists(self) -> bool:
        return self.kind != PathKind.ABSENT

    @property
    def is_symlink(self) -> bool:
        return self.kind == PathKind.SYMLINK

    @property
    def is_directory(self) -> bool:
        return self.kind == PathKind.DIRECTORY


def exists(path: Path) -> bool:
    """
    Check whether anything exists at path.

    Dangling symlinks count as existing.
    """
    try:
        os.lstat(path)
    except FileNotFoundError:
        return False
    return True


def read_link_target(path: Path) -> str | None:
    """Read the literal (unresolved) target of a symlink, or None if path is missing."""
    try:
        return os.readlink(path)
    except FileNotFoundError:
        return None


def kind_of(path: Path) -> PathInfo:
    """
    Inspect the kind of node at path without following a final symlink.

    Args:
        path: Path to inspect.

    Returns:
        PathInfo with the kind, and the literal link text for symlinks.
    """
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return PathInfo(kind=PathKind.ABSENT)

    if stat.S_ISLNK(st.st_mode):
        return PathInfo(kind=PathKind.SYMLINK, link_target=read_link_target(path))
    if stat.S_ISDIR(st.st_mode):
        return PathInfo(kind=PathKind.DIRECTORY)
    return PathInfo(kind=PathKind.FILE)
