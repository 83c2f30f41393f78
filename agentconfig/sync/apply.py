# AgentConfig Apply Engine
# Filesystem mutation for a single mapping: symlink or copy

import errno
import os
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from agentconfig.config.schema import SyncMode
from agentconfig.errors import FilesystemError
from agentconfig.sync.mapping import ResolvedMapping
from agentconfig.utils.filesystem import exists, kind_of
from agentconfig.utils.paths import copy_file_or_dir, ensure_dir, remove_directory
from agentconfig.utils.platform import can_create_symlinks


def resolve_sync_mode(mode: SyncMode, can_symlink: Callable[[], bool] = can_create_symlinks) -> SyncMode:
    """
    Turn ``auto`` into a concrete mode for the whole run.

    Args:
        mode: Requested mode.
        can_symlink: Symlink capability check, called only for ``auto``.

    Returns:
        LINK or COPY.
    """
    if mode != SyncMode.AUTO:
        return mode
    return SyncMode.LINK if can_symlink() else SyncMode.COPY


def _format_error(error: OSError) -> str:
    if error.errno is not None:
        code = errno.errorcode.get(error.errno, str(error.errno))
        return f"{code}: {error.strerror}"
    return str(error)


def _ensure_target_parent(target: Path, warnings: Optional[list[str]] = None) -> None:
    parent = target.parent
    if not exists(parent):
        ensure_dir(parent)
        if warnings is not None:
            warnings.append(f"Created target parent directory: {parent} (for {target})")
        return
    ensure_dir(parent)


def _remove_existing(target: Path, allow_non_empty_dir: bool) -> None:
    """Remove whatever is at target, refusing to delete a non-empty directory unless allowed."""
    existing = kind_of(target)
    if existing.is_directory:
        if not remove_directory(target, allow_non_empty_dir):
            raise FilesystemError(f"Refusing to replace non-empty directory: {target}")
    elif existing.exists:
        target.unlink()


def apply_copy_mapping(mapping: ResolvedMapping, *, allow_non_empty_dir: bool = False) -> None:
    """
    Replace the target with a copy of the source.

    Raises:
        FilesystemError: If the target is a non-empty directory and replacing
            it is not permitted.
    """
    _remove_existing(mapping.target, allow_non_empty_dir)
    _ensure_target_parent(mapping.target)
    copy_file_or_dir(mapping.source, mapping.target)


def apply_link_mapping(
    mapping: ResolvedMapping,
    warnings: list[str],
    *,
    allow_non_empty_dir: bool = False,
) -> bool:
    """
    Point the target at the source with a symlink.

    An existing symlink that already points at the source is left alone.
    If the symlink can't be created, a warning is recorded and the mapping
    is copied instead.

    Returns:
        False if the target already linked to the source, True otherwise.

    Raises:
        FilesystemError: If the target is a non-empty directory and replacing
            it is not permitted.
    """
    _ensure_target_parent(mapping.target, warnings)
    try:
        existing = kind_of(mapping.target)
        if existing.is_symlink:
            if existing.link_target == str(mapping.source):
                return False
            mapping.target.unlink()
        else:
            _remove_existing(mapping.target, allow_non_empty_dir)
        os.symlink(mapping.source, mapping.target, target_is_directory=mapping.source.is_dir())
    except OSError as e:
        warnings.append(f"Symlink failed for {mapping.target} ({_format_error(e)}); falling back to copy")
        apply_copy_mapping(mapping, allow_non_empty_dir=allow_non_empty_dir)
    return True


def apply_mapping(
    mapping: ResolvedMapping,
    warnings: list[str],
    *,
    allow_non_empty_dir: bool = False,
) -> bool:
    """
    Apply one mapping in its mode.

    Args:
        mapping: Mapping with a concrete mode.
        warnings: Run warnings; non-fatal problems are appended here.
        allow_non_empty_dir: Whether an existing non-empty directory may be
            deleted (managed target, force, or overwrite/backup decision).

    Returns:
        True if the filesystem changed, False if the target was already in place.
    """
    if mapping.mode == SyncMode.COPY:
        apply_copy_mapping(mapping, allow_non_empty_dir=allow_non_empty_dir)
        return True
    return apply_link_mapping(mapping, warnings, allow_non_empty_dir=allow_non_empty_dir)
