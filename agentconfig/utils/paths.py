# AgentConfig Path Utilities
# Placeholder expansion, root-relative resolution and safe file operations

import os
import re
import shutil
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z0-9_]+)(:-([^}]*))?\}")


@dataclass(frozen=True)
class PathContext:
    """
    Explicit environment for path resolution.

    Carries the environment map, working directory and home directory so
    that resolution never reads process state on its own.
    """

    env: Mapping[str, str] = field(default_factory=dict)
    cwd: Path = field(default_factory=lambda: Path("/"))
    home: Path = field(default_factory=lambda: Path("/"))

    @classmethod
    def from_environment(cls) -> "PathContext":
        """Snapshot the current process environment."""
        return cls(env=dict(os.environ), cwd=Path.cwd(), home=Path.home())


def expand_placeholders(path: str | Path, context: PathContext) -> str:
    """
    Expand ${NAME} / ${NAME:-fallback} tokens and a leading ~.

    An unset or empty variable takes its fallback, or the empty string when
    no fallback is given. Home expansion runs after variable expansion so a
    fallback such as ``~/.agentconfig`` is expanded too.

    Args:
        path: Path possibly containing placeholders.
        context: Environment and home directory to expand from.

    Returns:
        Expanded path string. Paths without tokens are returned unchanged.
    """

    def _replace(match: re.Match) -> str:
        value = context.env.get(match.group(1))
        if value:
            return value
        if match.group(2) is not None:
            return match.group(3)
        return ""

    expanded = _PLACEHOLDER_RE.sub(_replace, str(path))

    if expanded == "~":
        return str(context.home)
    if expanded.startswith("~/") or expanded.startswith("~" + os.sep):
        return os.path.join(str(context.home), expanded[2:])
    return expanded


def resolve_absolute(path: str | Path, context: PathContext) -> Path:
    """
    Expand placeholders and make the path absolute.

    Relative paths resolve against ``context.cwd``. Normalization is purely
    lexical: symlinks are not resolved.

    Args:
        path: Path string, possibly templated.
        context: Path resolution context.

    Returns:
        Absolute, normalized Path.
    """
    expanded = expand_placeholders(path, context)
    if os.path.isabs(expanded):
        return Path(os.path.normpath(expanded))
    return Path(os.path.normpath(os.path.join(str(context.cwd), expanded)))


def resolve_from_root(root: str | Path, relative: str | Path) -> Path:
    """
    Resolve a mapping entry against its root.

    Absolute entries are returned as-is (normalized), which lets a mapping
    point outside its nominal root.

    Args:
        root: Absolute root directory.
        relative: Relative path or absolute override.

    Returns:
        Absolute, normalized Path.
    """
    if os.path.isabs(relative):
        return Path(os.path.normpath(relative))
    return Path(os.path.normpath(os.path.join(str(root), str(relative))))


def is_directory_mapping(source: str) -> bool:
    """Check whether a mapping source marks a whole directory (trailing separator)."""
    return source.endswith("/") or source.endswith(os.sep)


def strip_anchor(path: Path) -> Path:
    """Return an absolute path relative to its anchor (drive and root)."""
    if path.anchor:
        return path.relative_to(path.anchor)
    return path


def backup_timestamp(now: datetime | None = None) -> str:
    """
    Build a filesystem-safe backup directory name.

    ISO-8601 UTC with millisecond precision and a ``Z`` suffix, with ``:``
    and ``.`` replaced by ``-`` (e.g. ``2026-10-17T09-30-00-123Z``).
    """
    if now is None:
        now = datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return stamp.replace(":", "-").replace(".", "-")


def backup_destination(source_root: Path, timestamp: str, relative: Path) -> Path:
    """Location of a backup: ``<source_root>/backup/<timestamp>/<relative>``."""
    return source_root / "backup" / timestamp / relative


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def copy_file_or_dir(source: Path, target: Path) -> None:
    """
    Copy a file or directory tree to target.

    Directories are copied entry by entry into the (possibly existing)
    target directory. Symlinks inside the tree are recreated as symlinks and
    never followed.

    Args:
        source: Source file or directory.
        target: Destination path.

    Raises:
        FileNotFoundError: If source doesn't exist.
    """
    if not source.exists():
        raise FileNotFoundError(f"Source does not exist: {source}")

    if source.is_dir():
        ensure_dir(target.parent)
        shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
        return

    ensure_dir(target.parent)
    shutil.copy2(source, target)


def remove_directory(path: Path, allow_non_empty: bool) -> bool:
    """
    Remove a directory, recursing only when permitted.

    Args:
        path: Directory to remove.
        allow_non_empty: Whether a non-empty directory may be deleted recursively.

    Returns:
        True if the directory was removed, False if it was non-empty and
        recursive deletion was not permitted.
    """
    if not allow_non_empty:
        if any(path.iterdir()):
            return False
        path.rmdir()
        return True

    shutil.rmtree(path)
    return True


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    ensure_dir(path.parent)

    # Temp file in the same directory so the rename stays on one filesystem
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
