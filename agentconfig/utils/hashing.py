# AgentConfig Hashing Utilities
# Content hashing for drift detection

import hashlib
import os
from pathlib import Path


def content_hash(content: str | bytes, *, algorithm: str = "sha256") -> str:
    """
    Calculate hash of content.

    Args:
        content: String or bytes content.
        algorithm: Hash algorithm (default sha256).

    Returns:
        Hex digest of hash.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")

    hasher = hashlib.new(algorithm)
    hasher.update(content)
    return hasher.hexdigest()


def file_hash(path: Path, *, algorithm: str = "sha256", chunk_size: int = 8192) -> str | None:
    """
    Calculate hash of file content.

    Args:
        path: Path to file.
        algorithm: Hash algorithm (default sha256).
        chunk_size: Chunk size for reading large files.

    Returns:
        Hex digest of hash, or None if file doesn't exist.
    """
    if not path.exists() or not path.is_file():
        return None

    hasher = hashlib.new(algorithm)

    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)

    return hasher.hexdigest()


def directory_hash(path: Path, *, algorithm: str = "sha256") -> str | None:
    """
    Calculate a structural hash of directory contents.

    Entries are visited in sorted name order. Each contributes a
    ``<kind>:<name>:`` tag followed by its own digest: the recursive hash for
    subdirectories, the content hash for files, and the hash of the link
    text for symlinks. Symlinks are never followed, so link cycles cannot recurse.

    Args:
        path: Path to directory.
        algorithm: Hash algorithm (default sha256).

    Returns:
        Hex digest of hash, or None if directory doesn't exist.
    """
    if not path.exists() or not path.is_dir():
        return None

    hasher = hashlib.new(algorithm)

    for name in sorted(os.listdir(path)):
        entry = path / name
        if entry.is_symlink():
            hasher.update(f"link:{name}:".encode("utf-8"))
            hasher.update(content_hash(os.readlink(entry), algorithm=algorithm).encode("ascii"))
        elif entry.is_dir():
            hasher.update(f"dir:{name}:".encode("utf-8"))
            hasher.update((directory_hash(entry, algorithm=algorithm) or "").encode("ascii"))
        else:
            hasher.update(f"file:{name}:".encode("utf-8"))
            hasher.update((file_hash(entry, algorithm=algorithm) or "").encode("ascii"))

    return hasher.hexdigest()


def hash_path(path: Path, *, algorithm: str = "sha256") -> str | None:
    """
    Hash a file or directory.

    Args:
        path: File or directory to hash.
        algorithm: Hash algorithm (default sha256).

    Returns:
        Hex digest, or None if the path doesn't exist.
    """
    if path.is_dir():
        return directory_hash(path, algorithm=algorithm)
    return file_hash(path, algorithm=algorithm)
