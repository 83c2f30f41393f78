# AgentConfig Platform Detection Utilities
# Platform name and symlink capability probing

import os
import platform
import tempfile
from pathlib import Path

# Platform name mapping: system name -> agentconfig platform name
_PLATFORM_MAP: dict[str, str] = {
    "Darwin": "macos",
    "Linux": "linux",
    "Windows": "windows",
}


def get_current_platform() -> str:
    """
    Get the current platform identifier.

    Returns:
        Platform string: "macos", "linux", or "windows".
    """
    system = platform.system()
    return _PLATFORM_MAP.get(system, system.lower())


def can_create_symlinks() -> bool:
    """
    Check empirically whether symlinks can be created.

    Creates a scratch file in a temporary directory and tries to link to it.
    The scratch directory is always removed.

    Returns:
        True if the symlink was created.
    """
    with tempfile.TemporaryDirectory(prefix="agentconfig-") as tmpdir:
        source = Path(tmpdir) / "source"
        target = Path(tmpdir) / "target"
        source.write_text("test", encoding="utf-8")
        try:
            os.symlink(source, target)
        except (OSError, NotImplementedError):
            return False
        return True
