"""agentconfig - one source of truth for AI coding agent configurations.

Keeps agent configuration files (Claude, Codex, Cursor, OpenCode, ...) in a
single source root and syncs them to each agent's location as symlinks or
copies, with conflict handling, backups and drift detection.
"""

__version__ = "1.0.0"
__author__ = "Equitania Software GmbH"
__email__ = "info@equitania.de"

__all__ = [
    "__version__",
    "AgentConfigFile",
    "load_config",
    "init_config",
    "SyncOptions",
    "SyncResult",
    "sync_configs",
    "StatusEntry",
    "DriftStatus",
    "get_status",
    "AgentConfigError",
    "ValidationError",
    "ConflictError",
    "FilesystemError",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("AgentConfigFile", "load_config", "init_config"):
        from agentconfig import config

        return getattr(config, name)
    if name in ("SyncOptions", "SyncResult", "sync_configs"):
        from agentconfig.sync import engine

        return getattr(engine, name)
    if name in ("StatusEntry", "DriftStatus", "get_status"):
        from agentconfig.sync import status

        return getattr(status, name)
    if name in ("AgentConfigError", "ValidationError", "ConflictError", "FilesystemError"):
        from agentconfig import errors

        return getattr(errors, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
