# AgentConfig Errors
# Error kinds raised by the sync engine, each carrying a process exit code

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes for the command line."""

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2
    VALIDATION = 3
    CONFLICT = 4
    FILESYSTEM = 5


class AgentConfigError(Exception):
    """Base error carrying the exit code the CLI should terminate with."""

    code: ExitCode = ExitCode.FAILURE

    def __init__(self, message: str, code: ExitCode | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(AgentConfigError):
    """Malformed config or state, missing required source, missing project root."""

    code = ExitCode.VALIDATION


class ConflictError(AgentConfigError):
    """Run cancelled at a conflict, or an existing file blocks the operation."""

    code = ExitCode.CONFLICT


class FilesystemError(AgentConfigError):
    """Refused destructive replacement or I/O failure while applying a mapping."""

    code = ExitCode.FILESYSTEM
