"""Failure taxonomy for an update run.

Only orchestration-level problems are exceptions. Errors the package
manager prints about individual packages are logged as ordinary output
and never raised.
"""

from __future__ import annotations

from pathlib import Path


class UpdaterError(Exception):
    """Base class for all update run failures."""


class PreconditionFailure(UpdaterError):
    """A required external tool is not available."""


class PackageManagerNotFound(PreconditionFailure):
    """The package manager executable could not be resolved on PATH."""

    def __init__(self, executable: str) -> None:
        self.executable = executable
        super().__init__(f"{executable} not found on PATH")


class EnvironmentFailure(UpdaterError):
    """The host environment cannot support a run."""


class LogDirectoryError(EnvironmentFailure):
    """The audit log directory could not be created."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot create log directory {path}: {reason}")


class LogFileError(EnvironmentFailure):
    """The day's audit log file could not be appended to."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot write log file {path}: {reason}")


class InvocationFault(UpdaterError):
    """Launching or communicating with an external process failed.

    Distinct from the process exiting non-zero, which is a normal result.
    """

    def __init__(self, executable: str, detail: str) -> None:
        self.executable = executable
        self.detail = detail
        super().__init__(f"{executable}: {detail}")
