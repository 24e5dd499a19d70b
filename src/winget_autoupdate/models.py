"""Data models for update runs and their audit trail."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_DATE_FORMAT = "%Y-%m-%d"


class ExitCode(IntEnum):
    """Process exit status reported to the scheduler."""

    SUCCESS = 0
    FAILURE = 1


class RunStatus(Enum):
    """How an update run ended."""

    SUCCEEDED = "succeeded"
    TOOL_MISSING = "tool_missing"
    INVOCATION_FAILED = "invocation_failed"

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.SUCCESS if self is RunStatus.SUCCEEDED else ExitCode.FAILURE


@dataclass(frozen=True)
class LogEntry:
    """One timestamped line of the audit log."""

    timestamp: datetime
    message: str

    def __post_init__(self) -> None:
        # Second precision; one entry is always exactly one line.
        object.__setattr__(self, "timestamp", self.timestamp.replace(microsecond=0))
        object.__setattr__(
            self, "message", " ".join(self.message.splitlines()) if self.message else ""
        )

    def format_line(self) -> str:
        return f"{self.timestamp.strftime(TIMESTAMP_FORMAT)} - {self.message}"

    @classmethod
    def parse_line(cls, line: str) -> LogEntry:
        """Parse a line written by :meth:`format_line`."""
        stamp, sep, message = line.rstrip("\r\n").partition(" - ")
        if not sep:
            raise ValueError(f"not an audit log line: {line!r}")
        return cls(timestamp=datetime.strptime(stamp, TIMESTAMP_FORMAT), message=message)


@dataclass(frozen=True)
class CommandResult:
    """Combined output and exit code of an external command."""

    output: str
    returncode: int

    def lines(self) -> list[str]:
        """Return output lines in order, skipping whitespace-only ones."""
        return [line.rstrip() for line in self.output.splitlines() if line.strip()]


@dataclass
class RunResult:
    """Outcome of a single update run."""

    status: RunStatus
    log_file: Path
    started_at: datetime
    completed_at: datetime | None = None
    upgrade_returncode: int | None = None
    output_lines: int = 0
    error: str | None = None

    @property
    def exit_code(self) -> ExitCode:
        return self.status.exit_code

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "exit_code": int(self.exit_code),
            "log_file": str(self.log_file),
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "upgrade_returncode": self.upgrade_returncode,
            "output_lines": self.output_lines,
            "error": self.error,
        }
