"""Dated, append-only audit log.

Each calendar day gets its own ``<YYYY-MM-DD>.log`` file under the log
root. Files are only ever appended to; retention is left to whoever
manages the directory.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import TextIO

from winget_autoupdate.exceptions import LogDirectoryError, LogFileError
from winget_autoupdate.logging import get_logger
from winget_autoupdate.models import LOG_FILE_DATE_FORMAT, LogEntry

log = get_logger("winget_autoupdate.audit")

Clock = Callable[[], datetime]


def log_file_for(log_root: Path, day: date) -> Path:
    """Return the audit log path for *day*."""
    return log_root / f"{day.strftime(LOG_FILE_DATE_FORMAT)}.log"


def ensure_log_root(log_root: Path) -> None:
    """Create *log_root* and any missing parents."""
    try:
        log_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise LogDirectoryError(log_root, str(exc)) from exc


class DailyLog:
    """Writes audit entries for one run to that run's day file.

    The file is fixed when the log is opened, so a run that crosses
    midnight keeps writing to the file of the day it started.
    """

    def __init__(self, path: Path, *, clock: Clock = datetime.now, stream: TextIO | None = None):
        self.path = path
        self._clock = clock
        self._stream = stream
        self._entries: list[LogEntry] = []

    @classmethod
    def open(
        cls, log_root: Path, *, clock: Clock = datetime.now, stream: TextIO | None = None
    ) -> DailyLog:
        """Resolve today's file under *log_root*, creating the directory."""
        ensure_log_root(log_root)
        return cls(log_file_for(log_root, clock().date()), clock=clock, stream=stream)

    @property
    def entries(self) -> list[LogEntry]:
        """Entries written through this instance, in order."""
        return list(self._entries)

    def write(self, message: str) -> LogEntry:
        """Append one entry to the file and echo it to stdout."""
        now = self._clock()
        if self._entries and now < self._entries[-1].timestamp:
            # Wall clock stepped back (DST, time sync); keep entries ordered.
            now = self._entries[-1].timestamp
        entry = LogEntry(timestamp=now, message=message)
        line = entry.format_line()
        try:
            with self.path.open("a", encoding="utf-8", newline="\n") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            raise LogFileError(self.path, str(exc)) from exc
        self._echo(line)
        self._entries.append(entry)
        return entry

    def read(self) -> list[LogEntry]:
        """Parse every entry currently in the file."""
        if not self.path.exists():
            return []
        with self.path.open(encoding="utf-8") as fh:
            return [LogEntry.parse_line(line) for line in fh if line.strip()]

    def _echo(self, line: str) -> None:
        # Best effort; the file is the record.
        stream = self._stream if self._stream is not None else sys.stdout
        if stream is None:
            return
        try:
            try:
                stream.write(line + "\n")
            except UnicodeEncodeError:
                encoding = getattr(stream, "encoding", None) or "utf-8"
                stream.write(line.encode(encoding, "replace").decode(encoding) + "\n")
            stream.flush()
        except (OSError, ValueError, LookupError) as exc:
            log.warning("audit_echo_failed", path=str(self.path), error=str(exc))
