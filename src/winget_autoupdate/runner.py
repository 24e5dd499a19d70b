"""External command execution.

All subprocess calls are confined to this module.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol

from winget_autoupdate.exceptions import InvocationFault
from winget_autoupdate.logging import get_logger
from winget_autoupdate.models import CommandResult

log = get_logger("winget_autoupdate.runner")


# ---------------------------------------------------------------------------
# Runner protocol (for dependency injection in tests)
# ---------------------------------------------------------------------------


class CommandRunner(Protocol):
    """Resolves and runs external executables."""

    def which(self, executable: str) -> str | None:
        """Return the resolved path of *executable*, or None if absent."""
        ...

    def run(
        self, executable: str, args: Sequence[str], *, timeout: float | None = None
    ) -> CommandResult:
        """Run *executable* with *args* and return its combined output.

        A non-zero exit code is part of the result. Failure to launch or
        talk to the process raises :class:`InvocationFault`.
        """
        ...


# ---------------------------------------------------------------------------
# subprocess implementation
# ---------------------------------------------------------------------------


class SubprocessRunner:
    """Runs commands with :mod:`subprocess`, stderr merged into stdout."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def which(self, executable: str) -> str | None:
        return shutil.which(executable)

    def run(
        self, executable: str, args: Sequence[str], *, timeout: float | None = None
    ) -> CommandResult:
        cmd = [executable, *args]
        log.debug("cmd_started", cmd=cmd, timeout=timeout)
        try:
            proc = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding=self._encoding,
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            log.warning("cmd_timeout", cmd=cmd, timeout=timeout)
            raise InvocationFault(executable, f"timed out after {exc.timeout}s") from exc
        except (OSError, ValueError, subprocess.SubprocessError) as exc:
            log.warning("cmd_error", cmd=cmd, error=str(exc))
            raise InvocationFault(executable, str(exc)) from exc

        log.debug("cmd_finished", cmd=cmd, returncode=proc.returncode)
        return CommandResult(output=proc.stdout or "", returncode=proc.returncode)
