"""Identification of the user and host a run executes as."""

from __future__ import annotations

import getpass
import os
import socket
from typing import Protocol

UNKNOWN = "unknown"


class EnvironmentInfo(Protocol):
    """Supplies the identifiers written to the run banner."""

    def user(self) -> str: ...

    def host(self) -> str: ...


class SystemEnvironment:
    """Reads identifiers from the running system."""

    def user(self) -> str:
        try:
            return getpass.getuser()
        except (ImportError, KeyError, OSError):
            # No login name (e.g. a service account without USERNAME set).
            return os.environ.get("USERNAME") or UNKNOWN

    def host(self) -> str:
        try:
            name = socket.gethostname()
        except OSError:
            name = ""
        return name or os.environ.get("COMPUTERNAME") or UNKNOWN


class StaticEnvironment:
    """Fixed identifiers, for tests and non-interactive callers."""

    def __init__(self, user: str, host: str) -> None:
        self._user = user
        self._host = host

    def user(self) -> str:
        return self._user

    def host(self) -> str:
        return self._host
