"""Unattended package upgrades for Windows hosts.

Runs the package manager's upgrade-all command on a schedule, keeps a
dated append-only audit log of everything it printed, and reports the
outcome through the process exit status.
"""

__version__ = "0.1.0"
