"""Command-line entry point, meant to be launched by a task scheduler."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from winget_autoupdate import __version__
from winget_autoupdate.config import get_settings
from winget_autoupdate.exceptions import EnvironmentFailure
from winget_autoupdate.logging import get_logger, setup_logging
from winget_autoupdate.models import ExitCode
from winget_autoupdate.orchestrator import UpdateOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="winget-autoupdate",
        description="Upgrade all installed packages and append the output to a dated log.",
    )
    parser.add_argument("--log-root", type=Path, help="Directory for the dated audit logs.")
    parser.add_argument("--package-manager", help="Package manager executable to run.")
    parser.add_argument("--log-level", help="Diagnostic log level (stderr).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one update pass and return the exit code."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    log = get_logger("winget_autoupdate.cli")

    config = get_settings().to_orchestrator_config()
    if args.log_root is not None:
        config = replace(config, log_root=args.log_root)
    if args.package_manager:
        config = replace(config, package_manager=args.package_manager)

    try:
        return UpdateOrchestrator(config).run()
    except EnvironmentFailure as exc:
        log.error("audit_log_unavailable", error=str(exc))
        return int(ExitCode.FAILURE)


def run() -> None:
    """Run the application."""
    sys.exit(main())


if __name__ == "__main__":
    run()
