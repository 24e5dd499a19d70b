"""Update orchestrator: runs the package manager's upgrade-all command.

Lifecycle:
1. Open today's audit log under the configured log root
2. Record who started the run and where
3. Check the package manager is on PATH
4. Record the package manager version (best effort)
5. Run the upgrade and record every line it printed
6. Report the outcome as a process exit code

Per-package failures reported by the tool are logged and otherwise
ignored. Only a missing executable, an unusable log directory or a
failure to run the command at all make the run fail.
"""

from __future__ import annotations

from datetime import datetime
from typing import TextIO

from winget_autoupdate.audit import Clock, DailyLog
from winget_autoupdate.config import OrchestratorConfig
from winget_autoupdate.environment import EnvironmentInfo, SystemEnvironment
from winget_autoupdate.exceptions import InvocationFault, PackageManagerNotFound
from winget_autoupdate.logging import get_logger
from winget_autoupdate.models import CommandResult, RunResult, RunStatus
from winget_autoupdate.runner import CommandRunner, SubprocessRunner

log = get_logger("winget_autoupdate.orchestrator")


class UpdateOrchestrator:
    """Coordinates one unattended upgrade run and its audit trail."""

    def __init__(
        self,
        config: OrchestratorConfig,
        runner: CommandRunner | None = None,
        environment: EnvironmentInfo | None = None,
        clock: Clock | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._config = config
        self._runner: CommandRunner = runner or SubprocessRunner()
        self._environment: EnvironmentInfo = environment or SystemEnvironment()
        self._clock: Clock = clock or datetime.now
        self._stream = stream

    @property
    def config(self) -> OrchestratorConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def run(self) -> int:
        """Run once and return the process exit code.

        Raises:
            LogDirectoryError: the log root could not be created. Nothing
                is written to the audit log in that case.
            LogFileError: the day file could not be appended to.
        """
        return int(self.execute().exit_code)

    def execute(self) -> RunResult:
        """Run once and return a structured result."""
        audit = DailyLog.open(self._config.log_root, clock=self._clock, stream=self._stream)
        result = RunResult(
            status=RunStatus.SUCCEEDED,
            log_file=audit.path,
            started_at=self._clock(),
        )
        pm = self._config.package_manager
        log.info("update_run_started", log_file=str(audit.path), package_manager=pm)

        audit.write(
            f"Update run started by {self._environment.user()} on {self._environment.host()}"
        )

        try:
            self._require_package_manager()
        except PackageManagerNotFound as exc:
            audit.write(f"ERROR: {exc}; no upgrade attempted")
            log.error("package_manager_missing", package_manager=pm)
            return self._finish(result, RunStatus.TOOL_MISSING, error=str(exc))

        self._log_version(audit)

        try:
            returncode, line_count = self._upgrade(audit)
        except InvocationFault as exc:
            audit.write(f"ERROR: upgrade invocation failed: {exc.detail}")
            log.error("upgrade_invocation_failed", package_manager=pm, error=exc.detail)
            return self._finish(result, RunStatus.INVOCATION_FAILED, error=exc.detail)

        result.upgrade_returncode = returncode
        result.output_lines = line_count
        audit.write("Update run finished")
        return self._finish(result, RunStatus.SUCCEEDED)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _require_package_manager(self) -> str:
        resolved = self._runner.which(self._config.package_manager)
        if not resolved:
            raise PackageManagerNotFound(self._config.package_manager)
        log.debug("package_manager_resolved", path=resolved)
        return resolved

    def _log_version(self, audit: DailyLog) -> None:
        pm = self._config.package_manager
        try:
            result = self._invoke(self._config.version_args, self._config.version_timeout)
        except InvocationFault as exc:
            audit.write(f"WARNING: could not query {pm} version: {exc.detail}")
            log.warning("version_query_failed", package_manager=pm, error=exc.detail)
            return

        version = " ".join(result.lines()) or "(no output)"
        audit.write(f"{pm} version: {version}")

    def _upgrade(self, audit: DailyLog) -> tuple[int, int]:
        pm = self._config.package_manager
        args = self._config.upgrade_args
        audit.write(f"Running: {' '.join([pm, *args])}")

        result = self._invoke(args, self._config.command_timeout)

        lines = result.lines()
        for line in lines:
            audit.write(line)
        audit.write(f"Upgrade command completed (exit code {result.returncode})")

        if result.returncode != 0:
            # Usually one package failed; the rest may have upgraded fine.
            log.warning("upgrade_nonzero_exit", package_manager=pm, returncode=result.returncode)
        return result.returncode, len(lines)

    def _invoke(self, args: tuple[str, ...], timeout: float | None) -> CommandResult:
        """Run the package manager; any failure to do so is an InvocationFault."""
        pm = self._config.package_manager
        try:
            return self._runner.run(pm, args, timeout=timeout)
        except InvocationFault:
            raise
        except Exception as exc:
            raise InvocationFault(pm, str(exc) or type(exc).__name__) from exc

    def _finish(
        self, result: RunResult, status: RunStatus, error: str | None = None
    ) -> RunResult:
        result.status = status
        result.error = error
        result.completed_at = self._clock()
        log.info("update_run_finished", **result.to_dict())
        return result
