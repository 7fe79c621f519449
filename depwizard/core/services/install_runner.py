"""
Install runner — bulk install, then per-package post-install scripts.

Sequence:
  1. run the install command once for the whole set (spinner shown)
  2. for each resolved package, in order:
       a. run its post-install scripts one by one, stopping that
          package's remaining scripts on the first failure
       b. hand its setup notes to the reporter

A failed bulk install raises InstallError and nothing else runs.
A failed post-install script only affects its own package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from depwizard.adapters.base import Adapter, ExecutionContext
from depwizard.adapters.shell.command import ShellCommandAdapter
from depwizard.core.errors import InstallError, PostInstallError
from depwizard.core.models.action import Action, Receipt
from depwizard.core.models.package import ResolvedPackage
from depwizard.core.reporting import Reporter

logger = logging.getLogger(__name__)


@dataclass
class PackageScriptResult:
    """Outcome of one package's post-install phase."""

    package: str
    receipts: list[Receipt] = field(default_factory=list)
    error: PostInstallError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "package": self.package,
            "ok": self.ok,
            "scripts_run": [r.metadata.get("command", "") for r in self.receipts],
            "error": str(self.error) if self.error else None,
        }


@dataclass
class InstallReport:
    """Outcome of the whole install phase."""

    install_receipt: Receipt | None = None
    scripts: list[PackageScriptResult] = field(default_factory=list)

    @property
    def failed_packages(self) -> list[str]:
        return [s.package for s in self.scripts if not s.ok]

    def to_dict(self) -> dict:
        return {
            "installed": bool(self.install_receipt and self.install_receipt.ok),
            "duration_ms": self.install_receipt.duration_ms if self.install_receipt else 0,
            "post_install": [s.to_dict() for s in self.scripts],
        }


class InstallRunner:
    """Runs the install command and post-install scripts through an adapter."""

    def __init__(
        self,
        project_root: Path,
        *,
        adapter: Adapter | None = None,
        install_command: str = "npm install",
        stderr_fails: bool = False,
        reporter: Reporter | None = None,
    ):
        self.project_root = project_root
        self.adapter = adapter or ShellCommandAdapter()
        self.install_command = install_command
        self.stderr_fails = stderr_fails
        self.reporter = reporter or Reporter()
        self._seq = 0

    def _run(self, command: str, *, name: str, for_package: str | None = None) -> Receipt:
        self._seq += 1
        action = Action(
            id=f"{name}-{self._seq}",
            name=name,
            adapter=self.adapter.name,
            params={"command": command},
            for_package=for_package,
        )
        context = ExecutionContext(action=action, project_root=str(self.project_root))
        receipt = self.adapter.run(context)
        logger.debug("%s → %s (%sms)", command, receipt.status, receipt.duration_ms)
        return receipt

    def run_install(self) -> Receipt:
        """Run the bulk install command once.

        Raises:
            InstallError: the adapter cannot run commands here, or the
                command exited non-zero.
        """
        if not self.adapter.is_available():
            raise InstallError(self.install_command, f"{self.adapter.name} adapter is not available")

        self.reporter.install_started(self.install_command)
        with self.reporter.spinner("Installing packages..."):
            receipt = self._run(self.install_command, name="install")

        if receipt.failed:
            logger.error("Install failed: %s", receipt.error)
            raise InstallError(self.install_command, receipt.error or "unknown error")

        self.reporter.install_finished(receipt)
        return receipt

    def run_post_install(self, package: ResolvedPackage) -> PackageScriptResult:
        """Run one package's scripts in order; stop at the first failure."""
        result = PackageScriptResult(package=package.name)

        for script in package.post_install_scripts:
            self.reporter.script_started(package.name, script)
            with self.reporter.spinner("Running post-installation script..."):
                receipt = self._run(script, name="post-install", for_package=package.name)
            result.receipts.append(receipt)

            if receipt.failed:
                result.error = PostInstallError(package.name, script, receipt.error or "failed")
                break
            if receipt.stderr and self.stderr_fails:
                result.error = PostInstallError(package.name, script, receipt.stderr)
                break

            self.reporter.script_finished(package.name, receipt)

        if result.error:
            logger.warning("%s", result.error)
            self.reporter.script_failed(result.error)

        return result

    def install(self, packages: list[ResolvedPackage]) -> InstallReport:
        """Full install phase: bulk install, then scripts and notes per package.

        Raises:
            InstallError: the bulk install failed; no scripts were run.
        """
        report = InstallReport()
        report.install_receipt = self.run_install()

        for package in packages:
            if package.post_install_scripts:
                report.scripts.append(self.run_post_install(package))
            if package.additional_logs:
                self.reporter.notes(package.name, package.additional_logs)

        return report
