"""
Error taxonomy for depwizard.

Services raise these; the CLI layer catches them and turns them into
styled terminal output plus an exit code. Adapters never raise — they
return failed Receipts, which services convert into these errors.
"""

from __future__ import annotations


class DepwizardError(Exception):
    """Base class for every error this tool reports to the user."""


class ConfigError(DepwizardError):
    """Raised when depwizard.yml is invalid or unreadable."""


class PromptError(DepwizardError):
    """Interactive input is unavailable or was cancelled."""


class VersionLookupError(DepwizardError):
    """The registry could not provide a latest version for a package."""

    def __init__(self, package: str, cause: object) -> None:
        self.package = package
        self.cause = cause
        super().__init__(f"Failed to fetch version for {package}: {cause}")


class ManifestParseError(DepwizardError):
    """The existing manifest is not a valid JSON object."""


class InstallError(DepwizardError):
    """The bulk install command exited non-zero."""

    def __init__(self, command: str, detail: str) -> None:
        self.command = command
        self.detail = detail
        super().__init__(f"'{command}' failed: {detail}")


class PostInstallError(DepwizardError):
    """A package's post-install command failed."""

    def __init__(self, package: str, command: str, detail: str) -> None:
        self.package = package
        self.command = command
        self.detail = detail
        super().__init__(f"Post-install script for {package} failed ({command}): {detail}")
