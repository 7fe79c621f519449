"""
Progress reporting hooks for the add flow.

Core services stay free of terminal concerns: they call these hooks and
the CLI supplies an implementation that styles the output. The base
class is silent, which is what tests and library callers get by
default.
"""

from __future__ import annotations

import contextlib
from collections.abc import Sequence
from typing import ContextManager

from depwizard.core.errors import DepwizardError
from depwizard.core.models.action import Receipt
from depwizard.core.models.package import ResolvedPackage, SetupNote


class Reporter:
    """No-op reporter. Subclass and override what you want to show."""

    def spinner(self, message: str) -> ContextManager:
        return contextlib.nullcontext()

    # ── Resolution ──

    def no_selection(self) -> None:
        pass

    def resolved(self, package: ResolvedPackage) -> None:
        pass

    def lookup_failed(self, name: str, error: DepwizardError) -> None:
        pass

    # ── Manifest ──

    def manifest_created(self, path_name: str) -> None:
        pass

    def manifest_added(self, name: str, version_range: str, section: str) -> None:
        pass

    def manifest_removed(self, name: str, section: str) -> None:
        pass

    def manifest_written(self, path_name: str) -> None:
        pass

    # ── Install ──

    def install_started(self, command: str) -> None:
        pass

    def install_finished(self, receipt: Receipt) -> None:
        pass

    def install_failed(self, error: DepwizardError) -> None:
        pass

    def script_started(self, package: str, command: str) -> None:
        pass

    def script_finished(self, package: str, receipt: Receipt) -> None:
        pass

    def script_failed(self, error: DepwizardError) -> None:
        pass

    def notes(self, package: str, notes: Sequence[SetupNote]) -> None:
        pass
