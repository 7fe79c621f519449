"""
Terminal reporter for the add flow — styled status lines and spinners.

Status goes to stdout with ``click.secho``; warnings and errors go to
stderr. Spinners are drawn by rich on stderr and vanish when the step
ends (rich stays silent when stderr is not a terminal).
"""

from __future__ import annotations

import contextlib
from collections.abc import Sequence
from typing import ContextManager

import click
from rich.console import Console

from depwizard.core.errors import DepwizardError
from depwizard.core.models.action import Receipt
from depwizard.core.models.package import ResolvedPackage, SetupNote, type_label
from depwizard.core.reporting import Reporter
from depwizard.ui.cli.notes import display_notes


class ClickReporter(Reporter):
    """Reporter that prints to the terminal.

    ``quiet`` drops progress lines but keeps warnings, errors and setup
    notes. ``json_mode`` also drops the notes and the no-selection
    warning, leaving stdout to the JSON summary (both are part of it).
    """

    def __init__(self, quiet: bool = False, spinners: bool = True, json_mode: bool = False):
        self.quiet = quiet or json_mode
        self.json_mode = json_mode
        self._console = Console(stderr=True) if spinners else None

    def _echo(self, message: str = "", **style) -> None:
        if not self.quiet:
            click.secho(message, **style)

    def spinner(self, message: str) -> ContextManager:
        if self._console is None or self.quiet:
            return contextlib.nullcontext()
        return self._console.status(f"[bold yellow]{message}[/bold yellow]", spinner="dots")

    # ── Resolution ──

    def no_selection(self) -> None:
        if not self.json_mode:
            click.secho(
                "⚠️  No packages were selected for installation.", fg="yellow", bold=True, err=True,
            )
        self._echo("Adding Node.js and Nodemon to package.json...", fg="cyan")

    def resolved(self, package: ResolvedPackage) -> None:
        if package.toggled and package.parent is None:
            self._echo(
                f"⟲ Toggled {package.name} to {type_label(package.type)} dependency",
                fg="yellow",
            )
        if package.parent:
            self._echo(f"➕ Added external dependency {package.name}: ", fg="blue", nl=False)
        else:
            self._echo(f"✔ Latest version of {package.name}: ", fg="green", nl=False)
        self._echo(package.version, fg="cyan", bold=True)

    def lookup_failed(self, name: str, error: DepwizardError) -> None:
        click.secho(f"❌ Error fetching version for {name}: {error}", fg="red", err=True)

    # ── Manifest ──

    def manifest_created(self, path_name: str) -> None:
        self._echo(f"{path_name} not found. Creating a new one...", fg="cyan")

    def manifest_added(self, name: str, version_range: str, section: str) -> None:
        self._echo(f"   + {name}@{version_range} → {section}")

    def manifest_removed(self, name: str, section: str) -> None:
        self._echo(f"   - {name} removed from {section}", fg="yellow")

    def manifest_written(self, path_name: str) -> None:
        self._echo(f"💾 {path_name} has been updated with selected packages.", fg="green")

    # ── Install ──

    def install_started(self, command: str) -> None:
        self._echo()
        self._echo(f"📦 Starting package installation ({command})...", fg="cyan")

    def install_finished(self, receipt: Receipt) -> None:
        if receipt.stderr:
            click.secho(f"⚠️  Installation stderr: {receipt.stderr}", fg="yellow", err=True)
        self._echo("✅ Installation completed successfully!", fg="green", bold=True)
        if receipt.output:
            self._echo("Installation details:", fg="cyan")
            self._echo(receipt.output)

    def install_failed(self, error: DepwizardError) -> None:
        click.secho(f"❌ Error during installation: {error}", fg="red", bold=True, err=True)

    def script_started(self, package: str, command: str) -> None:
        self._echo()
        self._echo("Running post-installation script: ", nl=False)
        self._echo(command, fg="green")

    def script_finished(self, package: str, receipt: Receipt) -> None:
        if receipt.stderr:
            click.secho(f"⚠️  Script stderr: {receipt.stderr}", fg="yellow", err=True)
        if receipt.output:
            self._echo("Script output: ", fg="green", nl=False)
            self._echo(receipt.output)

    def script_failed(self, error: DepwizardError) -> None:
        click.secho(f"❌ {error}", fg="red", err=True)

    def notes(self, package: str, notes: Sequence[SetupNote]) -> None:
        if self.json_mode:
            return
        display_notes(notes, package)
