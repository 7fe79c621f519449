"""Setup notes printer."""

from __future__ import annotations

from collections.abc import Iterable

import click

from depwizard.core.models.package import SetupNote


def display_notes(notes: Iterable[SetupNote], package_name: str) -> None:
    """Print a header for the package, then each note as "N. title" + content.

    Content is echoed verbatim; code samples keep their indentation.
    """
    click.echo()
    click.secho(f"📝 Additional steps for {package_name}:", fg="cyan", bold=True, underline=True)
    for index, note in enumerate(notes, start=1):
        click.echo()
        click.secho(f"{index}. {note.title}", fg="yellow", underline=True)
        click.echo(note.content)
