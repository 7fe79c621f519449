"""
depwizard — CLI entrypoint.

Usage:
    depwizard --help
    depwizard add
    depwizard add -p axios -p zustand --yes
    depwizard catalog
    depwizard latest react
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from depwizard import __version__
from depwizard.core.observability.logging_config import resolve_level, setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="depwizard")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to depwizard.yml (default: ./depwizard.yml if present).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """depwizard — add curated npm packages to your project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))


# ── Register commands from depwizard/ui/cli/ ──────────────────────

from depwizard.ui.cli.add import add  # noqa: E402
from depwizard.ui.cli.catalog import catalog_cmd, latest  # noqa: E402

cli.add_command(add)
cli.add_command(catalog_cmd)
cli.add_command(latest)


def main() -> None:
    """Console-script entry: last-resort handler for unexpected failures."""
    try:
        cli(obj={})
    except Exception as e:
        logger.exception("Unhandled error")
        click.secho(f"❌ Unexpected error: {e}", fg="red", bold=True, err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
