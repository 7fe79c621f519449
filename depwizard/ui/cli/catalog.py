"""
CLI commands for browsing the catalog and querying the registry.
"""

from __future__ import annotations

import json
import sys

import click


@click.command("catalog")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def catalog_cmd(as_json: bool) -> None:
    """List the packages offered by 'depwizard add'."""
    from depwizard.core.data.catalog import CATALOG

    if as_json:
        click.echo(json.dumps([d.model_dump(mode="json") for d in CATALOG], indent=2))
        return

    click.secho(f"📚 Catalog ({len(CATALOG)} packages):", fg="cyan", bold=True)
    for d in CATALOG:
        extras = []
        if d.external_dependencies:
            extras.append("+ " + ", ".join(dep.name for dep in d.external_dependencies))
        if d.post_install_scripts:
            extras.append(f"{len(d.post_install_scripts)} script(s)")
        if d.additional_logs:
            extras.append(f"{len(d.additional_logs)} note(s)")
        suffix = f"  ({'; '.join(extras)})" if extras else ""
        click.echo(f"   {d.name:<28} {d.type:<5}{suffix}")
    click.echo()


@click.command()
@click.argument("name")
@click.pass_context
def latest(ctx: click.Context, name: str) -> None:
    """Print the latest published version of NAME."""
    from depwizard.core.config.loader import load_config
    from depwizard.core.errors import DepwizardError
    from depwizard.core.services.version_resolver import resolve_latest_version

    try:
        config = load_config(ctx.obj.get("config_path"))
        version = resolve_latest_version(
            name,
            registry_url=config.registry_url,
            timeout=config.registry_timeout,
        )
    except DepwizardError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(version)
