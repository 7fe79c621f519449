"""
CLI command for the interactive add flow.

Thin wrapper over ``depwizard.core.use_cases.add_packages``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


def _build_selector(package_names: tuple[str, ...], assume_yes: bool):
    from depwizard.core.data.catalog import get_descriptor
    from depwizard.ui.cli.prompts import InquirerSelector, StaticSelector

    interactive = InquirerSelector(assume_yes=assume_yes)
    if not package_names:
        return interactive

    descriptors = []
    for name in package_names:
        descriptor = get_descriptor(name)
        if descriptor is None:
            raise click.BadParameter(
                f"'{name}' is not in the catalog (see 'depwizard catalog').",
                param_hint="--package",
            )
        descriptors.append(descriptor)

    return StaticSelector(descriptors, confirm=interactive.confirm_type)


@click.command()
@click.option(
    "--package", "-p", "package_names", multiple=True,
    help="Select a catalog package without the checkbox prompt (repeatable).",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Accept every declared dependency type.")
@click.option("--no-install", is_flag=True, help="Only update package.json; skip install and scripts.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output a JSON summary.")
@click.pass_context
def add(
    ctx: click.Context,
    package_names: tuple[str, ...],
    assume_yes: bool,
    no_install: bool,
    as_json: bool,
) -> None:
    """Pick packages, add them to package.json, install and set them up.

    Examples:

        depwizard add

        depwizard add -p axios -p zustand --yes

        depwizard add -p tailwindcss --no-install
    """
    from depwizard.core.config.loader import load_config
    from depwizard.core.errors import DepwizardError
    from depwizard.core.use_cases.add_packages import add_packages
    from depwizard.ui.cli.output import ClickReporter

    project_root = Path.cwd()
    selector = _build_selector(package_names, assume_yes)
    reporter = ClickReporter(quiet=ctx.obj.get("quiet", False), json_mode=as_json)

    try:
        config = load_config(ctx.obj.get("config_path"), start_dir=project_root)
        result = add_packages(
            project_root,
            selector,
            config=config,
            reporter=reporter,
            run_install=not no_install,
        )
    except DepwizardError as e:
        click.secho(f"❌ {e}", fg="red", bold=True, err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))

    if result.install_error:
        sys.exit(1)
