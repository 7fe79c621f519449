"""
Add-packages use case — the whole interactive flow as one pipeline.

    select → confirm type → resolve (+ external deps) → apply/persist
           → install → post-install scripts → notes

Each step finishes before the next starts. Lookup failures skip the
affected package; prompt and manifest failures propagate to the caller
before anything is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from depwizard.adapters.base import Adapter
from depwizard.core.config.loader import WizardConfig
from depwizard.core.data.catalog import BASELINE_PACKAGES, CATALOG
from depwizard.core.errors import InstallError, VersionLookupError
from depwizard.core.models.package import PackageDescriptor, ResolvedPackage
from depwizard.core.reporting import Reporter
from depwizard.core.services import manifest_ops
from depwizard.core.services.install_runner import InstallReport, InstallRunner
from depwizard.core.services.manifest_ops import ApplyReport
from depwizard.core.services.version_resolver import VersionResolver

logger = logging.getLogger(__name__)


class Selector(Protocol):
    """Source of the user's choices."""

    def select_packages(
        self, catalog: Sequence[PackageDescriptor]
    ) -> list[PackageDescriptor]: ...

    def confirm_type(self, descriptor: PackageDescriptor) -> bool: ...


@dataclass
class AddPackagesResult:
    """Result of an add run."""

    selected: list[str] = field(default_factory=list)
    resolved: list[ResolvedPackage] = field(default_factory=list)
    failed_lookups: dict[str, str] = field(default_factory=dict)
    used_baseline: bool = False
    manifest_path: Path | None = None
    manifest_created: bool = False
    changes: ApplyReport | None = None
    install: InstallReport | None = None
    install_error: str | None = None

    @property
    def manifest_written(self) -> bool:
        return self.manifest_path is not None

    def to_dict(self) -> dict:
        return {
            "selected": self.selected,
            "resolved": [p.to_dict() for p in self.resolved],
            "failed_lookups": self.failed_lookups,
            "used_baseline": self.used_baseline,
            "manifest": {
                "path": str(self.manifest_path) if self.manifest_path else None,
                "created": self.manifest_created,
                "changes": self.changes.to_dict() if self.changes else None,
            },
            "install": self.install.to_dict() if self.install else None,
            "install_error": self.install_error,
        }


def _resolve(
    name: str,
    resolve_version: Callable[[str], str],
    result: AddPackagesResult,
    reporter: Reporter,
) -> str | None:
    """Version for ``name``, or None after logging and recording the failure."""
    try:
        return resolve_version(name)
    except VersionLookupError as e:
        logger.warning("%s", e)
        result.failed_lookups[name] = str(e.cause)
        reporter.lookup_failed(name, e)
        return None


def resolve_selection(
    selector: Selector,
    selected: Sequence[PackageDescriptor],
    resolve_version: Callable[[str], str],
    result: AddPackagesResult,
    reporter: Reporter,
) -> list[ResolvedPackage]:
    """Confirm each selected entry, then resolve it and its external deps.

    Declining the confirmation flips the entry and all of its external
    dependencies to the opposite section. If the entry itself cannot be
    resolved, its external dependencies are skipped too.
    """
    resolved: list[ResolvedPackage] = []

    for descriptor in selected:
        confirmed = selector.confirm_type(descriptor)

        version = _resolve(descriptor.name, resolve_version, result, reporter)
        if version is None:
            continue

        package = ResolvedPackage.from_descriptor(descriptor, version, confirmed=confirmed)
        resolved.append(package)
        reporter.resolved(package)

        for dependency in descriptor.external_dependencies:
            dep_version = _resolve(dependency.name, resolve_version, result, reporter)
            if dep_version is None:
                continue
            dep = ResolvedPackage.from_external(
                dependency, dep_version, parent=descriptor.name, confirmed=confirmed,
            )
            resolved.append(dep)
            reporter.resolved(dep)

    return resolved


def resolve_baseline(
    resolve_version: Callable[[str], str],
    result: AddPackagesResult,
    reporter: Reporter,
) -> list[ResolvedPackage]:
    """Resolve the fallback entries used when nothing was selected."""
    resolved: list[ResolvedPackage] = []
    for descriptor in BASELINE_PACKAGES:
        version = _resolve(descriptor.name, resolve_version, result, reporter)
        if version is None:
            continue
        package = ResolvedPackage.from_descriptor(descriptor, version)
        resolved.append(package)
        reporter.resolved(package)
    return resolved


def write_manifest(
    project_root: Path,
    packages: list[ResolvedPackage],
    config: WizardConfig,
    result: AddPackagesResult,
    reporter: Reporter,
) -> None:
    """Load (or scaffold), apply and persist the manifest."""
    document, created = manifest_ops.load_or_create(project_root, config.manifest_file)
    if created:
        reporter.manifest_created(config.manifest_file)

    changes = manifest_ops.apply(document, packages)
    for name, version_range, section in changes.added:
        reporter.manifest_added(name, version_range, section)
    for name, section in changes.removed:
        reporter.manifest_removed(name, section)

    result.manifest_path = manifest_ops.persist(document, project_root, config.manifest_file)
    result.manifest_created = created
    result.changes = changes
    reporter.manifest_written(config.manifest_file)


def add_packages(
    project_root: Path,
    selector: Selector,
    *,
    config: WizardConfig | None = None,
    resolve_version: Callable[[str], str] | None = None,
    adapter: Adapter | None = None,
    reporter: Reporter | None = None,
    run_install: bool = True,
    catalog: Sequence[PackageDescriptor] = CATALOG,
) -> AddPackagesResult:
    """Run the add flow against ``project_root``.

    Args:
        project_root: Directory holding (or receiving) the manifest.
        selector: Where selections and type confirmations come from.
        config: Runtime settings (defaults when None).
        resolve_version: Version lookup; defaults to the registry client.
        adapter: Shell adapter for install/post-install commands.
        reporter: Progress hooks (silent when None).
        run_install: When False, stop after writing the manifest and
            only hand notes to the reporter.
        catalog: Entries offered to the selector.

    Returns:
        AddPackagesResult describing what happened.

    Raises:
        PromptError: selection or confirmation could not be obtained.
        ManifestParseError: the existing manifest is malformed.
    """
    config = config or WizardConfig()
    reporter = reporter or Reporter()
    if resolve_version is None:
        resolve_version = VersionResolver(config.registry_url, config.registry_timeout)

    result = AddPackagesResult()

    selected = selector.select_packages(catalog)
    result.selected = [d.name for d in selected]
    logger.info("Selected %d package(s)", len(selected))

    if not selected:
        reporter.no_selection()
        result.used_baseline = True
        result.resolved = resolve_baseline(resolve_version, result, reporter)
        if result.resolved:
            write_manifest(project_root, result.resolved, config, result, reporter)
        return result

    result.resolved = resolve_selection(selector, selected, resolve_version, result, reporter)
    if not result.resolved:
        logger.warning("No selected package could be resolved; manifest left unchanged")
        return result

    write_manifest(project_root, result.resolved, config, result, reporter)

    if not run_install:
        for package in result.resolved:
            if package.additional_logs:
                reporter.notes(package.name, package.additional_logs)
        return result

    runner = InstallRunner(
        project_root,
        adapter=adapter,
        install_command=config.install_command,
        stderr_fails=config.post_install_stderr_fails,
        reporter=reporter,
    )
    try:
        result.install = runner.install(result.resolved)
    except InstallError as e:
        result.install_error = str(e)
        reporter.install_failed(e)

    return result
