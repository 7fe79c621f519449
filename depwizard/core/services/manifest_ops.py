"""
Manifest operations — read-modify-write of package.json.

The manifest is handled as a plain dict so that every field the user
already has (scripts, engines, workspaces, …) survives untouched and
key order is preserved on write.

Invariant after ``apply``: a package name appears in at most one of
``dependencies`` / ``devDependencies``.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from depwizard.core.config.loader import DEFAULT_MANIFEST_FILE
from depwizard.core.errors import ManifestParseError
from depwizard.core.models.package import ResolvedPackage, invert_type, section_for

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 214

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\-~ ]")
_WHITESPACE_RUN = re.compile(r"\s+")
_EDGE_NON_ALNUM = re.compile(r"^[^a-z0-9]+|[^a-z0-9]+$")
_STARTS_ALNUM = re.compile(r"^[a-z0-9]")


def normalize_project_name(raw: str) -> str:
    """Turn a directory name into a valid npm package name.

    >>> normalize_project_name("My App!!")
    'my-app'
    >>> normalize_project_name("---")
    'a'
    """
    name = _DISALLOWED_CHARS.sub("", raw.lower())
    name = _WHITESPACE_RUN.sub("-", name)
    name = _EDGE_NON_ALNUM.sub("", name)
    if not _STARTS_ALNUM.match(name):
        name = f"a{name}"
    return name[:MAX_NAME_LENGTH]


def default_manifest(project_root: Path) -> dict:
    """Scaffold a package.json for a project that has none."""
    return {
        "name": normalize_project_name(project_root.resolve().name),
        "version": "1.0.0",
        "description": "",
        "main": "index.js",
        "scripts": {
            "dev": "nodemon index.js",
            "start": "node index.js",
            "test": 'echo "Error: no test specified" && exit 1',
        },
        "keywords": [],
        "author": "",
        "license": "ISC",
        "dependencies": {},
        "devDependencies": {},
    }


def manifest_path(project_root: Path, filename: str = DEFAULT_MANIFEST_FILE) -> Path:
    return project_root / filename


def load_or_create(project_root: Path, filename: str = DEFAULT_MANIFEST_FILE) -> tuple[dict, bool]:
    """Load the manifest, or scaffold one when the file does not exist.

    Returns:
        (document, created) — ``created`` is True for a scaffolded document.

    Raises:
        ManifestParseError: The file exists but is not a JSON object.
    """
    path = manifest_path(project_root, filename)
    if not path.exists():
        logger.info("%s not found, scaffolding a new one", path)
        return default_manifest(project_root), True

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestParseError(f"Cannot read {path}: {e}") from e

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(document, dict):
        raise ManifestParseError(
            f"Expected a JSON object in {path}, got {type(document).__name__}"
        )

    for section in ("dependencies", "devDependencies"):
        if section in document and not isinstance(document[section], dict):
            raise ManifestParseError(f"'{section}' in {path} is not an object")

    logger.debug("Loaded %s", path)
    return document, False


@dataclass
class ApplyReport:
    """What ``apply`` changed."""

    added: list[tuple[str, str, str]] = field(default_factory=list)    # (name, range, section)
    removed: list[tuple[str, str]] = field(default_factory=list)       # (name, section)

    def to_dict(self) -> dict:
        return {
            "added": [
                {"name": name, "range": rng, "section": section}
                for name, rng, section in self.added
            ],
            "removed": [{"name": name, "section": section} for name, section in self.removed],
        }


def apply(document: dict, packages: list[ResolvedPackage]) -> ApplyReport:
    """Merge resolved packages into the document in place.

    All additions happen first, then all removals from the opposite
    section, so a package moved dev → prod ends up only in
    ``dependencies`` regardless of prior state. Re-applying the same
    package is a no-op apart from refreshing its range.
    """
    report = ApplyReport()
    document.setdefault("dependencies", {})
    document.setdefault("devDependencies", {})

    for pkg in packages:
        section = section_for(pkg.type)
        document[section][pkg.name] = pkg.range
        report.added.append((pkg.name, pkg.range, section))
        logger.info("Added %s@%s to %s", pkg.name, pkg.version, section)

    for pkg in packages:
        opposite = section_for(invert_type(pkg.type))
        if pkg.name in document[opposite]:
            del document[opposite][pkg.name]
            report.removed.append((pkg.name, opposite))
            logger.info("Removed %s from %s", pkg.name, opposite)

    return report


def persist(document: dict, project_root: Path, filename: str = DEFAULT_MANIFEST_FILE) -> Path:
    """Overwrite the manifest with the full document (2-space indent)."""
    path = manifest_path(project_root, filename)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info("Wrote %s", path)
    return path
