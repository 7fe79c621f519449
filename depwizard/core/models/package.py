"""
Package models — catalog descriptors and per-run resolved entries.

A PackageDescriptor is immutable catalog data. A ResolvedPackage is
created once per run after the user has confirmed (or flipped) the
dependency type and the registry has returned a version.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

DependencyType = Literal["prod", "dev"]

_SECTIONS: dict[str, str] = {
    "prod": "dependencies",
    "dev": "devDependencies",
}

_LABELS: dict[str, str] = {
    "prod": "production",
    "dev": "development",
}


def invert_type(dep_type: DependencyType) -> DependencyType:
    """prod ↔ dev."""
    return "prod" if dep_type == "dev" else "dev"


def section_for(dep_type: DependencyType) -> str:
    """Manifest section name for a dependency type."""
    return _SECTIONS[dep_type]


def type_label(dep_type: DependencyType) -> str:
    """Human label ("production" / "development")."""
    return _LABELS[dep_type]


def _require_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("package name must not be empty")
    return value


class ExternalDependency(BaseModel):
    """A package pulled in alongside a catalog entry (e.g. a peer library)."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: DependencyType

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        return _require_name(value)


class SetupNote(BaseModel):
    """A titled block of follow-up instructions, printed verbatim."""

    model_config = ConfigDict(frozen=True)

    title: str
    content: str


class PackageDescriptor(BaseModel):
    """One catalog entry. Identity = name."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: DependencyType
    external_dependencies: tuple[ExternalDependency, ...] = ()
    post_install_scripts: tuple[str, ...] = ()
    additional_logs: tuple[SetupNote, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        return _require_name(value)

    @field_validator("post_install_scripts")
    @classmethod
    def _scripts_not_blank(cls, scripts: tuple[str, ...]) -> tuple[str, ...]:
        for script in scripts:
            if not script.strip():
                raise ValueError("post-install scripts must not be blank")
        return scripts


class ResolvedPackage(BaseModel):
    """A descriptor (or external dependency) with its resolved version.

    ``type`` is the effective type after user confirmation;
    ``declared_type`` is what the catalog said.
    """

    name: str
    type: DependencyType
    declared_type: DependencyType
    version: str
    post_install_scripts: tuple[str, ...] = ()
    additional_logs: tuple[SetupNote, ...] = ()
    parent: str | None = None       # catalog entry that pulled this in

    @property
    def toggled(self) -> bool:
        """Whether the user flipped the declared type."""
        return self.type != self.declared_type

    @property
    def section(self) -> str:
        return section_for(self.type)

    @property
    def range(self) -> str:
        """Version range written to the manifest."""
        return f"^{self.version}"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "declared_type": self.declared_type,
            "version": self.version,
            "range": self.range,
            "parent": self.parent,
            "notes": [note.model_dump() for note in self.additional_logs],
        }

    @classmethod
    def from_descriptor(
        cls,
        descriptor: PackageDescriptor,
        version: str,
        *,
        confirmed: bool = True,
    ) -> ResolvedPackage:
        """Build the resolved entry for a catalog descriptor."""
        return cls(
            name=descriptor.name,
            type=descriptor.type if confirmed else invert_type(descriptor.type),
            declared_type=descriptor.type,
            version=version,
            post_install_scripts=descriptor.post_install_scripts,
            additional_logs=descriptor.additional_logs,
        )

    @classmethod
    def from_external(
        cls,
        dependency: ExternalDependency,
        version: str,
        *,
        parent: str,
        confirmed: bool = True,
    ) -> ResolvedPackage:
        """Build the resolved entry for a nested external dependency.

        A declined confirmation on the parent inverts the external
        dependency's type as well.
        """
        return cls(
            name=dependency.name,
            type=dependency.type if confirmed else invert_type(dependency.type),
            declared_type=dependency.type,
            version=version,
            parent=parent,
        )
