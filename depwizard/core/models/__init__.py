"""
Domain models — Pydantic types for depwizard.

All models are re-exported here for convenient access:

    from depwizard.core.models import PackageDescriptor, ResolvedPackage, Action, Receipt
"""

from depwizard.core.models.action import Action, Receipt
from depwizard.core.models.package import (
    DependencyType,
    ExternalDependency,
    PackageDescriptor,
    ResolvedPackage,
    SetupNote,
    invert_type,
    section_for,
    type_label,
)

__all__ = [
    # action.py
    "Action",
    # package.py
    "DependencyType",
    "ExternalDependency",
    "PackageDescriptor",
    "Receipt",
    "ResolvedPackage",
    "SetupNote",
    "invert_type",
    "section_for",
    "type_label",
]
