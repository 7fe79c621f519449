"""Static data — the package catalog and baseline entries."""

from depwizard.core.data.catalog import (  # noqa: F401
    BASELINE_PACKAGES,
    CATALOG,
    get_descriptor,
)
