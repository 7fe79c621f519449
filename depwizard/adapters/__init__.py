"""Adapters — bindings for external processes.

Public re-exports for convenient access.
"""

from depwizard.adapters.base import Adapter, ExecutionContext
from depwizard.adapters.mock import MockAdapter

__all__ = [
    "Adapter",
    "ExecutionContext",
    "MockAdapter",
]
