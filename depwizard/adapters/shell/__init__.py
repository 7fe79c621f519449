"""Shell adapters."""

from depwizard.adapters.shell.command import ShellCommandAdapter

__all__ = ["ShellCommandAdapter"]
