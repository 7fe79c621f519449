"""Interactive prompts for the add flow."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice

from depwizard.core.errors import PromptError
from depwizard.core.models.package import PackageDescriptor, type_label

logger = logging.getLogger(__name__)

# Failures raised by prompt_toolkit when there is no usable terminal,
# plus Ctrl-C / Ctrl-D.
_PROMPT_FAILURES = (KeyboardInterrupt, EOFError, OSError)


def confirm_message(descriptor: PackageDescriptor) -> str:
    return (
        f"Do you want to add {descriptor.name} as a "
        f"{type_label(descriptor.type)} dependency?"
    )


class InquirerSelector:
    """Checkbox + yes/no prompts backed by InquirerPy.

    With ``assume_yes`` the type confirmation is skipped and every
    declared type is kept.
    """

    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes

    def select_packages(self, catalog: Sequence[PackageDescriptor]) -> list[PackageDescriptor]:
        """Multi-select over the catalog; result keeps catalog order."""
        choices = [Choice(value=index, name=d.name) for index, d in enumerate(catalog)]
        try:
            picked = inquirer.checkbox(
                message="Select the packages you want to add:",
                choices=choices,
                instruction="(space to toggle, enter to confirm)",
                cycle=True,
            ).execute()
        except _PROMPT_FAILURES as e:
            raise PromptError(f"Package selection failed: {str(e) or type(e).__name__}") from e

        return [catalog[index] for index in sorted(picked or [])]

    def confirm_type(self, descriptor: PackageDescriptor) -> bool:
        """Ask whether to keep the declared type. Defaults to yes."""
        if self.assume_yes:
            return True
        try:
            answer = inquirer.confirm(
                message=confirm_message(descriptor),
                default=True,
            ).execute()
        except _PROMPT_FAILURES as e:
            raise PromptError(
                f"Confirmation for {descriptor.name} failed: {str(e) or type(e).__name__}"
            ) from e
        return bool(answer)


class StaticSelector:
    """Non-interactive selector for ``--package`` runs.

    Confirmation is delegated to ``confirm`` when given; otherwise every
    declared type is accepted.
    """

    def __init__(
        self,
        packages: Sequence[PackageDescriptor],
        confirm: Callable[[PackageDescriptor], bool] | None = None,
    ):
        self.packages = list(packages)
        self._confirm = confirm

    def select_packages(self, catalog: Sequence[PackageDescriptor]) -> list[PackageDescriptor]:
        wanted = set(self.packages)
        picked = [d for d in catalog if d in wanted]
        # Entries given that are not part of this catalog keep their given order.
        picked.extend(d for d in self.packages if d not in picked)
        logger.debug("Static selection: %s", [d.name for d in picked])
        return picked

    def confirm_type(self, descriptor: PackageDescriptor) -> bool:
        if self._confirm is None:
            return True
        return self._confirm(descriptor)
