"""Decide which resolved modules to install, and install them."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, Sequence, Union

from .models import InstallDecision
from .naming import package_name_from_specifier

logger = logging.getLogger(__name__)

InstallerSink = Callable[[Sequence[str]], Union[None, Awaitable[None]]]


class InstallDecisionMaker:
    """Filters out already-present modules and batches the rest into one install.

    Asking the user is left to the caller; ``install`` only acts on an
    explicit ``True`` confirmation.
    """

    def __init__(self, install_packages: InstallerSink):
        self._install_packages = install_packages

    @staticmethod
    def decide(module_list: Sequence[str], installed_status: Optional[Mapping[str, bool]]) -> InstallDecision:
        """Keep the specifiers whose package is not reported as present.

        Args:
            module_list: "name@constraint" specifiers from the resolver.
            installed_status: package name -> present locally.
        """
        installed_status = installed_status or {}
        to_install = [
            spec for spec in module_list
            if not installed_status.get(package_name_from_specifier(spec), False)
        ]
        return InstallDecision(to_install=to_install)

    async def install(self, decision: InstallDecision, confirmed: Any) -> bool:
        """Install the decided modules in a single installer call.

        Returns:
            bool: True when the installer ran, False when there was nothing
            to install or the user declined.

        Raises:
            InstallError: Propagated from the installer sink.
        """
        if not decision.to_install:
            return False
        if confirmed is not True:
            logger.debug("Installation declined; skipping %s", ", ".join(decision.to_install))
            return False

        logger.info("Installing %s", ", ".join(decision.to_install))
        result: Any = self._install_packages(list(decision.to_install))
        if inspect.isawaitable(result):
            await result
        return True
