"""Port: dependency installer."""

from __future__ import annotations

from typing import Protocol

from typings_install.models import InstallOptions, InstallOutput


class InstallerPort(Protocol):
    """Port for materializing dependencies and reporting what was installed."""

    async def install_dependency(self, location: str, options: InstallOptions) -> InstallOutput:
        """Install one dependency from a concrete location under ``options.name``."""
        ...

    async def install(self, options: InstallOptions) -> InstallOutput:
        """Install everything declared in the manifest under ``options.cwd``."""
        ...
