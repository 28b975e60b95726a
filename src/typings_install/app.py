"""Composition root: build the adapters one CLI run needs."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from typings_install.console.base import ConsolePort
from typings_install.console.terminal import ClickConsole
from typings_install.installer.base import InstallerPort
from typings_install.installer.manifest import ManifestInstaller
from typings_install.registry.base import RegistryClientPort
from typings_install.registry.client import RegistryClient
from typings_install.settings import Settings


@dataclass(frozen=True, slots=True)
class AppContext:
    """Adapters shared by every location in a run."""

    http_client: httpx.AsyncClient
    registry: RegistryClientPort
    installer: InstallerPort
    console: ConsolePort


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """HTTP client for registry calls. No transport retries: every call is one attempt."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout, connect=min(settings.timeout, 10.0)),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
        proxy=settings.proxy,
        verify=settings.reject_unauthorized,
    )


@asynccontextmanager
async def app_lifespan(
    settings: Settings,
    *,
    console: ConsolePort | None = None,
    installer: InstallerPort | None = None,
) -> AsyncIterator[AppContext]:
    """Open the shared HTTP client and wire adapters around it."""
    async with build_http_client(settings) as http_client:
        yield AppContext(
            http_client=http_client,
            registry=RegistryClient(http_client, base_url=settings.registry_url),
            installer=installer or ManifestInstaller(),
            console=console or ClickConsole(),
        )
