"""Port: typings registry API client."""

from __future__ import annotations

from typing import Protocol

from typings_install.models import ProjectVersions, SearchResponse


class RegistryClientPort(Protocol):
    """Port for querying the typings registry."""

    async def search(
        self,
        name: str,
        *,
        ambient: bool = False,
    ) -> SearchResponse:
        """Search every registry source for entries called *name*."""
        ...

    async def get_versions(
        self,
        source: str,
        name: str,
        version: str | None = None,
    ) -> ProjectVersions:
        """List versions of *name* in *source* matching *version*, best first."""
        ...
