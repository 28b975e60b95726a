"""HTTP client for the typings registry API.

Base URL defaults to https://api.typings.org (see ``Settings.registry_url``).

Endpoints:
    GET /search?name=&ambient=
    GET /entries/{source}/{name}/versions[/{version}]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote as urlquote

import httpx

from typings_install.errors import NotFoundError, RegistryError
from typings_install.models import ProjectVersions, SearchEntry, SearchResponse, VersionInfo

logger = logging.getLogger(__name__)


@dataclass
class RegistryClient:
    """Async client for the typings registry. Single attempt per call, no retries."""

    http: httpx.AsyncClient
    base_url: str

    async def search(self, name: str, *, ambient: bool = False) -> SearchResponse:
        """Search the registry.

        Args:
            name: Exact dependency name to look for.
            ambient: Include ambient (global) declarations.

        Returns:
            SearchResponse in the order the registry ranked it.
        """
        params = {"name": name, "ambient": "true" if ambient else "false"}

        logger.debug("Searching registry for %s (ambient=%s)", name, ambient)
        try:
            response = await self.http.get(f"{self._base()}/search", params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RegistryError(f"Failed to search the registry for '{name}': {exc}") from exc

        data = _json_object(response, f"search for '{name}'")
        results = [self._parse_search_entry(raw) for raw in _json_list(data, "results")]
        return SearchResponse(results=results)

    async def get_versions(
        self,
        source: str,
        name: str,
        version: str | None = None,
    ) -> ProjectVersions:
        """Fetch the versions of *name* in *source*.

        The ``/versions/{version}`` form asks the registry to filter by a
        semver range; the registry returns matches newest first.

        Raises:
            NotFoundError: The registry answered 404.
            RegistryError: Any other transport or HTTP failure, or a malformed body.
        """
        entry = f"{urlquote(source, safe='')}/{urlquote(name, safe='')}"
        url = f"{self._base()}/entries/{entry}/versions"
        if version:
            url = f"{url}/{urlquote(version, safe='')}"

        logger.debug("Fetching versions from %s", url)
        try:
            response = await self.http.get(url)
            if response.status_code == 404:
                raise NotFoundError(f'Unable to find "{name}" in the registry ({source}).')
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise RegistryError(
                f"Failed to fetch versions of '{name}' from {source}: {exc}"
            ) from exc

        data = _json_object(response, f"versions of '{name}' from {source}")
        return ProjectVersions(
            name=data.get("name") or name,
            versions=[self._parse_version(raw) for raw in _json_list(data, "versions")],
        )

    # ── Parsing helpers ──────────────────────────────────────────

    def _base(self) -> str:
        return self.base_url.rstrip("/")

    @staticmethod
    def _parse_search_entry(raw: dict) -> SearchEntry:
        """Tolerant of missing fields -- uses defaults rather than crashing."""
        return SearchEntry(name=raw.get("name", ""), source=raw.get("source", ""))

    @staticmethod
    def _parse_version(raw: dict) -> VersionInfo:
        return VersionInfo(version=raw.get("version", ""), location=raw.get("location", ""))


def _json_object(response: httpx.Response, what: str) -> dict:
    """Decode a response body that must be a JSON object."""
    try:
        data = response.json()
    except ValueError as exc:
        raise RegistryError(f"Invalid JSON in registry response to {what}: {exc}") from exc
    if not isinstance(data, dict):
        raise RegistryError(
            f"Unexpected registry response to {what}: expected a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


def _json_list(data: dict, key: str) -> list[dict]:
    """Entries under *key*; non-object items are dropped."""
    items = data.get(key) or []
    if not isinstance(items, list):
        raise RegistryError(f"Unexpected registry response: '{key}' is not a list")
    return [item for item in items if isinstance(item, dict)]
