"""Tests for the typings registry client (registry/client.py, registry/sources.py)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from typings_install.errors import NotFoundError, RegistryError
from typings_install.registry.client import RegistryClient
from typings_install.registry.sources import VALID_SOURCES, display_name, to_candidate

_BASE_URL = "https://registry.test"

# ── Fixture data ──────────────────────────────────────────────────

SEARCH_RESPONSE = {
    "results": [
        {
            "name": "react",
            "source": "dt",
            "homepage": "http://facebook.github.io/react/",
            "description": None,
            "updated": "2016-03-17T05:58:18.000Z",
            "versions": 3,
        },
        {"name": "react", "source": "npm"},
    ],
}

VERSIONS_RESPONSE = {
    "name": "react",
    "versions": [
        {
            "version": "0.14.0",
            "location": "github:DefinitelyTyped/DefinitelyTyped/react/react.d.ts#abc",
            "compiler": "1.7",
            "date": "2016-03-17T05:58:18.000Z",
        },
        {"version": "0.13.3", "location": "github:DefinitelyTyped/react.d.ts#def"},
    ],
}


# ── Helpers ───────────────────────────────────────────────────────


def _make_client(base_url: str = _BASE_URL) -> RegistryClient:
    return RegistryClient(http=AsyncMock(spec=httpx.AsyncClient), base_url=base_url)


def _ok_response(data: dict) -> MagicMock:
    """Build a mock httpx.Response with 200 status and JSON data."""
    resp = MagicMock()
    resp.status_code = 200
    resp.raise_for_status = MagicMock()
    resp.json.return_value = data
    return resp


def _text_response(body: str) -> httpx.Response:
    """A real 200 response with a raw body, so decoding runs for real."""
    return httpx.Response(200, text=body, request=httpx.Request("GET", _BASE_URL))


def _status_response(status_code: int) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.raise_for_status.side_effect = httpx.HTTPStatusError(
        f"HTTP {status_code}",
        request=MagicMock(),
        response=resp,
    )
    return resp


# ═══════════════════════════════════════════════════════════════════
# search
# ═══════════════════════════════════════════════════════════════════


class TestRegistryClientSearch:
    async def test_parses_results_in_order(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_ok_response(SEARCH_RESPONSE))

        response = await client.search("react")

        assert [r.source for r in response.results] == ["dt", "npm"]
        assert [r.name for r in response.results] == ["react", "react"]

    async def test_query_params(self):
        client = _make_client(base_url=f"{_BASE_URL}/")
        client.http.get = AsyncMock(return_value=_ok_response({"results": []}))

        await client.search("react", ambient=True)

        url = client.http.get.call_args.args[0]
        params = client.http.get.call_args.kwargs["params"]
        assert url == f"{_BASE_URL}/search"
        assert params["name"] == "react"
        assert params["ambient"] == "true"
        assert set(params) == {"name", "ambient"}

    async def test_missing_results_is_empty(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_ok_response({}))

        response = await client.search("x")

        assert response.results == []

    async def test_non_json_body_is_registry_error(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_text_response("<html>captive portal</html>"))

        with pytest.raises(RegistryError, match="Invalid JSON"):
            await client.search("react")

    @pytest.mark.parametrize("body", ["null", "[]", '"react"'])
    async def test_non_object_body_is_registry_error(self, body):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_text_response(body))

        with pytest.raises(RegistryError, match="expected a JSON object"):
            await client.search("react")

    async def test_results_not_a_list_is_registry_error(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_ok_response({"results": "nope"}))

        with pytest.raises(RegistryError):
            await client.search("react")

    async def test_http_error_wrapped(self):
        client = _make_client()
        client.http.get = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(RegistryError, match="react"):
            await client.search("react")

    async def test_server_error_wrapped(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_status_response(500))

        with pytest.raises(RegistryError):
            await client.search("react")


# ═══════════════════════════════════════════════════════════════════
# get_versions
# ═══════════════════════════════════════════════════════════════════


class TestRegistryClientGetVersions:
    async def test_parses_versions_in_order(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_ok_response(VERSIONS_RESPONSE))

        project = await client.get_versions("dt", "react")

        assert project.name == "react"
        assert [v.version for v in project.versions] == ["0.14.0", "0.13.3"]
        assert project.versions[1].location == "github:DefinitelyTyped/react.d.ts#def"
        client.http.get.assert_awaited_once_with(f"{_BASE_URL}/entries/dt/react/versions")

    async def test_version_constraint_in_path(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_ok_response(VERSIONS_RESPONSE))

        await client.get_versions("npm", "@scope/pkg", "^1.0")

        url = client.http.get.call_args.args[0]
        assert url == f"{_BASE_URL}/entries/npm/%40scope%2Fpkg/versions/%5E1.0"

    async def test_404_is_not_found(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_status_response(404))

        with pytest.raises(NotFoundError, match="react"):
            await client.get_versions("dt", "react")

    async def test_non_json_body_is_registry_error(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_text_response("<html>Bad gateway</html>"))

        with pytest.raises(RegistryError, match="react"):
            await client.get_versions("dt", "react")

    async def test_non_object_body_is_registry_error(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_text_response("[1, 2]"))

        with pytest.raises(RegistryError, match="got list"):
            await client.get_versions("dt", "react")

    async def test_missing_name_falls_back_to_requested(self):
        client = _make_client()
        client.http.get = AsyncMock(return_value=_ok_response({"versions": []}))

        project = await client.get_versions("dt", "react")

        assert project.name == "react"
        assert project.versions == []

    async def test_timeout_wrapped(self):
        client = _make_client()
        client.http.get = AsyncMock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(RegistryError):
            await client.get_versions("dt", "react")


# ═══════════════════════════════════════════════════════════════════
# sources
# ═══════════════════════════════════════════════════════════════════


class TestSources:
    def test_known_source_display(self):
        assert display_name("dt") == "DefinitelyTyped"
        assert display_name("global") == "Global"

    def test_unknown_source_displays_itself(self):
        assert display_name("mystery") == "mystery"

    def test_candidate(self):
        candidate = to_candidate("env")
        assert candidate.source == "env"
        assert candidate.display_name == VALID_SOURCES["env"]
