"""Tests for location classification and name inference (location.py)."""

from __future__ import annotations

import pytest

from typings_install.location import (
    classify,
    infer_dependency_name,
    is_registry_path,
    parse_registry_path,
)
from typings_install.models import DirectLocation, RegistryCoordinate

# ═══════════════════════════════════════════════════════════════════
# classify
# ═══════════════════════════════════════════════════════════════════


class TestClassify:
    @pytest.mark.parametrize(
        "raw",
        [
            "file:./local.d.ts",
            "file:typings/node.d.ts",
            "github:user/project",
            "github:user/project/typings.json#abc123",
            "bitbucket:user/project#v1",
            "https://example.com/foo.d.ts",
            "http://example.com/foo.d.ts",
            "git+ssh://git@github.com/user/project.git",
            "./local.d.ts",
            "../shared/typings.json",
            "/abs/path/foo.d.ts",
            "~/typings/foo.d.ts",
            "C:\\typings\\foo.d.ts",
        ],
    )
    def test_direct_locations(self, raw: str):
        assert classify(raw) == DirectLocation(raw=raw)

    def test_name_with_version(self):
        assert classify("foo@1.2.3") == RegistryCoordinate(name="foo", version="1.2.3")

    def test_bare_name_has_no_constraint(self):
        assert classify("foo") == RegistryCoordinate(name="foo", version=None)

    def test_range_constraint_kept_verbatim(self):
        assert classify("node@~4.0") == RegistryCoordinate(name="node", version="~4.0")

    def test_empty_string_is_direct(self):
        assert classify("") == DirectLocation(raw="")


class TestParseRegistryPath:
    def test_trailing_at_means_latest(self):
        assert parse_registry_path("foo@") == RegistryCoordinate(name="foo")

    def test_scoped_name_without_version(self):
        assert parse_registry_path("@scope/pkg") == RegistryCoordinate(name="@scope/pkg")

    def test_scoped_name_with_version(self):
        coordinate = parse_registry_path("@scope/pkg@2")
        assert coordinate.name == "@scope/pkg"
        assert coordinate.version == "2"

    def test_is_registry_path(self):
        assert is_registry_path("react") is True
        assert is_registry_path("npm:react") is False


# ═══════════════════════════════════════════════════════════════════
# infer_dependency_name
# ═══════════════════════════════════════════════════════════════════


class TestInferDependencyName:
    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("file:./local.d.ts", "local"),
            ("file:typings/node.ts", "node"),
            ("github:user/project", "project"),
            ("github:user/project#abc123", "project"),
            ("github:user/project/typings.json", "project"),
            ("bitbucket:user/repo/sub/bower.json#v1", "sub"),
            ("https://example.com/lib/foo.d.ts?raw=1", "foo"),
            ("git+https://github.com/user/thing.git", "thing"),
            ("C:\\typings\\bar.d.ts", "bar"),
        ],
    )
    def test_inference(self, location: str, expected: str):
        assert infer_dependency_name(location) == expected

    def test_nothing_to_infer(self):
        assert infer_dependency_name("file:./") == ""
