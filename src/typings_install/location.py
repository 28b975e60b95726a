"""Classify raw location strings and infer dependency names from them.

Pure string work: no network or filesystem access happens here.
"""

from __future__ import annotations

import re

from typings_install.models import DirectLocation, LocationReference, RegistryCoordinate

# Any ``<scheme>:`` prefix (file:, github:, bitbucket:, http:, git+ssh:, C:...).
_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*:", re.IGNORECASE)

_PATH_PREFIXES = (".", "/", "~", "\\")

_SEGMENT_SPLIT_RE = re.compile(r"[\\/]+")

_MANIFEST_FILES = frozenset({"typings.json", "package.json", "bower.json"})

# Checked in order, first match wins (".d.ts" must precede ".ts").
_STRIP_SUFFIXES = (".d.ts", ".ts", ".git", ".json")


def is_registry_path(raw: str) -> bool:
    """Return True when *raw* is a registry coordinate rather than a direct location."""
    if not raw:
        return False
    if raw.startswith(_PATH_PREFIXES):
        return False
    return _SCHEME_RE.match(raw) is None


def parse_registry_path(raw: str) -> RegistryCoordinate:
    """Split ``name[@version]`` into a coordinate.

    A leading ``@`` belongs to a scoped name, so the version separator is
    searched from the second character on. An empty suffix means "latest".
    """
    separator = raw.find("@", 1)
    if separator == -1:
        return RegistryCoordinate(name=raw)
    version = raw[separator + 1 :]
    return RegistryCoordinate(name=raw[:separator], version=version or None)


def classify(raw: str) -> LocationReference:
    """Classify a raw location. Total: anything unrecognized is a direct location."""
    if is_registry_path(raw):
        return parse_registry_path(raw)
    return DirectLocation(raw=raw)


def infer_dependency_name(location: str) -> str:
    """Suggest a dependency name for a direct location.

    Best effort only; the result is offered as a prompt default, never
    used without the user's confirmation.

    Examples:
        ``file:./typings/node.d.ts`` -> ``node``
        ``github:user/project#abc123`` -> ``project``
        ``https://example.com/lib/typings.json`` -> ``lib``
    """
    raw = _SCHEME_RE.sub("", location, count=1)
    raw = raw.split("#", 1)[0].split("?", 1)[0]

    segments = [s for s in _SEGMENT_SPLIT_RE.split(raw) if s and s not in {".", "..", "~"}]
    if not segments:
        return ""

    last = segments[-1]
    if last.lower() in _MANIFEST_FILES and len(segments) > 1:
        last = segments[-2]

    lowered = last.lower()
    for suffix in _STRIP_SUFFIXES:
        if lowered.endswith(suffix) and len(last) > len(suffix):
            return last[: -len(suffix)]
    return last
