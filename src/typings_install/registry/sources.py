"""Known registry sources and their display names."""

from __future__ import annotations

from typings_install.models import SourceCandidate

VALID_SOURCES: dict[str, str] = {
    "dt": "DefinitelyTyped",
    "npm": "NPM",
    "github": "GitHub",
    "bower": "Bower",
    "common": "Common",
    "shared": "Shared",
    "lib": "Library",
    "env": "Environment",
    "global": "Global",
}


def display_name(source: str) -> str:
    """Human-readable label for *source*. Unknown sources display as themselves."""
    return VALID_SOURCES.get(source, source)


def to_candidate(source: str) -> SourceCandidate:
    return SourceCandidate(source=source, display_name=display_name(source))
