"""Format installer output: unresolved references, ambient hints, and the tree."""

from __future__ import annotations

import click

from typings_install.models import InstallOutput, ReferenceMap, ReferenceSource
from typings_install.output.tree import archify_tree

_REFERENCES_HEADING = "References"
_MISSING_HEADING = "Possible ambient modules"


def _distinct_names(sources: list[ReferenceSource]) -> list[str]:
    seen: dict[str, None] = {}
    for source in sources:
        seen.setdefault(source.name, None)
    return list(seen)


def _format_reference_map(heading: str, references: ReferenceMap) -> list[str]:
    if not references:
        return []

    lines = [f"{heading} {click.style('(not installed)', bold=True)}:"]
    for identifier, sources in references.items():
        names = ", ".join(_distinct_names(sources))
        annotation = click.style(f"(from {names})", fg="bright_black")
        lines.append(f"  {identifier} {annotation}")
    lines.append("")
    return lines


def render_result(output: InstallOutput, name: str | None = None) -> str:
    """Render *output* deterministically; empty sections are left out entirely."""
    lines = _format_reference_map(_REFERENCES_HEADING, output.references)
    lines += _format_reference_map(_MISSING_HEADING, output.missing)
    lines.append(archify_tree(output.tree, name))
    return "\n".join(lines)
