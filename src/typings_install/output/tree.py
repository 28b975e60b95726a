"""Box-drawing rendering of dependency trees."""

from __future__ import annotations

from dataclasses import dataclass, field

import click

from typings_install.models import DependencyTree


@dataclass(frozen=True, slots=True)
class ArchyNode:
    label: str
    nodes: list[ArchyNode] = field(default_factory=list)


def archy(node: ArchyNode, prefix: str = "") -> str:
    """Render *node* and its descendants::

        root
        ├─┬ a
        │ └── b
        └── c
    """
    splitter = "\n" + prefix + ("│" if node.nodes else " ") + " "
    out = prefix + splitter.join(node.label.split("\n")) + "\n"

    for index, child in enumerate(node.nodes):
        last = index == len(node.nodes) - 1
        branch = ("└" if last else "├") + "─" + ("┬" if child.nodes else "─") + " "
        child_prefix = prefix + (" " if last else "│") + " "
        out += prefix + branch + archy(child, child_prefix)[len(prefix) + 2 :]

    return out


def _label(tree: DependencyTree, name: str | None = None, suffix: str = "") -> str:
    text = name or tree.name
    if tree.version:
        text = f"{text}@{tree.version}"
    if tree.ambient and not suffix:
        suffix = " (ambient)"
    if tree.missing:
        suffix = f"{suffix} (missing)"
    return text + (click.style(suffix, fg="bright_black") if suffix else "")


def _children(tree: DependencyTree) -> list[ArchyNode]:
    sections = (
        (tree.dependencies, ""),
        (tree.dev_dependencies, " (dev)"),
        (tree.ambient_dependencies, " (ambient)"),
        (tree.ambient_dev_dependencies, " (ambient dev)"),
    )
    nodes = []
    for deps, suffix in sections:
        for key in sorted(deps):
            child = deps[key]
            nodes.append(ArchyNode(label=_label(child, key, suffix), nodes=_children(child)))
    return nodes


def archify_tree(tree: DependencyTree, name: str | None = None) -> str:
    """Render a dependency tree. *name* replaces the installer-assigned root label."""
    root_label = _label(tree, name)
    if name:
        root_label = click.style(root_label, bold=True)
    return archy(ArchyNode(label=root_label, nodes=_children(tree))).rstrip("\n")
