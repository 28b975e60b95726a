"""Installer that records dependencies in the project's typings.json.

Fetching and compiling declaration files happens elsewhere; this adapter
owns the manifest side of an install and reports the resulting tree.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from typings_install.errors import InstallError
from typings_install.manifest.reader import MANIFEST_NAME, read_manifest
from typings_install.manifest.writer import add_dependency
from typings_install.models import DependencyTree, InstallOptions, InstallOutput, Manifest

logger = logging.getLogger(__name__)


def _nodes(section: dict[str, str], *, ambient: bool = False) -> dict[str, DependencyTree]:
    return {
        name: DependencyTree(name=name, src=location, ambient=ambient)
        for name, location in section.items()
    }


def manifest_tree(manifest: Manifest, src: str, *, production: bool = False) -> DependencyTree:
    """Build the dependency tree declared by *manifest*. Dev sections are dropped in production."""
    return DependencyTree(
        name=manifest.name,
        src=src,
        dependencies=_nodes(manifest.dependencies),
        dev_dependencies={} if production else _nodes(manifest.dev_dependencies),
        ambient_dependencies=_nodes(manifest.ambient_dependencies, ambient=True),
        ambient_dev_dependencies=(
            {} if production else _nodes(manifest.ambient_dev_dependencies, ambient=True)
        ),
    )


@dataclass(frozen=True, slots=True)
class ManifestInstaller:
    """Persists installs to ``<cwd>/typings.json`` according to the save flags."""

    async def install_dependency(self, location: str, options: InstallOptions) -> InstallOutput:
        if not options.name:
            raise InstallError(f"A dependency name is required to install {location}")

        # save and save_dev are independent; both flags write both sections.
        if options.save:
            await asyncio.to_thread(
                add_dependency, options.cwd, options.name, location, ambient=options.ambient
            )
        if options.save_dev:
            await asyncio.to_thread(
                add_dependency,
                options.cwd,
                options.name,
                location,
                dev=True,
                ambient=options.ambient,
            )
        if not (options.save or options.save_dev):
            logger.debug("Neither --save nor --save-dev given; %s not recorded", options.name)

        return InstallOutput(
            tree=DependencyTree(name=options.name, src=location, ambient=options.ambient)
        )

    async def install(self, options: InstallOptions) -> InstallOutput:
        manifest = await asyncio.to_thread(read_manifest, options.cwd)
        path = Path(options.cwd) / MANIFEST_NAME
        if manifest is None:
            raise InstallError(f"Unable to find {MANIFEST_NAME} in {options.cwd}")

        logger.info("Installing dependencies from %s", path)
        return InstallOutput(tree=manifest_tree(manifest, str(path), production=options.production))
