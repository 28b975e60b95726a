"""Pick the version to install for a registry coordinate."""

from __future__ import annotations

import logging

from typings_install.errors import NotFoundError
from typings_install.models import VersionInfo
from typings_install.registry.base import RegistryClientPort

logger = logging.getLogger(__name__)


async def negotiate_version(
    registry: RegistryClientPort,
    source: str,
    name: str,
    constraint: str | None = None,
) -> VersionInfo:
    """Return the first version the registry lists for (source, name, constraint).

    The registry owns ordering and range matching; nothing is re-sorted here.

    Raises:
        NotFoundError: No version matches.
        RegistryError: Propagated from the registry client.
    """
    project = await registry.get_versions(source, name, constraint)
    if not project.versions:
        wanted = f"{name}@{constraint}" if constraint else name
        raise NotFoundError(f'Unable to find a version of "{wanted}" in the registry ({source}).')

    selected = project.versions[0]
    logger.debug("Selected %s@%s from %s", name, selected.version, source)
    return selected
