"""Reduce a registry search to the one source the user wants."""

from __future__ import annotations

import logging

from typings_install.console.base import ConsolePort
from typings_install.errors import NotFoundError
from typings_install.models import Choice, Question, QuestionKind
from typings_install.registry.base import RegistryClientPort
from typings_install.registry.sources import to_candidate

logger = logging.getLogger(__name__)

REGISTRY_CONTRIBUTE_URL = "https://github.com/typings/registry"


def _not_found_message(name: str, ambient: bool) -> str:
    hint = ""
    if not ambient:
        hint = 'Did you want to install an ambient typing? Try using "--ambient". '
    return (
        f'Unable to find "{name}" in the registry. {hint}'
        f"If you can contribute this type definition, please help us: {REGISTRY_CONTRIBUTE_URL}"
    )


async def choose_source(
    registry: RegistryClientPort,
    console: ConsolePort,
    name: str,
    *,
    ambient: bool = False,
) -> str | None:
    """Search all sources for *name* and settle on one.

    - no results: raise NotFoundError with a remediation hint
    - one result: ask for confirmation; ``None`` when declined
    - several results: ask the user to pick one (no default)
    """
    response = await registry.search(name, ambient=ambient)
    candidates = [to_candidate(entry.source) for entry in response.results]
    logger.debug("Search for %s returned %d source(s)", name, len(candidates))

    if not candidates:
        raise NotFoundError(_not_found_message(name, ambient))

    if len(candidates) == 1:
        candidate = candidates[0]
        answer = await console.ask(
            Question(
                kind=QuestionKind.CONFIRM,
                name="ok",
                message=f"Found {name} typings for {candidate.display_name}. Continue?",
            )
        )
        if not answer:
            logger.info("Installation of %s declined by user", name)
            return None
        return candidate.source

    answer = await console.ask(
        Question(
            kind=QuestionKind.LIST,
            name="source",
            message=f"Found {name} typings for multiple registries",
            choices=[Choice(name=c.display_name, value=c.source) for c in candidates],
        )
    )
    return str(answer)
