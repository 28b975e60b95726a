"""Turn raw location arguments into install requests and run them.

Each location is an independent unit of work, processed strictly in the
order given. Registry lookups and user prompts happen before anything is
handed to the installer, so a declined or failed lookup leaves no trace.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Sequence
from dataclasses import dataclass, replace

import click

from typings_install.console.base import ConsolePort
from typings_install.errors import NotFoundError, RegistryError
from typings_install.installer.base import InstallerPort
from typings_install.location import classify, infer_dependency_name
from typings_install.models import (
    DirectLocation,
    InstallOptions,
    LocationResult,
    Outcome,
    Question,
    QuestionKind,
    RegistryCoordinate,
)
from typings_install.output.report import render_result
from typings_install.registry.base import RegistryClientPort
from typings_install.registry.sources import display_name
from typings_install.resolution.search import choose_source
from typings_install.resolution.versions import negotiate_version

logger = logging.getLogger(__name__)


def format_error(exc: BaseException, *, verbose: bool = False) -> str:
    """User-facing error text, with the stack trace appended when *verbose*."""
    message = click.style(str(exc) or type(exc).__name__, fg="red")
    if verbose:
        stack = "".join(traceback.format_exception(exc)).rstrip()
        message = f"{message}\n\n{stack}"
    return message


@dataclass
class InstallationProtocol:
    """Resolve locations to concrete install requests.

    Args:
        registry: Registry adapter used for search and version lookup.
        installer: Installer adapter that materializes dependencies.
        console: Prompts and progress output.
        verbose: Include stack traces in reported failures.
    """

    registry: RegistryClientPort
    installer: InstallerPort
    console: ConsolePort
    verbose: bool = False

    async def run(self, locations: Sequence[str], options: InstallOptions) -> list[LocationResult]:
        """Install every location in order, or the whole manifest when none are given."""
        if not locations:
            return [await self.install_all(options)]

        results: list[LocationResult] = []
        for location in locations:
            results.append(await self.resolve_location(location, options))
        return results

    async def install_all(self, options: InstallOptions) -> LocationResult:
        """Install everything declared in the local manifest."""
        output = await self.installer.install(options)
        self.console.echo(render_result(output))
        return LocationResult(
            location="",
            outcome=Outcome.INSTALLED,
            name=output.tree.name or None,
            output=output,
        )

    async def resolve_location(self, location: str, options: InstallOptions) -> LocationResult:
        """Resolve and install a single location.

        Registry lookups that fail with NotFoundError or RegistryError are
        reported and turned into a FAILED result. Installer errors propagate.
        """
        reference = classify(location)

        if isinstance(reference, DirectLocation):
            return await self._install_direct(location, options)

        try:
            return await self._install_from_registry(location, reference, options)
        except (NotFoundError, RegistryError) as exc:
            logger.debug("Resolution of %s failed", location, exc_info=True)
            self.console.error(format_error(exc, verbose=self.verbose))
            return LocationResult(location=location, outcome=Outcome.FAILED, error=str(exc))

    # ── Steps ────────────────────────────────────────────────────

    async def _install_direct(self, location: str, options: InstallOptions) -> LocationResult:
        if options.name is None:
            answer = await self.console.ask(
                Question(
                    kind=QuestionKind.INPUT,
                    name="name",
                    message="What is the dependency name?",
                    default=infer_dependency_name(location),
                )
            )
            options = replace(options, name=str(answer).strip())

        return await self._install(location, location, options)

    async def _install_from_registry(
        self,
        location: str,
        coordinate: RegistryCoordinate,
        options: InstallOptions,
    ) -> LocationResult:
        source = options.source
        if source is None:
            source = await choose_source(
                self.registry, self.console, coordinate.name, ambient=options.ambient
            )
            if source is None:
                return LocationResult(
                    location=location, outcome=Outcome.SKIPPED, name=coordinate.name
                )

        version = await negotiate_version(
            self.registry, source, coordinate.name, coordinate.version
        )
        save_name = options.name or coordinate.name

        self.console.echo(
            f"Installing {coordinate.name}@~{version.version} ({display_name(source)})..."
        )
        if save_name != coordinate.name:
            self.console.echo(f'Writing dependency as "{save_name}"...')
        self.console.echo()

        return await self._install(location, version.location, replace(options, name=save_name))

    async def _install(
        self,
        location: str,
        target: str,
        options: InstallOptions,
    ) -> LocationResult:
        logger.info("Installing %s as %s", target, options.name)
        output = await self.installer.install_dependency(target, options)
        self.console.echo(render_result(output, options.name))
        return LocationResult(
            location=location,
            outcome=Outcome.INSTALLED,
            name=options.name,
            output=output,
        )
