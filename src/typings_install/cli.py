"""Command-line entry point: ``typings-install [options] [<location> ...]``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from collections.abc import Sequence

import click

from typings_install.app import app_lifespan
from typings_install.errors import TypingsError
from typings_install.models import InstallOptions, LocationResult, Outcome
from typings_install.registry.sources import VALID_SOURCES
from typings_install.resolution.protocol import InstallationProtocol, format_error
from typings_install.settings import Settings

logger = logging.getLogger(__name__)

PROG = "typings-install"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


def usage_text() -> str:
    sources = " | ".join(VALID_SOURCES)
    return "\n".join(
        [
            f"{PROG} (with no arguments, in package directory)",
            f"{PROG} <pkg>[@<version>] [ --source [{sources}] ]",
            f"{PROG} file:<path>",
            f"{PROG} github:<github username>/<github project>[/<path>][#<commit>]",
            f"{PROG} bitbucket:<bitbucket username>/<bitbucket project>[/<path>][#<commit>]",
            f"{PROG} <http:// url>",
            "",
            "Options: [--name] [--save|--save-dev] [--ambient] [--production] [--verbose]",
        ]
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False, usage=usage_text())
    parser.add_argument("locations", nargs="*", help="Dependencies to install.")
    parser.add_argument("-S", "--save", action="store_true", help="Save to dependencies.")
    parser.add_argument(
        "-D",
        "--save-dev",
        "--saveDev",
        dest="save_dev",
        action="store_true",
        help="Save to devDependencies.",
    )
    parser.add_argument("-A", "--ambient", action="store_true", help="Install ambient typings.")
    parser.add_argument("-n", "--name", default=None, help="Name to save the dependency as.")
    parser.add_argument(
        "-s",
        "--source",
        default=None,
        choices=list(VALID_SOURCES),
        help="Registry source to install from; skips the search step.",
    )
    parser.add_argument(
        "-p", "--production", action="store_true", help="Skip dev dependencies."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show stack traces.")
    parser.add_argument("--cwd", default=None, help="Project directory (default: current).")
    parser.add_argument("-h", "--help", action="store_true", help="Show usage and exit.")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


async def install_locations(
    locations: Sequence[str],
    options: InstallOptions,
    settings: Settings,
    *,
    verbose: bool = False,
) -> list[LocationResult]:
    """Wire the adapters and run every location through the resolution protocol."""
    async with app_lifespan(settings) as app:
        protocol = InstallationProtocol(
            registry=app.registry,
            installer=app.installer,
            console=app.console,
            verbose=verbose,
        )
        return await protocol.run(locations, options)


def run_cli(argv: Sequence[str] | None = None) -> int:
    """CLI runner. Returns the process exit code."""
    args = _parse_args(argv)
    if args.help:
        click.echo(usage_text())
        return EXIT_OK

    _configure_logging(args.verbose)

    cwd = os.path.abspath(args.cwd or os.getcwd())
    options = InstallOptions(
        cwd=cwd,
        name=args.name,
        save=args.save,
        save_dev=args.save_dev,
        ambient=args.ambient,
        production=args.production,
        source=args.source,
    )
    settings = Settings.load(cwd)

    try:
        results = asyncio.run(
            install_locations(args.locations, options, settings, verbose=args.verbose)
        )
    except (KeyboardInterrupt, click.Abort):
        click.echo("Aborted!", err=True)
        return EXIT_INTERRUPTED
    except TypingsError as exc:
        logger.debug("Install failed", exc_info=True)
        click.echo(format_error(exc, verbose=args.verbose), err=True)
        return EXIT_FAILED

    if any(result.outcome is Outcome.FAILED for result in results):
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(run_cli())
