"""Exception hierarchy for typings-install.

All exceptions inherit from TypingsError (single catch point).
Messages are written for the terminal -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class TypingsError(Exception):
    """Base exception for all typings-install errors."""


class NotFoundError(TypingsError):
    """Nothing in the registry matches the requested name or version."""


class RegistryError(TypingsError):
    """Error communicating with the typings registry API."""


class ManifestReadError(TypingsError):
    """Error reading a typings.json manifest."""


class ManifestWriteError(TypingsError):
    """Error writing a typings.json manifest."""


class InstallError(TypingsError):
    """Dependency installation failed."""
