"""Domain models for typings-install. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class Outcome(StrEnum):
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


class QuestionKind(StrEnum):
    CONFIRM = "confirm"
    INPUT = "input"
    LIST = "list"


# ─── Location Models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RegistryCoordinate:
    """A dependency referenced by name, resolved through the registry."""

    name: str
    version: str | None = None


@dataclass(frozen=True, slots=True)
class DirectLocation:
    """An opaque path, VCS reference or URL handed straight to the installer."""

    raw: str


LocationReference = RegistryCoordinate | DirectLocation


# ─── Options ──────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class InstallOptions:
    """User options for one run. Extend with ``dataclasses.replace`` per location."""

    cwd: str
    name: str | None = None
    save: bool = False
    save_dev: bool = False
    ambient: bool = False
    production: bool = False
    source: str | None = None


# ─── Registry Models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SourceCandidate:
    """A registry source that hosts the searched dependency."""

    source: str
    display_name: str


@dataclass(frozen=True, slots=True)
class SearchEntry:
    """One hit from the registry search endpoint."""

    name: str
    source: str


@dataclass(frozen=True, slots=True)
class SearchResponse:
    results: list[SearchEntry] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """A concrete installable location tied to one version."""

    version: str
    location: str


@dataclass(frozen=True, slots=True)
class ProjectVersions:
    name: str
    versions: list[VersionInfo] = field(default_factory=list)


# ─── Installer Models ─────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class DependencyTree:
    """An installed declaration package and its declared dependencies."""

    name: str
    src: str = ""
    version: str = ""
    ambient: bool = False
    missing: bool = False
    dependencies: dict[str, DependencyTree] = field(default_factory=dict)
    dev_dependencies: dict[str, DependencyTree] = field(default_factory=dict)
    ambient_dependencies: dict[str, DependencyTree] = field(default_factory=dict)
    ambient_dev_dependencies: dict[str, DependencyTree] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ReferenceSource:
    """A dependent that referenced an identifier the installer could not satisfy."""

    name: str
    src: str = ""


ReferenceMap = dict[str, list[ReferenceSource]]


@dataclass(frozen=True, slots=True)
class InstallOutput:
    tree: DependencyTree
    references: ReferenceMap = field(default_factory=dict)
    missing: ReferenceMap = field(default_factory=dict)


# ─── Prompt Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Choice:
    name: str
    value: str


@dataclass(frozen=True, slots=True)
class Question:
    """A single interactive question. ``name`` keys the answer."""

    kind: QuestionKind
    name: str
    message: str
    default: str | bool | None = None
    choices: list[Choice] = field(default_factory=list)


# ─── Result Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LocationResult:
    location: str
    outcome: Outcome
    name: str | None = None
    output: InstallOutput | None = None
    error: str = ""


# ─── Manifest Models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Manifest:
    """Contents of a typings.json file: dependency name -> location."""

    name: str = ""
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    ambient_dependencies: dict[str, str] = field(default_factory=dict)
    ambient_dev_dependencies: dict[str, str] = field(default_factory=dict)
