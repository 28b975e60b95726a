"""Atomic writes to typings.json manifests."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from dataclasses import replace
from pathlib import Path

from typings_install.errors import ManifestWriteError
from typings_install.manifest.reader import MANIFEST_NAME, SECTION_KEYS, read_manifest
from typings_install.models import Manifest

logger = logging.getLogger(__name__)


def manifest_to_dict(manifest: Manifest, existing: dict | None = None) -> dict:
    """Serialize a Manifest, keeping unknown keys from *existing* and sorting sections."""
    data: dict = dict(existing or {})
    if manifest.name:
        data["name"] = manifest.name
    for key, attr in SECTION_KEYS.items():
        section: dict[str, str] = getattr(manifest, attr)
        if section:
            data[key] = {name: section[name] for name in sorted(section)}
        else:
            data.pop(key, None)
    return data


def _atomic_write(path: Path, data: dict) -> None:
    """Write manifest data to disk atomically via tempfile + os.replace."""
    fd = None
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp", prefix=".typings_")
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = None
        os.replace(tmp_path, str(path))
        tmp_path = None
    except OSError as exc:
        raise ManifestWriteError(f"Failed to write {path}: {exc}") from exc
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)


def _read_raw(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text) if text.strip() else {}
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def write_manifest(project_path: Path | str, manifest: Manifest) -> None:
    """Write the manifest, preserving keys this tool does not manage."""
    path = Path(project_path) / MANIFEST_NAME
    _atomic_write(path, manifest_to_dict(manifest, _read_raw(path)))


def add_dependency(
    project_path: Path | str,
    name: str,
    location: str,
    *,
    dev: bool = False,
    ambient: bool = False,
) -> Manifest:
    """Add or update one dependency, creating the manifest if needed.

    The section is chosen from the flags: ``dev`` selects the
    development section, ``ambient`` the ambient one.
    """
    manifest = read_manifest(project_path) or Manifest()

    if ambient:
        attr = "ambient_dev_dependencies" if dev else "ambient_dependencies"
    else:
        attr = "dev_dependencies" if dev else "dependencies"

    section = dict(getattr(manifest, attr))
    section[name] = location
    updated = replace(manifest, **{attr: section})

    write_manifest(project_path, updated)
    logger.info("Saved %s to %s (%s)", name, MANIFEST_NAME, attr)
    return updated
