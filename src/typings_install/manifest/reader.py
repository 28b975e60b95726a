"""Read and parse typings.json manifests."""

from __future__ import annotations

import json
from pathlib import Path

from typings_install.errors import ManifestReadError
from typings_install.models import Manifest

MANIFEST_NAME = "typings.json"

# JSON key -> Manifest attribute
SECTION_KEYS: dict[str, str] = {
    "dependencies": "dependencies",
    "devDependencies": "dev_dependencies",
    "ambientDependencies": "ambient_dependencies",
    "ambientDevDependencies": "ambient_dev_dependencies",
}


def read_manifest(project_path: Path | str) -> Manifest | None:
    """Read the manifest from a project directory.

    Returns None if the file does not exist or is empty.

    Raises:
        ManifestReadError: If the file is not a JSON object.
    """
    path = Path(project_path) / MANIFEST_NAME
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return None
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestReadError(f"Unable to read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestReadError(f"Expected a JSON object in {path}")
    return parse_manifest(data)


def parse_manifest(data: dict) -> Manifest:
    """Parse a raw JSON dict into a Manifest. Unknown keys are ignored."""
    sections: dict[str, dict[str, str]] = {}
    for key, attr in SECTION_KEYS.items():
        raw = data.get(key) or {}
        if not isinstance(raw, dict):
            raise ManifestReadError(f'"{key}" must be an object of name -> location')
        sections[attr] = {str(name): str(location) for name, location in raw.items()}

    return Manifest(name=str(data.get("name") or ""), **sections)
