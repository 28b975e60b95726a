"""Runtime configuration: defaults < ~/.typingsrc < ./.typingsrc < TYPINGS_* environment."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from typings_install import __version__

logger = logging.getLogger(__name__)

RC_FILE = ".typingsrc"

DEFAULT_REGISTRY_URL = "https://api.typings.org"
DEFAULT_TIMEOUT_SECONDS = 30.0

# rc key -> Settings attribute. httpsProxy is listed after proxy so it wins.
_RC_KEYS: dict[str, str] = {
    "registryURL": "registry_url",
    "userAgent": "user_agent",
    "proxy": "proxy",
    "httpsProxy": "proxy",
    "rejectUnauthorized": "reject_unauthorized",
    "timeout": "timeout",
}

_ENV_KEYS: dict[str, str] = {
    "TYPINGS_REGISTRY_URL": "registry_url",
    "TYPINGS_USER_AGENT": "user_agent",
    "TYPINGS_PROXY": "proxy",
    "TYPINGS_REJECT_UNAUTHORIZED": "reject_unauthorized",
    "TYPINGS_TIMEOUT": "timeout",
}

_FALSE_STRINGS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class Settings:
    registry_url: str = DEFAULT_REGISTRY_URL
    user_agent: str = f"typings-install/{__version__}"
    proxy: str | None = None
    reject_unauthorized: bool = True
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def load(
        cls,
        cwd: Path | str,
        *,
        home: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Settings:
        """Build settings for a run in *cwd*.

        Args:
            cwd: Project directory; its ``.typingsrc`` overrides the user one.
            home: User home directory. Defaults to ``Path.home()``.
            environ: Environment mapping. Defaults to ``os.environ``.
        """
        settings = cls()
        home_dir = Path(home) if home is not None else Path.home()
        for rc_path in (home_dir / RC_FILE, Path(cwd) / RC_FILE):
            settings = settings._merge(_read_rc(rc_path), _RC_KEYS, str(rc_path))

        env = os.environ if environ is None else environ
        return settings._merge(env, _ENV_KEYS, "environment")

    def _merge(self, values: Mapping[str, object], keys: dict[str, str], origin: str) -> Settings:
        updates: dict[str, object] = {}
        for key, attr in keys.items():
            if key not in values or values[key] in (None, ""):
                continue
            try:
                updates[attr] = _coerce(attr, values[key])
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid %s=%r from %s", key, values[key], origin)
        return replace(self, **updates) if updates else self


def _coerce(attr: str, value: object) -> object:
    if attr == "timeout":
        timeout = float(value)  # type: ignore[arg-type]
        if timeout <= 0:
            raise ValueError(attr)
        return timeout
    if attr == "reject_unauthorized":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() not in _FALSE_STRINGS
    return str(value)


def _read_rc(path: Path) -> dict:
    """Read a JSON rc file. Missing or malformed files yield an empty mapping."""
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", path)
        return {}
    return data
