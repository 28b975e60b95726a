"""Tests for configuration loading (settings.py)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from typings_install.settings import DEFAULT_REGISTRY_URL, RC_FILE, Settings


@pytest.fixture
def dirs(tmp_path: Path) -> tuple[Path, Path]:
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    return home, project


def _write_rc(directory: Path, data: object) -> None:
    (directory / RC_FILE).write_text(json.dumps(data))


class TestSettingsLoad:
    def test_defaults(self, dirs):
        home, project = dirs
        settings = Settings.load(project, home=home, environ={})
        assert settings.registry_url == DEFAULT_REGISTRY_URL
        assert settings.proxy is None
        assert settings.reject_unauthorized is True
        assert settings.timeout == 30.0
        assert settings.user_agent.startswith("typings-install/")

    def test_project_rc_overrides_home_rc(self, dirs):
        home, project = dirs
        _write_rc(home, {"registryURL": "https://home.test", "userAgent": "home-agent"})
        _write_rc(project, {"registryURL": "https://project.test"})

        settings = Settings.load(project, home=home, environ={})

        assert settings.registry_url == "https://project.test"
        assert settings.user_agent == "home-agent"

    def test_environment_overrides_rc(self, dirs):
        home, project = dirs
        _write_rc(project, {"registryURL": "https://project.test", "timeout": 5})

        settings = Settings.load(
            project,
            home=home,
            environ={"TYPINGS_REGISTRY_URL": "https://env.test", "TYPINGS_TIMEOUT": "12.5"},
        )

        assert settings.registry_url == "https://env.test"
        assert settings.timeout == 12.5

    def test_https_proxy_wins_over_proxy(self, dirs):
        home, project = dirs
        _write_rc(project, {"proxy": "http://a:1", "httpsProxy": "http://b:2"})

        assert Settings.load(project, home=home, environ={}).proxy == "http://b:2"

    def test_reject_unauthorized_from_rc_and_env(self, dirs):
        home, project = dirs
        _write_rc(project, {"rejectUnauthorized": False})
        assert Settings.load(project, home=home, environ={}).reject_unauthorized is False

        settings = Settings.load(
            project, home=home, environ={"TYPINGS_REJECT_UNAUTHORIZED": "true"}
        )
        assert settings.reject_unauthorized is True

    def test_malformed_rc_ignored(self, dirs, caplog):
        home, project = dirs
        (project / RC_FILE).write_text("{broken")

        settings = Settings.load(project, home=home, environ={})

        assert settings.registry_url == DEFAULT_REGISTRY_URL
        assert "Ignoring unreadable" in caplog.text

    def test_invalid_timeout_ignored(self, dirs):
        home, project = dirs
        settings = Settings.load(project, home=home, environ={"TYPINGS_TIMEOUT": "soon"})
        assert settings.timeout == 30.0

    def test_non_positive_timeout_ignored(self, dirs):
        home, project = dirs
        _write_rc(project, {"timeout": 0})
        assert Settings.load(project, home=home, environ={}).timeout == 30.0
