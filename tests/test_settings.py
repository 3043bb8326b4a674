"""Tests for the YAML settings file."""

import pytest

from connector_installer.errors import ArgumentError
from connector_installer.settings import InstallerSettings, load_settings


class TestInstallerSettings:
    def test_defaults(self):
        s = load_settings(None)

        assert s.repo_url == "downloads.access.barracuda.com"
        assert s.binary == "/usr/bin/fyde-connector"
        assert s.override_path == "/etc/systemd/system/fyde-connector.service.d/10-environment.conf"
        assert s.lock_attempts == 300
        assert s.lock_interval == 1.0
        assert s.authorize_min_version == "1.3.20"

    def test_override_path_follows_service(self):
        s = InstallerSettings(raw={"service": "connector-dev"})
        assert s.override_path == "/etc/systemd/system/connector-dev.service.d/10-environment.conf"

    def test_load_yaml(self, tmp_path):
        p = tmp_path / "settings.yaml"
        p.write_text("repo_url: mirror.example.com\nlock:\n  attempts: 5\n  interval: 0.5\n")

        s = load_settings(str(p))

        assert s.repo_url == "mirror.example.com"
        assert s.lock_attempts == 5
        assert s.lock_interval == 0.5
        assert s.package == "fyde-connector"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArgumentError):
            load_settings(str(tmp_path / "missing.yaml"))

    def test_wrong_extension(self, tmp_path):
        p = tmp_path / "settings.json"
        p.write_text("{}")
        with pytest.raises(ArgumentError):
            load_settings(str(p))

    def test_not_a_mapping(self, tmp_path):
        p = tmp_path / "settings.yml"
        p.write_text("- a\n- b\n")
        with pytest.raises(ArgumentError):
            load_settings(str(p))
