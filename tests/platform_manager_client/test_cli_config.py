"""
Tests for CLI configuration loading.
"""

import json
from pathlib import Path

import pytest

from platform_manager_client.config import (
    CLIConfig,
    ConfigError,
    default_config_path,
    load_config,
    load_config_file,
)


class TestDefaultConfigPath:
    def test_platform_home(self, tmp_path):
        path = default_config_path({"PLATFORM_HOME": str(tmp_path)})
        assert path == tmp_path / "config.yaml"

    def test_home_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert default_config_path({}) == tmp_path / ".platform" / "config.yaml"


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: https://api.example.com\nuser: admin\n")

        assert load_config_file(path) == {"api_url": "https://api.example.com", "user": "admin"}

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"access_token": "t"}))

        assert load_config_file(path) == {"access_token": "t"}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_config_file(path) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config_file(path)

    def test_unreadable(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config_file(tmp_path)


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_empty_config(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml", environ={})

        assert config == CLIConfig()
        assert not config.is_logged_in()

    def test_full_session(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "api_url: https://api.example.com\n"
            "access_token: token\n"
            "user: admin\n"
            "organization: {name: my-org, guid: org-guid}\n"
            "space: {name: my-space, guid: space-guid}\n"
            "timeout: 30\n"
            "unknown_key: ignored\n"
        )

        config = load_config(path, environ={})

        assert config.is_logged_in()
        assert config.organization.name == "my-org"
        assert config.space.guid == "space-guid"
        assert config.timeout == 30

    def test_environment_overrides(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: https://file\naccess_token: file-token\n")

        config = load_config(
            path, environ={"PLATFORM_API_URL": "https://env", "PLATFORM_TOKEN": "env-token"}
        )

        assert config.api_url == "https://env"
        assert config.access_token == "env-token"

    def test_platform_home_used_by_default(self, tmp_path):
        (tmp_path / "config.yaml").write_text("user: admin\n")

        config = load_config(environ={"PLATFORM_HOME": str(tmp_path)})

        assert config.user == "admin"

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("organization: just-a-string\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path, environ={})

    def test_token_not_in_repr(self):
        assert "secret-token" not in repr(CLIConfig(access_token="secret-token"))
