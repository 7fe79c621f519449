"""
Tests for configuration loading — depwizard.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from depwizard.core.config.loader import (
    DEFAULT_REGISTRY_URL,
    REGISTRY_ENV_VAR,
    WizardConfig,
    find_config_file,
    load_config,
)
from depwizard.core.errors import ConfigError


@pytest.fixture(autouse=True)
def _no_registry_env(monkeypatch):
    monkeypatch.delenv(REGISTRY_ENV_VAR, raising=False)


@pytest.fixture
def valid_config_yml(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        registry_url: https://registry.example.com/
        registry_timeout: 5
        install_command: pnpm install
        post_install_stderr_fails: true
    """)
    path = tmp_path / "depwizard.yml"
    path.write_text(content)
    return path


class TestFindConfigFile:
    def test_found(self, valid_config_yml: Path):
        assert find_config_file(valid_config_yml.parent) == valid_config_yml.resolve()

    def test_missing(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None

    def test_parent_not_searched(self, valid_config_yml: Path):
        child = valid_config_yml.parent / "child"
        child.mkdir()
        assert find_config_file(child) is None


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path):
        config = load_config(start_dir=tmp_path)
        assert config == WizardConfig()
        assert config.registry_url == DEFAULT_REGISTRY_URL
        assert config.registry_timeout is None
        assert config.install_command == "npm install"

    def test_valid_file(self, valid_config_yml: Path):
        config = load_config(valid_config_yml)
        assert config.registry_url == "https://registry.example.com"
        assert config.registry_timeout == 5.0
        assert config.install_command == "pnpm install"
        assert config.post_install_stderr_fails is True
        assert config.manifest_file == "package.json"

    def test_discovered_in_start_dir(self, valid_config_yml: Path):
        config = load_config(start_dir=valid_config_yml.parent)
        assert config.install_command == "pnpm install"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "depwizard.yml"
        path.write_text("")
        assert load_config(path) == WizardConfig()

    def test_env_overrides_registry(self, valid_config_yml: Path, monkeypatch):
        monkeypatch.setenv(REGISTRY_ENV_VAR, "https://mirror.example.com")
        config = load_config(valid_config_yml)
        assert config.registry_url == "https://mirror.example.com"
        assert config.install_command == "pnpm install"

    def test_explicit_missing_path(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "depwizard.yml"
        path.write_text("registry_url: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "depwizard.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    @pytest.mark.parametrize(
        "content",
        [
            "registry_timeout: 0\n",
            "registry_timeout: fast\n",
            "unknown_key: 1\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str):
        path = tmp_path / "depwizard.yml"
        path.write_text(content)
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)
