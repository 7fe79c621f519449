"""
Configuration loader — reads depwizard.yml into a WizardConfig.

The file is optional: with no file present every setting takes its
default. YAML is parsed with ``yaml.safe_load`` and validated against
a Pydantic schema.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from depwizard.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "depwizard.yml"

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"

DEFAULT_MANIFEST_FILE = "package.json"

# Environment override for the registry
REGISTRY_ENV_VAR = "DEPWIZARD_REGISTRY_URL"


class WizardConfig(BaseModel):
    """Runtime settings for an add run."""

    model_config = ConfigDict(extra="forbid")

    registry_url: str = DEFAULT_REGISTRY_URL
    registry_timeout: float | None = Field(default=None, gt=0)
    manifest_file: str = DEFAULT_MANIFEST_FILE
    install_command: str = "npm install"
    post_install_stderr_fails: bool = False


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return depwizard.yml in the given directory (default: cwd), if present."""
    candidate = (start_dir or Path.cwd()).resolve() / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(path: Path | None = None, start_dir: Path | None = None) -> WizardConfig:
    """Load and validate configuration.

    Args:
        path: Explicit path to a config file. Must exist if given.
        start_dir: Directory searched for depwizard.yml when ``path`` is None.

    Returns:
        Validated WizardConfig (defaults when no file is found).

    Raises:
        ConfigError: If the file is missing (explicit path) or invalid.
    """
    if path is None:
        path = find_config_file(start_dir)
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    data: dict = {}
    if path is not None:
        logger.debug("Loading config from %s", path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e

        try:
            loaded = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"Expected a YAML mapping in {path}, got {type(loaded).__name__}")
        data = loaded

    env_registry = os.environ.get(REGISTRY_ENV_VAR)
    if env_registry:
        data = {**data, "registry_url": env_registry}

    try:
        config = WizardConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    config.registry_url = config.registry_url.rstrip("/")
    logger.info("Using registry %s, manifest %s", config.registry_url, config.manifest_file)
    return config
