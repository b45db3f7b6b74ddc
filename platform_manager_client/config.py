"""
Configuration handling for the platform CLI tool.

The CLI stores its session (API endpoint, token, current user and the
targeted org/space) in a YAML or JSON file. Environment variables override
the file for the endpoint and token.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from platform_manager_client.protocols import CLIError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"


class ConfigError(CLIError):
    """Configuration file could not be read."""


class TargetRef(BaseModel):
    """A targeted organization or space."""

    name: str
    guid: str


class CLIConfig(BaseModel):
    """Persisted CLI session state."""

    api_url: Optional[str] = Field(None, description="Platform API endpoint")
    access_token: Optional[str] = Field(None, description="Bearer token", repr=False)
    user: Optional[str] = Field(None, description="Logged-in user name")
    organization: Optional[TargetRef] = Field(None, description="Targeted organization")
    space: Optional[TargetRef] = Field(None, description="Targeted space")
    timeout: Optional[float] = Field(None, description="Per-request timeout in seconds")

    model_config = ConfigDict(extra="ignore")

    def is_logged_in(self) -> bool:
        return bool(self.access_token)


def default_config_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the config file path.

    Tries in order:
    1. $PLATFORM_HOME/config.yaml
    2. ~/.platform/config.yaml
    """
    env = os.environ if environ is None else environ
    home = env.get("PLATFORM_HOME")
    base = Path(home) if home else Path.home() / ".platform"
    return base / CONFIG_FILENAME


def load_config_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from a JSON or YAML file.

    Raises:
        ConfigError: If the file cannot be parsed
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    try:
        with open(path, "r") as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}")
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to parse configuration file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return cast(Dict[str, Any], data)


def load_config(
    file_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CLIConfig:
    """
    Load CLI configuration.

    Missing files yield an empty config. PLATFORM_API_URL and PLATFORM_TOKEN
    override the values read from the file.
    """
    env = os.environ if environ is None else environ
    path = Path(file_path) if file_path else default_config_path(env)

    data: Dict[str, Any] = {}
    if path.exists():
        data = load_config_file(path)
        logger.debug("Loaded config from %s", path)
    else:
        logger.debug("No config file at %s", path)

    if env.get("PLATFORM_API_URL"):
        data["api_url"] = env["PLATFORM_API_URL"]
    if env.get("PLATFORM_TOKEN"):
        data["access_token"] = env["PLATFORM_TOKEN"]

    try:
        return CLIConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}")
