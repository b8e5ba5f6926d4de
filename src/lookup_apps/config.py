"""Configuration management for the lookup apps."""

import json
import os
import pathlib
import tempfile
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


SECRET_FIELDS = {"github_token", "weather_api_key"}

# Environment variable -> dotted config key
ENV_VARS = {
    "APP_NAME": "app_name",
    "DEBUG": "debug",
    "LOG_LEVEL": "log_level",
    "GITHUB_API_URL": "github_api_url",
    "GITHUB_TOKEN": "github_token",
    "GITHUB_TIMEOUT": "github_timeout",
    "WEATHER_API_URL": "weather_api_url",
    "WEATHER_API_KEY": "weather_api_key",
    "GEOLOCATION_URL": "geolocation_url",
    "GEOLOCATION_TIMEOUT": "geolocation.timeout_seconds",
    "GEOLOCATION_MAXIMUM_AGE": "geolocation.maximum_age_seconds",
}


@dataclass
class PositionOptions:
    """Options for acquiring the host's position."""
    enable_high_accuracy: bool = True
    timeout_seconds: float = 10.0
    maximum_age_seconds: float = 300.0


class AppConfig(BaseModel):
    """Main application configuration."""

    app_name: str = "lookup-apps"
    debug: bool = False
    log_level: str = "INFO"

    # GitHub user finder
    github_api_url: str = "https://api.github.com"
    github_user_agent: str = "GitHub-User-Finder"
    github_token: Optional[str] = Field(default=None, repr=False)
    github_timeout: Optional[float] = None

    # Weather app
    weather_api_url: str = "https://api.weatherapi.com/v1/current.json"
    weather_api_key: Optional[str] = Field(default=None, repr=False)
    geolocation_url: str = "http://ip-api.com/json/"
    geolocation: PositionOptions = Field(default_factory=PositionOptions)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls.model_validate(env_overrides())

    @classmethod
    def from_file(cls, path: pathlib.Path) -> "AppConfig":
        """Load configuration from a JSON file."""
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    def to_file(self, path: pathlib.Path) -> None:
        """Save configuration to a JSON file, leaving out secrets."""
        with open(path, "w") as f:
            json.dump(self.model_dump(exclude=SECRET_FIELDS), f, indent=2)


def env_overrides() -> Dict[str, Any]:
    """Collect the configuration values set in the environment."""
    result: Dict[str, Any] = {}

    for var, key in ENV_VARS.items():
        value = os.getenv(var)
        if value is None or value == "":
            continue
        target = result
        *parents, leaf = key.split(".")
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = value

    return result


def get_config_path() -> pathlib.Path:
    """Get the default configuration file path."""
    locations = [
        pathlib.Path.cwd() / "config.json",
        pathlib.Path.home() / ".config" / "lookup-apps" / "config.json",
        pathlib.Path(tempfile.gettempdir()) / "lookup-apps-config.json",
    ]

    for loc in locations:
        if loc.exists():
            return loc

    return locations[0]


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two configuration dictionaries."""
    result = defaultdict(dict, base)

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return dict(result)


def load_config(path: Optional[pathlib.Path] = None) -> AppConfig:
    """Load the config file (when present) with the environment applied on top."""
    path = path or get_config_path()
    data: Dict[str, Any] = {}

    if path.exists():
        with open(path) as f:
            data = json.load(f)

    return AppConfig.model_validate(merge_configs(data, env_overrides()))
