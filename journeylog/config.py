"""YAML-backed settings for journeylog."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel

CONFIG_ENV_VAR = "JOURNEYLOG_CONFIG"
# checked in order; the first one set wins over the file's database_url
DATABASE_URL_ENV_VARS = ("JOURNEYLOG_DATABASE_URL", "DATABASE_URL")


class DisplayConfig(BaseModel):
    """Settings for rendering journey history."""

    date_format: str = "%b %d, %Y"
    unknown_date: str = "Unknown date"


class JourneylogConfig(BaseModel):
    """Top-level configuration model."""

    database_url: Optional[str] = None
    display: DisplayConfig = DisplayConfig()


def _read_yaml(config_path: Path) -> dict:
    if not config_path.is_file():
        return {}
    with config_path.open() as f:
        return yaml.safe_load(f) or {}


def load_config(path: Union[str, Path, None] = None) -> JourneylogConfig:
    """Build the configuration from a YAML file and the environment.

    Args:
        path: Config file to read. Defaults to the file named by
            JOURNEYLOG_CONFIG, then 'config.yaml' in the current directory.
            A missing file yields the defaults.
    """

    config_path = Path(path or os.getenv(CONFIG_ENV_VAR, "config.yaml"))
    config = JourneylogConfig(**_read_yaml(config_path))

    for name in DATABASE_URL_ENV_VARS:
        env_url = os.getenv(name)
        if env_url:
            config.database_url = env_url
            break
    return config
