"""Settings for the munge CLI and logging, loaded from an optional YAML file."""

import os
from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from munge.errors import ConfigError

CONFIG_ENV_VAR = "MUNGE_CONFIG"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Minimum level written to stderr"
    )
    log_format: Literal["console", "json"] = Field(default="console", description="Log renderer")
    html_parser: str = Field(default="html.parser", description="BeautifulSoup tree builder")
    output_format: Literal["json", "yaml"] = Field(default="json", description="CLI result format")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``path`` or $MUNGE_CONFIG; defaults when neither is set."""
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return Settings()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}", path=str(p))
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", path=str(p)) from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping of setting names to values", path=str(p))
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}", path=str(p)) from e
