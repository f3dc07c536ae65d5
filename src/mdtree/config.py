"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from mdtree.core.errors import ConfigError


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDTREE_"


class Settings(BaseModel):
    output_format: str  = Field(default="json", pattern="^(json|md)$", description="json or md")
    indent:        int  = Field(default=2, ge=0, description="JSON indentation; 0 for compact")
    by_alias:      bool = Field(default=True, description="camelCase keys in JSON output")
    log_level:     str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    output_dir:    str  = Field(default="dist", description="Directory for exported files")
    extensions:    list[str] = Field(default_factory=list, description="'module:attr' recognizer references")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, v: Any) -> Any:
        """Accept the comma-separated form used by MDTREE_EXTENSIONS."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDTREE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
