"""Pydantic settings for Bindery configuration."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return Path.home() / ".bindery"


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.yaml"


def _load_yaml_config() -> dict[str, Any]:
    """Load configuration from YAML file if it exists.

    Returns:
        Dictionary of configuration values, or empty dict if file doesn't exist.
    """
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path) as f:
                return yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError):
            # Silently ignore malformed or unreadable config
            return {}
    return {}


class GlyphSettings(BaseModel):
    """Status glyphs shown in the sidebar."""

    missing: str = "?"
    has_notes: str = "*"
    none: str = " "


class SidebarSettings(BaseModel):
    """Settings for the sidebar listing."""

    glyphs: GlyphSettings = Field(default_factory=GlyphSettings)
    mark_glyph: str = ">"


class MultiviewSettings(BaseModel):
    """Settings for multiview composition."""

    separator: str = "\n\n"
    encoding: str = "utf-8"


class Settings(BaseSettings):
    """Main settings model for Bindery."""

    model_config = SettingsConfigDict(
        env_prefix="BINDERY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    descriptor_filename: str = ".binder.yaml"
    default_mode: str | None = None
    sidebar: SidebarSettings = Field(default_factory=SidebarSettings)
    multiview: MultiviewSettings = Field(default_factory=MultiviewSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from (in order of priority, highest first):
    1. YAML config file (~/.bindery/config.yaml)
    2. Environment variables (BINDERY_* prefix)
    3. Default values
    """
    yaml_config = _load_yaml_config()
    return Settings(**yaml_config)
