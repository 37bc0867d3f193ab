"""Configuration management for sdfatlas.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, an options dictionary
or defaults.

Key classes:
- AtlasConfig: Atlas generation options (font size, charset, texture size)
- RenderConfig: msdfgen invocation settings
- LoggingConfig: Logging settings
- AtlasSettings: Main application settings
"""

from sdfatlas.config.settings import (
    DEFAULT_CHARSET,
    AtlasConfig,
    AtlasSettings,
    FieldType,
    LoggingConfig,
    OutputType,
    RenderConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_CHARSET",
    "AtlasConfig",
    "AtlasSettings",
    "FieldType",
    "LoggingConfig",
    "OutputType",
    "RenderConfig",
    "get_default_settings",
]
