"""Configuration loading and application settings."""

from archflow.core.config.loader import (
    detect_format,
    load_app_config,
    load_config,
    load_diagram_config,
)
from archflow.core.config.models import AppConfig, LoggingConfig, RenderConfig

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "RenderConfig",
    "detect_format",
    "load_app_config",
    "load_config",
    "load_diagram_config",
]
