"""Application configuration models for archflow."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from archflow.core.layout.models import LayoutSpacing


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root logging level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string (ignored when structured)",
    )
    structured: bool = Field(default=False, description="Emit JSON log records")
    filename: str | None = Field(default=None, description="Log file (stderr when unset)")


class RenderConfig(BaseModel):
    """Settings supplied to the engine on behalf of the host renderer."""

    model_config = ConfigDict(extra="forbid")

    fps: float = Field(default=30.0, gt=0.0, description="Frames per second (<= 1 is a still)")
    spacing: LayoutSpacing = Field(default_factory=LayoutSpacing)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
