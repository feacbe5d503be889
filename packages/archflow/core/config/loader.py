"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from archflow.core.config.models import AppConfig
from archflow.core.models import DiagramConfig
from archflow.core.utils.json import read_json

logger = logging.getLogger(__name__)

_DEFAULT_APP_CONFIG_PATH = Path("archflow.json")


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("diagram.json")
        'json'
        >>> detect_format("diagram.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            content = read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}, got {type(content).__name__}")
    return content


def load_diagram_config(path: str | Path) -> DiagramConfig:
    """Load and validate a diagram document.

    Raises:
        ValidationError: If the document is invalid
        FileNotFoundError: If the file does not exist
    """
    raw = load_config(path)
    config = DiagramConfig.model_validate(raw)
    logger.debug(
        "Loaded diagram %s: %d nodes, %d containers, %d connections, %d phases",
        path,
        len(config.nodes),
        len(config.containers),
        len(config.connections),
        len(config.timeline),
    )
    return config


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load application configuration, using defaults when the file is absent.

    Args:
        path: Path to app config file. Defaults to archflow.json.
    """
    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH

    if Path(path).exists():
        return AppConfig.model_validate(load_config(path))

    logger.debug("App config %s not found, using defaults", path)
    return AppConfig()
