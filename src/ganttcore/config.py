"""Engine configuration loaded from ganttcore_config.yaml.

The project calendar itself lives in the project file (ProjectSettings);
this file only tunes how the engine computes things.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from . import context
from .scheduler.config import CriticalPathConfig
from .timescale import MIN_SPAN, TimeScale

CONFIG_FILENAME = "ganttcore_config.yaml"


class TimescaleConfig(BaseModel):
    """Configuration for coordinate mapping."""

    scale: TimeScale = TimeScale.DAY
    unit_size: float = Field(default=60.0, gt=0)
    min_span: float = Field(default=MIN_SPAN, ge=0)


class EngineConfig(BaseModel):
    """Complete engine configuration."""

    critical_path: CriticalPathConfig = CriticalPathConfig()
    timescale: TimescaleConfig = TimescaleConfig()


def load_engine_config(config_path: Path | str) -> EngineConfig:
    """Load engine configuration from a YAML file.

    Args:
        config_path: Path to ganttcore_config.yaml

    Returns:
        Validated EngineConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config cannot be parsed or fails validation
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise ValueError(f"Config file is not valid UTF-8: {e}") from e

    if not data:
        raise ValueError("Empty configuration file")

    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping at the root level")

    # pydantic's ValidationError is a ValueError subclass
    return EngineConfig.model_validate(data)


def discover_engine_config(
    project_path: Path | str | None = None,
    config_path: Path | None = None,
) -> EngineConfig:
    """Find and load the engine config, falling back to defaults.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Project file directory / ganttcore_config.yaml
    4. Current directory / ganttcore_config.yaml
    """
    if config_path and config_path.exists():
        return load_engine_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config and ctx_config.exists():
        return load_engine_config(ctx_config)

    if project_path is not None:
        dir_config = Path(project_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_engine_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_engine_config(cwd_config)

    return EngineConfig()
