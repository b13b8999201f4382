"""
audiowork.config - YAML config loading and validation.

Handles loading audiowork.yaml, applying defaults, and validating all
pipeline parameters. A PipelineConfig is frozen once built.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from audiowork.exceptions import ConfigError

CONFIG_FILENAME = "audiowork.yaml"

SUPPORTED_MIME_TYPES = {"audio/wav"}


class PipelineConfig(BaseModel):
    """Resolved configuration for a pipeline instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sample_rate: int = Field(default=16000, gt=0)
    debug_log: bool = False

    # Decoded audio is truncated to this many seconds.
    max_decode_seconds: float = Field(default=50.0, gt=0.0)

    mime_type: str = "audio/wav"
    fetch_timeout: float = Field(default=30.0, gt=0.0)

    @field_validator("mime_type")
    @classmethod
    def validate_mime_type(cls, v: str) -> str:
        if v not in SUPPORTED_MIME_TYPES:
            raise ValueError(f"mime_type must be one of: {SUPPORTED_MIME_TYPES}")
        return v

    @property
    def max_decode_samples(self) -> int:
        return int(self.sample_rate * self.max_decode_seconds)


def build_config(raw: dict[str, Any] | None = None, **overrides: Any) -> PipelineConfig:
    """Build a PipelineConfig from a raw mapping plus keyword overrides.

    None values in overrides are ignored so CLI options can be passed
    through unconditionally.

    Raises:
        ConfigError: If validation fails
    """
    merged = dict(raw or {})
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    try:
        return PipelineConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Path) -> PipelineConfig:
    """Load and validate configuration from a YAML file or a directory holding one."""
    config_file = path / CONFIG_FILENAME if path.is_dir() else path
    if not config_file.exists():
        raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}")

    with open(config_file) as f:
        try:
            raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {config_file}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    return build_config(raw_config)


def create_default_config() -> dict[str, Any]:
    """Create a default config mapping suitable for writing to disk."""
    return PipelineConfig().model_dump()


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
