# src/eventgen/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/eventgen/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `OPENAI_API_KEY`, `EVENTGEN_LOG_LEVEL`)
- an external YAML file via `EVENTGEN_CONFIG_PATH`

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
- The passive generation policy block is frozen: it is read once at startup and never
  mutated while the process runs.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from eventgen.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `eventgen.config`."""
    text = resources.files("eventgen.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "eventgen"
    timezone: str = "Europe/Zurich"
    log_level: str = "INFO"


class PolicyConfig(BaseModel):
    """Constants of the passive generation admission policy."""

    model_config = ConfigDict(frozen=True)

    request_cooldown_ms: int = Field(30_000, ge=0)
    min_event_spacing_km: float = Field(0.15, gt=0)
    max_viewport_radius_km: float = Field(5.0, gt=0)
    max_events_per_request: int = Field(3, ge=1)


class OpenAISettings(BaseModel):
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o"
    max_completion_tokens: int = Field(1500, ge=1)
    timeout_seconds: float = Field(60, gt=0)
    api_key: str | None = None


class GenerationSettings(BaseModel):
    time_frame: str = "today"
    require_relevant_tags: bool = True
    creator: str = "OpenAI"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Policy constants are not overridable from the environment; point `EVENTGEN_CONFIG_PATH`
    at another YAML file instead.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("EVENTGEN_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        data.setdefault("openai", {})["api_key"] = api_key

    model = os.getenv("EVENTGEN_OPENAI_MODEL")
    if model:
        data.setdefault("openai", {})["model"] = model

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("EVENTGEN_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
