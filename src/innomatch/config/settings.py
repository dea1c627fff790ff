# src/innomatch/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/innomatch/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `INNOMATCH_CONFIG_PATH`
- environment variables (e.g., `INNOMATCH_LOG_LEVEL`, `INNOMATCH_LEDGER_DIR`)

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

from innomatch.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `innomatch.config`."""
    text = resources.files("innomatch.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "InnoMatch"
    timezone: str = "Asia/Riyadh"
    log_level: str = "INFO"

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ValueError(f"Unknown timezone '{value}'") from e
        return value


class ScoreWeights(BaseModel):
    tags: float = Field(0.5, ge=0, le=1)
    type: float = Field(0.3, ge=0, le=1)
    location: float = Field(0.2, ge=0, le=1)


class SameDifferentScore(BaseModel):
    """Sub-score used when an attribute matches (`same`) or not (`different`)."""

    same: float = Field(1.0, ge=0, le=1)
    different: float = Field(0.5, ge=0, le=1)


class ScoringSettings(BaseModel):
    weights: ScoreWeights = Field(default_factory=ScoreWeights)
    type_score: SameDifferentScore = Field(default_factory=lambda: SameDifferentScore(same=1.0, different=0.5))
    location_score: SameDifferentScore = Field(
        default_factory=lambda: SameDifferentScore(same=1.0, different=0.3)
    )
    min_score: int = Field(0, ge=0, le=100)


class RankingSettings(BaseModel):
    top_n: int = Field(10, ge=1, le=10)


class CatalogSettings(BaseModel):
    path: str = "data/catalogs/profiles.json"


class LedgerSettings(BaseModel):
    backend: Literal["memory", "file"] = "file"
    dir: str = ".cache/innomatch/ledger"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    ledger: LedgerSettings = Field(default_factory=LedgerSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Only a small whitelist is honoured; everything else comes from YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("INNOMATCH_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    catalog_path = os.getenv("INNOMATCH_CATALOG_PATH")
    if catalog_path:
        data.setdefault("catalog", {})["path"] = catalog_path

    ledger_dir = os.getenv("INNOMATCH_LEDGER_DIR")
    if ledger_dir:
        data.setdefault("ledger", {})["dir"] = ledger_dir

    return data


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load and validate settings without caching (useful for tests and tools)."""
    load_dotenv_if_present()
    config_path = config_path or os.getenv("INNOMATCH_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    return load_settings()


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
