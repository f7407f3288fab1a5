"""Configuration helpers for DocFlow runtime settings.

Settings live in ``settings.yaml`` next to this module and are validated into
an immutable pydantic model. ``DOCFLOW_SETTINGS`` points at an alternate YAML
file and ``DOCFLOW_TEMPLATE_DIR`` overrides the template directory so a
deployment can ship its official templates outside the package.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from docflow.core.errors import ConfigError
from docflow.core.workspace import resolve_config_path


CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"
DEFAULT_MAX_UPLOAD_BYTES = 4 * 1024 * 1024


class SupportOrganization(BaseModel):
    """Fixed details of the registered support organization."""

    model_config = ConfigDict(frozen=True)

    name: str
    registration_number: str
    corporate_number: str
    address: str
    postal_code: str
    phone: str
    representative: str
    support_manager: str
    bank_account: str


class ArchiveSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    compression_level: int = 6

    @field_validator("compression_level")
    @classmethod
    def _check_level(cls, value: int) -> int:
        if not 0 <= value <= 9:
            raise ValueError("compression_level must be between 0 and 9")
        return value


class SurveySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = "企業情報アンケート"
    creator: str = ""
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


class Settings(BaseModel):
    """Validated runtime settings."""

    model_config = ConfigDict(frozen=True)

    template_dir: Path
    support_org: SupportOrganization
    archive: ArchiveSettings = Field(default_factory=ArchiveSettings)
    survey: SurveySettings = Field(default_factory=SurveySettings)
    manual_templates: Dict[str, str] = Field(default_factory=dict)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML, applying environment overrides."""

    env_path = os.getenv("DOCFLOW_SETTINGS")
    settings_path = Path(path) if path else Path(env_path) if env_path else DEFAULT_SETTINGS_PATH
    raw = _load_yaml(settings_path)

    template_override = os.getenv("DOCFLOW_TEMPLATE_DIR")
    template_dir = template_override or raw.get("template_dir")
    if not template_dir:
        raise ConfigError("template_dir is not configured")
    raw["template_dir"] = resolve_config_path(template_dir, relative_to=settings_path.parent).resolve()

    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid settings in {settings_path}: {exc}") from exc


@lru_cache(maxsize=1)
def default_settings() -> Settings:
    """Return the process-wide settings loaded from the default location."""

    return load_settings()


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"settings file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("settings must be a mapping")
    return data


__all__ = [
    "ArchiveSettings",
    "Settings",
    "SupportOrganization",
    "SurveySettings",
    "default_settings",
    "load_settings",
]
