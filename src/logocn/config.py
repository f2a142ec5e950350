"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (LOGOCN__CACHE__DIR=/tmp/logocn)
  3. logocn.yaml            (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional. All fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CACHE_DIR = platformdirs.user_cache_dir("logocn")
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("logocn")


def _find_config_file() -> str | None:
    """Return the path of the first logocn.yaml found, or None."""
    candidates = [
        Path("logocn.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "logocn.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class CatalogSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = "https://cdn.jsdelivr.net/npm/simple-icons@v9/_data/simple-icons.json"
    icons_base_url: str = "https://cdn.jsdelivr.net/npm/simple-icons@v9/icons"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    dir: str = _DEFAULT_CACHE_DIR
    filename: str = "simple-icons.json"

    @property
    def path(self) -> Path:
        return Path(self.dir).expanduser() / self.filename


class HttpSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = 30.0
    user_agent: str = "logocn (+https://github.com/logocn/logocn)"


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: LOGOCN__HTTP__TIMEOUT_SECONDS=5
        env_prefix="LOGOCN__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    catalog: CatalogSettings = CatalogSettings()
    cache: CacheSettings = CacheSettings()
    http: HttpSettings = HttpSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
