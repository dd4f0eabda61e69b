"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    YamlConfigSettingsSource,
)

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULT_HOURLY_RATE = 145.0


class _YamlSource(YamlConfigSettingsSource):
    """config.yaml with blank values left out, so field defaults apply."""

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in super().__call__().items() if v not in (None, "")}


class ThemeConfig(BaseSettings):
    primary: str = "#2dd4bf"
    secondary: str = "#38bdf8"
    accent: str = "#ef4444"


class BrandingConfig(BaseSettings):
    logo_url: str = "https://i.imgur.com/QoW6b8j.png"
    company_name: str = "STATELINE BOATWORKS"
    theme: ThemeConfig = Field(default_factory=ThemeConfig)


class RemoteTablesConfig(BaseSettings):
    repair_orders: str = "repair_orders"
    master_inventory: str = "master_inventory"


class TechnicianConfig(BaseModel):
    id: str
    name: str
    specialty: str = ""


class Settings(BaseSettings):
    # rest: PostgREST/Supabase endpoint; sql: SQLAlchemy async database URL
    remote_backend: str = "rest"
    remote_url: str = ""
    remote_key: str = ""
    remote_timeout_seconds: float = 10.0
    database_url: str = ""
    simulate: bool = False
    strict_transitions: bool = True
    hourly_rate: float = DEFAULT_HOURLY_RATE
    log_level: str = "INFO"
    branding: BrandingConfig = Field(default_factory=BrandingConfig)
    remote_tables: RemoteTablesConfig = Field(default_factory=RemoteTablesConfig)
    technicians: list[TechnicianConfig] = Field(default_factory=list)

    # yaml_file stays unset here; get_settings() points it at a file
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _YamlSource(settings_cls),
            file_secret_settings,
        )


def get_settings(path: Path | None = None) -> Settings:
    """Build Settings from, highest first: process env, .env, config.yaml, defaults."""

    class FileSettings(Settings):
        model_config = {"yaml_file": path or _CONFIG_PATH}

    return FileSettings()
