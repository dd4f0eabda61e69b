from __future__ import annotations

from shopsync.config import DEFAULT_HOURLY_RATE, Settings
from shopsync.schemas.base import DomainModel


class ThemeColors(DomainModel):
    primary: str = "#2dd4bf"
    secondary: str = "#38bdf8"
    accent: str = "#ef4444"


class AppConfig(DomainModel):
    """Branding plus the global labor rate. Read-only inside the core."""

    logo_url: str = ""
    company_name: str = ""
    hourly_rate: float = DEFAULT_HOURLY_RATE
    theme_colors: ThemeColors = ThemeColors()

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppConfig":
        brand = settings.branding
        return cls(
            logo_url=brand.logo_url,
            company_name=brand.company_name,
            hourly_rate=settings.hourly_rate,
            theme_colors=ThemeColors(
                primary=brand.theme.primary,
                secondary=brand.theme.secondary,
                accent=brand.theme.accent,
            ),
        )
