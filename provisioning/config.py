"""Configuration settings for the provisioning profile reader.

All settings are loaded from environment variables (or a ``.env`` file) using
pydantic-settings. The ``get_settings()`` function returns a cached singleton
instance.

Environment variables use the ``PROVISIONING_`` prefix, are case-insensitive,
and unrelated variables are silently ignored.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Reader settings loaded from environment variables.

    Attributes:
        bundle_path: Directory searched for the embedded provisioning profile
            by the default resource locator (the app bundle root).
        embedded_resource_name: Resource name of the embedded profile.
        embedded_resource_extension: File extension of the embedded profile.
        log_level: Logging level (debug, info, warning, error, critical)
            used by ``configure_logging()``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROVISIONING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Bundle lookup
    bundle_path: Path = Path(".")
    embedded_resource_name: str = "embedded"
    embedded_resource_extension: str = "mobileprovision"

    # Logging
    log_level: str = "info"


@lru_cache
def get_settings() -> Settings:
    """Get or create the cached settings singleton.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for applications embedding the reader.

    The library itself never installs handlers; callers that want the
    decoder's debug output call this once at startup.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
