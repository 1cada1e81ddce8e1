"""Configuration Settings for Auth App

Manages environment variables and application configuration.
Values are read once at startup from the environment and an optional .env file.
"""

import logging
import sys
from functools import lru_cache
from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings"""

    # Service info
    service_name: str = "scalekit-auth-app"
    service_version: str = "1.0.0"

    # Scalekit environment
    scalekit_env_url: str
    scalekit_client_id: str
    scalekit_client_secret: str

    # OAuth callback handed to the identity provider
    auth_redirect_uri: str

    # Public base URL of the app (post-login and post-logout redirects)
    host: str

    # Server configuration
    server_host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False

    # User record store policy (0 disables the limit)
    user_store_ttl_seconds: int = 24 * 60 * 60
    user_store_max_entries: int = 10_000

    # Frontend bundle; defaults to the one shipped with the package
    web_build_dir: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def public_base_url(self) -> str:
        """Public host without a trailing slash"""
        return self.host.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()


def load_settings() -> Settings:
    """Load settings at startup, exiting the process if they are unusable

    Returns:
        Settings instance

    Raises:
        SystemExit: If required configuration is missing or invalid
    """
    try:
        return get_settings()
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]).upper() for err in e.errors() if err.get("loc"))
        logger.critical(f"Error loading configuration: {missing or e}")
        sys.exit(1)
