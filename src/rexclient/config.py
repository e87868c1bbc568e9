"""Client configuration using pydantic-settings.

Values can be passed explicitly or picked up from ``REX_*`` environment
variables (``REX_BASE_URL``, ``REX_CLIENT_ID``, ``REX_CLIENT_SECRET``,
``REX_TIMEOUT``).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://rex.robotic-eyes.com"
DEFAULT_TIMEOUT = 60.0


class Settings(BaseSettings):
    """Connection settings for one REX installation.

    The credentials are only handed to the token endpoint; they are never
    written anywhere by the client.
    """

    model_config = SettingsConfigDict(
        env_prefix="REX_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = DEFAULT_BASE_URL
    client_id: str = ""
    client_secret: str = ""

    # Only used when the client creates its own httpx.Client
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("base_url must not be empty")
        return v

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def url(self, path: str) -> str:
        """Join an API path onto the base URL."""
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
