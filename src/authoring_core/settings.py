"""
Configuration settings for the authoring client.

Environment variables:
    AUTHORING_BASE_URL                    Absolute content API root
    AUTHORING_TOKEN                       OAuth bearer token (optional)
    AUTHORING_REQUEST_TIMEOUT_S           HTTP timeout in seconds
    AUTHORING_SEARCH_DELAY_MS             Live search debounce window
    AUTHORING_SEARCH_PAGE_SIZE            Live search page size
    AUTHORING_DROP_STALE_SEARCH_RESPONSES Discard out-of-order search responses
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Authoring client settings."""

    model_config = SettingsConfigDict(env_prefix="AUTHORING_", env_file=".env", extra="ignore")

    # Content API
    base_url: str = "http://localhost/content-api"
    token: str | None = None
    request_timeout_s: float = 30.0
    user_agent: str = "newscoop-authoring/0.1"

    # Listing
    list_page_size: int = 99999
    image_page_size: int = 50
    default_avatar_url: str = "/bundles/newscoopeditor/images/authors-default-avatar.png"

    # Live author search
    search_page_size: int = 10
    search_delay_ms: int = 250
    drop_stale_search_responses: bool = False


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
