"""Configuration settings for the Google login service."""

from pydantic_settings import BaseSettings
from functools import lru_cache

DEFAULT_SCOPES: tuple[str, ...] = (
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google OAuth client
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = ""
    google_scopes: list[str] = list(DEFAULT_SCOPES)

    # Outbound HTTP
    http_timeout_seconds: float = 10.0
    certs_cache_ttl_seconds: int = 60 * 60
    certs_min_refresh_seconds: int = 60

    # Session cookie
    session_secret: str = "your-secret-key-change-this"
    session_max_age_seconds: int = 60 * 60 * 24

    # Application settings
    app_name: str = "Google Login"
    environment: str = "development"
    debug: bool = False
    port: int = 3000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
