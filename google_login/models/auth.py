"""Authentication models."""

from dataclasses import dataclass, field
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from google_login.config import DEFAULT_SCOPES, Settings, get_settings
from google_login.errors import ConfigurationError

# Verified ID token claims, passed through as returned by the verifier.
IdTokenPayload = dict[str, Any]


@dataclass(frozen=True)
class AuthConfig:
    """OAuth client configuration for one Google login facade."""
    client_id: str
    client_secret: str
    redirect_uri: str
    scopes: tuple[str, ...] = field(default=DEFAULT_SCOPES)

    def __post_init__(self):
        missing = [
            name
            for name in ("client_id", "client_secret", "redirect_uri")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} required")
        scopes = self.scopes or DEFAULT_SCOPES
        if isinstance(scopes, str) or not all(isinstance(s, str) and s for s in scopes):
            raise ConfigurationError("scopes must be a sequence of non-empty strings")
        object.__setattr__(self, "scopes", tuple(scopes))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "AuthConfig":
        settings = settings or get_settings()
        return cls(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_uri,
            scopes=tuple(settings.google_scopes),
        )


class TokenSet(BaseModel):
    """Tokens returned by the provider's token endpoint."""
    access_token: str = Field(..., min_length=1)
    refresh_token: str | None = None
    id_token: str | None = None
    token_type: str = "Bearer"
    scope: str | None = None
    expires_in: int | None = None
    expires_at: int | None = None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "TokenSet":
        """Build a token set from a raw token endpoint response."""
        return cls.model_validate({k: v for k, v in data.items() if k in cls.model_fields})


class UserProfile(BaseModel):
    """Google account profile from the user-info endpoint."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    picture: str | None = None
    verified_email: bool | None = None


class AuthErrorResponse(BaseModel):
    """Body of a rejected API request."""
    error: str


class MeResponse(BaseModel):
    """Verified identity of the API caller."""
    user: IdTokenPayload


class AuthConfigResponse(BaseModel):
    """Client-side auth configuration."""
    google_client_id: str
    scopes: list[str]
