"""Models for Google login."""

from google_login.models.auth import (
    DEFAULT_SCOPES,
    AuthConfig,
    TokenSet,
    UserProfile,
    IdTokenPayload,
    AuthErrorResponse,
    MeResponse,
    AuthConfigResponse,
)

__all__ = [
    "DEFAULT_SCOPES",
    "AuthConfig",
    "TokenSet",
    "UserProfile",
    "IdTokenPayload",
    "AuthErrorResponse",
    "MeResponse",
    "AuthConfigResponse",
]
