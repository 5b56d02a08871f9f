"""Google OAuth2 login helper for FastAPI applications."""

from google_login.errors import (
    GoogleAuthError,
    ConfigurationError,
    TokenExchangeError,
    ProfileFetchError,
    TokenVerificationError,
    TokenRefreshError,
    TokenRevocationError,
)
from google_login.middleware import GoogleAuthMiddleware, AuthDecision
from google_login.models.auth import AuthConfig, TokenSet, UserProfile
from google_login.services.google_auth import GoogleAuth

__all__ = [
    "GoogleAuth",
    "GoogleAuthMiddleware",
    "AuthDecision",
    "AuthConfig",
    "TokenSet",
    "UserProfile",
    "GoogleAuthError",
    "ConfigurationError",
    "TokenExchangeError",
    "ProfileFetchError",
    "TokenVerificationError",
    "TokenRefreshError",
    "TokenRevocationError",
]
