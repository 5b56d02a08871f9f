"""Error types raised by the Google login facade."""


class GoogleAuthError(Exception):
    """Base exception for Google login failures."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.message = message
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause else message)


class ConfigurationError(GoogleAuthError):
    """Required OAuth client settings are missing."""


class TokenExchangeError(GoogleAuthError):
    """Authorization code could not be exchanged for tokens."""


class ProfileFetchError(GoogleAuthError):
    """User profile could not be fetched or mapped."""


class TokenVerificationError(GoogleAuthError):
    """ID token failed signature, issuer, audience or expiry checks."""


class TokenRefreshError(GoogleAuthError):
    """Refresh token could not be exchanged for a new access token."""


class TokenRevocationError(GoogleAuthError):
    """Provider did not confirm token revocation."""
