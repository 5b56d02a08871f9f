"""Google OAuth2 login facade."""

import logging
import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.jose import JsonWebToken, JWTClaims, KeySet
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

from google_login.config import Settings, get_settings
from google_login.errors import (
    ProfileFetchError,
    TokenExchangeError,
    TokenRefreshError,
    TokenRevocationError,
    TokenVerificationError,
)
from google_login.middleware import GoogleAuthMiddleware
from google_login.models.auth import AuthConfig, IdTokenPayload, TokenSet, UserProfile
from google_login.services.certs import GoogleCertsCache

logger = logging.getLogger(__name__)

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_REVOKE_URL = "https://oauth2.googleapis.com/revoke"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v1/userinfo"
GOOGLE_ISSUERS = ["accounts.google.com", "https://accounts.google.com"]

# Errors the OAuth client can surface for a failed round-trip. ValueError
# covers undecodable bodies and pydantic mapping failures.
OAUTH_ERRORS = (AuthlibBaseError, httpx.HTTPError, ValueError)


class UnknownKeyIdError(Exception):
    """ID token names a key id missing from the cached key set."""

    def __init__(self, kid: str):
        self.kid = kid
        super().__init__(f"Unknown key id: {kid}")


# Deeply nested headers overflow the JSON parser.
VERIFY_ERRORS = OAUTH_ERRORS + (UnknownKeyIdError, RecursionError)


class GoogleAuth:
    """Single point of contact for Google OAuth2 login flows.

    Holds client configuration only. Each network call runs on its own
    short-lived OAuth client with the credential it was handed, so one
    instance can serve concurrent requests for different users.
    """

    def __init__(
        self,
        config: AuthConfig,
        timeout: float = 10.0,
        certs: GoogleCertsCache | None = None,
    ):
        self.config = config
        self.timeout = timeout
        self.certs = certs or GoogleCertsCache(timeout=timeout)
        self._jwt = JsonWebToken(["RS256"])

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "GoogleAuth":
        """Create a facade from environment settings."""
        settings = settings or get_settings()
        return cls(
            AuthConfig.from_settings(settings),
            timeout=settings.http_timeout_seconds,
            certs=GoogleCertsCache(
                cache_ttl=settings.certs_cache_ttl_seconds,
                min_refresh_interval=settings.certs_min_refresh_seconds,
                timeout=settings.http_timeout_seconds,
            ),
        )

    def _oauth_client(self, **kwargs) -> AsyncOAuth2Client:
        return AsyncOAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            redirect_uri=self.config.redirect_uri,
            timeout=self.timeout,
            **kwargs,
        )

    def build_authorization_url(self, state: str | None = None) -> str:
        """Build the Google consent screen URL.

        Requests offline access and forces the consent prompt so a refresh
        token is issued on every login.
        """
        return prepare_grant_uri(
            GOOGLE_AUTHORIZE_URL,
            self.config.client_id,
            "code",
            redirect_uri=self.config.redirect_uri,
            scope=list(self.config.scopes),
            state=state,
            access_type="offline",
            prompt="consent",
        )

    async def exchange_code(self, code: str) -> TokenSet:
        """Exchange an authorization code for tokens."""
        if not code:
            raise TokenExchangeError("Failed to get tokens", ValueError("empty authorization code"))
        try:
            async with self._oauth_client() as client:
                token = await client.fetch_token(
                    GOOGLE_TOKEN_URL,
                    grant_type="authorization_code",
                    code=code,
                    redirect_uri=self.config.redirect_uri,
                )
            return TokenSet.from_response(token)
        except OAUTH_ERRORS as e:
            logger.warning(f"Authorization code exchange failed: {e}")
            raise TokenExchangeError("Failed to get tokens", e) from e

    async def fetch_user_profile(self, access_token: str) -> UserProfile:
        """Fetch the profile of the user the access token belongs to."""
        try:
            async with self._oauth_client(
                token={"access_token": access_token, "token_type": "Bearer"},
            ) as client:
                response = await client.get(GOOGLE_USERINFO_URL, params={"alt": "json"})
                response.raise_for_status()
                data = response.json()
            if not isinstance(data, dict):
                raise ValueError("Unexpected user-info response")

            return UserProfile(
                id=data.get("id"),
                email=data.get("email"),
                name=data.get("name"),
                picture=data.get("picture"),
                verified_email=data.get("verified_email"),
            )
        except OAUTH_ERRORS as e:
            logger.warning(f"User profile fetch failed: {e}")
            raise ProfileFetchError("Failed to get user profile", e) from e

    def _key_loader(self, key_set: KeySet):
        """Build the key callback authlib invokes with the parsed JWS header."""

        def load_key(header: dict, payload: bytes):
            kid = header.get("kid")
            if kid is None:
                return key_set.find_by_kid(None)
            if not isinstance(kid, str):
                raise TokenVerificationError(
                    "Failed to verify ID token",
                    ValueError("Token key id must be a string"),
                )
            if kid not in {key.kid for key in key_set.keys}:
                raise UnknownKeyIdError(kid)
            return key_set.find_by_kid(kid)

        return load_key

    def _decode(self, id_token: str, key_set: KeySet) -> JWTClaims:
        return self._jwt.decode(
            id_token,
            self._key_loader(key_set),
            claims_options={
                "iss": {"essential": True, "values": GOOGLE_ISSUERS},
                "aud": {"essential": True, "value": self.config.client_id},
                "exp": {"essential": True},
            },
        )

    async def verify_id_token(self, id_token: str) -> IdTokenPayload:
        """Verify an ID token's signature, issuer, audience and expiry."""
        try:
            key_set = await self.certs.get_key_set()
            try:
                claims = self._decode(id_token, key_set)
            except UnknownKeyIdError as e:
                logger.info(f"ID token signed with unknown key {e.kid}, refetching certs")
                claims = self._decode(id_token, await self.certs.refresh_for_unknown_kid())
            claims.validate()
            return dict(claims)
        except VERIFY_ERRORS as e:
            raise TokenVerificationError("Failed to verify ID token", e) from e

    async def refresh_access_token(self, refresh_token: str) -> TokenSet:
        """Get a new access token for a refresh token."""
        if not refresh_token:
            raise TokenRefreshError("Failed to refresh token", ValueError("empty refresh token"))
        try:
            async with self._oauth_client() as client:
                token = await client.refresh_token(
                    GOOGLE_TOKEN_URL,
                    refresh_token=refresh_token,
                )
            return TokenSet.from_response(token)
        except OAUTH_ERRORS as e:
            logger.warning(f"Access token refresh failed: {e}")
            raise TokenRefreshError("Failed to refresh token", e) from e

    async def revoke_token(self, token: str) -> bool:
        """Revoke an access or refresh token at Google.

        Callers on a logout path should log a failure and carry on.
        """
        try:
            async with self._oauth_client() as client:
                response = await client.revoke_token(GOOGLE_REVOKE_URL, token=token)
                response.raise_for_status()
            return True
        except OAUTH_ERRORS as e:
            raise TokenRevocationError("Failed to revoke token", e) from e

    def build_auth_middleware(self) -> GoogleAuthMiddleware:
        """Middleware that admits requests carrying a valid ID token."""
        return GoogleAuthMiddleware(self.verify_id_token)
