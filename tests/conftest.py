"""Pytest configuration and fixtures for Google login tests."""

import os
import time
from typing import AsyncGenerator, Callable
import pytest
import pytest_asyncio
import respx
from authlib.jose import JsonWebKey, jwt
from httpx import AsyncClient, ASGITransport, Response

TEST_CLIENT_ID = "test-client-id.apps.googleusercontent.com"
TEST_CLIENT_SECRET = "test-client-secret"
TEST_REDIRECT_URI = "http://testserver/auth/google/callback"
TEST_KID = "test-key-1"

# Set test environment before importing app modules
os.environ["GOOGLE_CLIENT_ID"] = TEST_CLIENT_ID
os.environ["GOOGLE_CLIENT_SECRET"] = TEST_CLIENT_SECRET
os.environ["GOOGLE_REDIRECT_URI"] = TEST_REDIRECT_URI
os.environ["SESSION_SECRET"] = "test-session-secret"

from google_login.config import Settings
from google_login.main import create_app
from google_login.models.auth import AuthConfig
from google_login.services.certs import GOOGLE_CERTS_URL
from google_login.services.google_auth import GoogleAuth


@pytest.fixture
def settings() -> Settings:
    """Settings for a fully configured OAuth client."""
    return Settings(
        google_client_id=TEST_CLIENT_ID,
        google_client_secret=TEST_CLIENT_SECRET,
        google_redirect_uri=TEST_REDIRECT_URI,
        session_secret="test-session-secret",
    )


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        redirect_uri=TEST_REDIRECT_URI,
    )


@pytest.fixture
def google_auth(auth_config: AuthConfig) -> GoogleAuth:
    """Facade with a fresh signing-key cache."""
    return GoogleAuth(auth_config)


@pytest.fixture
def google_api():
    """Mock router for Google's HTTP endpoints."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture(scope="session")
def signing_key():
    """Throwaway RSA key standing in for Google's signing key."""
    return JsonWebKey.generate_key("RSA", 2048, is_private=True)


@pytest.fixture(scope="session")
def google_jwks(signing_key) -> dict:
    public = signing_key.as_dict(is_private=False)
    public.update({"kid": TEST_KID, "alg": "RS256", "use": "sig"})
    return {"keys": [public]}


@pytest.fixture
def google_certs(google_api, google_jwks):
    """Serve the test JWKS from Google's certs endpoint."""
    return google_api.get(GOOGLE_CERTS_URL).mock(
        return_value=Response(200, json=google_jwks)
    )


@pytest.fixture
def make_id_token(signing_key) -> Callable[..., str]:
    """Build a signed ID token; keyword arguments override claims."""

    def _make(key=None, kid: str = TEST_KID, **claims) -> str:
        now = int(time.time())
        payload = {
            "iss": "https://accounts.google.com",
            "aud": TEST_CLIENT_ID,
            "sub": "110169484474386276334",
            "email": "user@example.com",
            "email_verified": True,
            "name": "Google User",
            "iat": now,
            "exp": now + 3600,
        }
        payload.update(claims)
        token = jwt.encode({"alg": "RS256", "kid": kid}, payload, key or signing_key)
        return token.decode("ascii")

    return _make


@pytest.fixture
def mock_token_response() -> dict:
    """Mock Google token endpoint response."""
    return {
        "access_token": "ya29.test-access-token",
        "refresh_token": "1//test-refresh-token",
        "id_token": "test.id.token",
        "token_type": "Bearer",
        "scope": "https://www.googleapis.com/auth/userinfo.email https://www.googleapis.com/auth/userinfo.profile openid",
        "expires_in": 3599,
    }


@pytest.fixture
def mock_userinfo_response() -> dict:
    """Mock Google user-info endpoint response."""
    return {
        "id": "110169484474386276334",
        "email": "user@example.com",
        "verified_email": True,
        "name": "Google User",
        "given_name": "Google",
        "family_name": "User",
        "picture": "https://lh3.googleusercontent.com/a/test-picture",
    }


@pytest_asyncio.fixture
async def client(settings: Settings, google_auth: GoogleAuth) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for the example app."""
    app = create_app(settings=settings, google_auth=google_auth)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
