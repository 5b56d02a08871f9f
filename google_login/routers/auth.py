"""Google login flow endpoints."""

import logging
import secrets
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from google_login.errors import GoogleAuthError, TokenRevocationError
from google_login.models.auth import AuthConfigResponse
from google_login.routers.deps import get_google_auth
from google_login.services.google_auth import GoogleAuth

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/auth/google")
async def login(
    request: Request,
    google_auth: GoogleAuth = Depends(get_google_auth),
) -> RedirectResponse:
    """Start the Google OAuth flow."""
    state = secrets.token_urlsafe(32)
    request.session["oauth_state"] = state
    return RedirectResponse(google_auth.build_authorization_url(state=state))


@router.get("/auth/google/callback")
async def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    google_auth: GoogleAuth = Depends(get_google_auth),
) -> RedirectResponse:
    """Finish the Google OAuth flow and store the user in the session."""
    if not code:
        return RedirectResponse("/?error=no_code")

    expected_state = request.session.pop("oauth_state", None)
    if not expected_state or not state or not secrets.compare_digest(expected_state, state):
        logger.warning("OAuth callback state mismatch")
        return RedirectResponse("/?error=invalid_state")

    try:
        tokens = await google_auth.exchange_code(code)
        user = await google_auth.fetch_user_profile(tokens.access_token)
    except GoogleAuthError as e:
        logger.error(f"Authentication error: {e}")
        return RedirectResponse("/?error=auth_failed")

    request.session["tokens"] = tokens.model_dump(exclude_none=True)
    request.session["user"] = user.model_dump()
    logger.info(f"User {user.id} logged in")
    return RedirectResponse("/dashboard")


@router.get("/auth/config", response_model=AuthConfigResponse)
async def get_auth_config(
    google_auth: GoogleAuth = Depends(get_google_auth),
) -> AuthConfigResponse:
    """Return client-side auth config."""
    return AuthConfigResponse(
        google_client_id=google_auth.config.client_id,
        scopes=list(google_auth.config.scopes),
    )


@router.get("/logout")
async def logout(
    request: Request,
    google_auth: GoogleAuth = Depends(get_google_auth),
) -> RedirectResponse:
    """Revoke the user's token at Google and clear the session."""
    tokens = request.session.get("tokens") or {}
    access_token = tokens.get("access_token")

    if access_token:
        try:
            await google_auth.revoke_token(access_token)
        except TokenRevocationError as e:
            logger.error(f"Error revoking token: {e}")

    request.session.clear()
    return RedirectResponse("/")
