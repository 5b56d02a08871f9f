"""Bearer ID token gate for protected routes."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.responses import Response

from google_login.errors import TokenVerificationError
from google_login.models.auth import AuthErrorResponse

logger = logging.getLogger(__name__)

NO_TOKEN_ERROR = "No token provided"
INVALID_TOKEN_ERROR = "Invalid token"

IdTokenVerifier = Callable[[str], Awaitable[dict[str, Any]]]
CallNext = Callable[[Request], Awaitable[Response]]


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


@dataclass(frozen=True)
class AuthDecision:
    """Outcome of the gate: allowed with a payload, or rejected with an error."""
    allowed: bool
    payload: dict[str, Any] | None = None
    error: str | None = None


class GoogleAuthMiddleware:
    """HTTP middleware that verifies a Google ID token before the handler runs.

    Use with ``app.middleware("http")(middleware)``. Missing, malformed and
    unverifiable tokens all get the same 401; only the log line differs.
    """

    def __init__(self, verify_id_token: IdTokenVerifier):
        self.verify_id_token = verify_id_token

    async def authenticate(self, authorization: str | None) -> AuthDecision:
        id_token = extract_bearer_token(authorization)
        if id_token is None:
            logger.info("Rejected request without bearer token")
            return AuthDecision(allowed=False, error=NO_TOKEN_ERROR)

        try:
            payload = await self.verify_id_token(id_token)
        except TokenVerificationError as e:
            logger.warning(f"Rejected request with invalid ID token: {e}")
            return AuthDecision(allowed=False, error=INVALID_TOKEN_ERROR)

        return AuthDecision(allowed=True, payload=payload)

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        decision = await self.authenticate(request.headers.get("authorization"))
        if not decision.allowed:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content=AuthErrorResponse(error=decision.error).model_dump(),
            )

        request.state.user = decision.payload
        return await call_next(request)


def get_verified_user(request: Request) -> dict[str, Any]:
    """Dependency for handlers mounted behind the auth middleware."""
    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user
