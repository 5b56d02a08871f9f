"""Minimal Google login server.

Usage:
  GOOGLE_CLIENT_ID=... GOOGLE_CLIENT_SECRET=... \
  GOOGLE_REDIRECT_URI=http://localhost:3000/auth/google/callback \
  python scripts/simple_server.py
"""

import logging
from html import escape
from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, PlainTextResponse
from starlette.middleware.sessions import SessionMiddleware

from google_login import GoogleAuth, GoogleAuthError, TokenRevocationError
from google_login.config import get_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("simple_server")


def build_app(google_auth: GoogleAuth | None = None) -> FastAPI:
    settings = get_settings()
    google_auth = google_auth or GoogleAuth.from_settings(settings)

    app = FastAPI(title="Simple Google Login")
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        user = request.session.get("user")
        if user:
            return f'<h1>Welcome {escape(user["name"])}!</h1><a href="/logout">Logout</a>'
        return '<h1>Home</h1><a href="/auth/google">Login with Google</a>'

    @app.get("/auth/google")
    async def login():
        return RedirectResponse(google_auth.build_authorization_url())

    @app.get("/auth/google/callback")
    async def callback(request: Request, code: str = ""):
        try:
            tokens = await google_auth.exchange_code(code)
            user = await google_auth.fetch_user_profile(tokens.access_token)
        except GoogleAuthError as e:
            logger.error(f"Authentication failed: {e}")
            return PlainTextResponse(
                "Authentication failed",
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        request.session["tokens"] = tokens.model_dump(exclude_none=True)
        request.session["user"] = user.model_dump()
        return RedirectResponse("/dashboard")

    @app.get("/dashboard")
    async def dashboard(request: Request):
        user = request.session.get("user")
        if not user:
            return RedirectResponse("/")
        return JSONResponse({"user": user})

    @app.get("/logout")
    async def logout(request: Request):
        access_token = (request.session.get("tokens") or {}).get("access_token")
        if access_token:
            try:
                await google_auth.revoke_token(access_token)
            except TokenRevocationError as e:
                logger.error(f"Error revoking token: {e}")
        request.session.clear()
        return RedirectResponse("/")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(build_app(), host="0.0.0.0", port=get_settings().port)
