"""FastAPI application entry point for the Google login example."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from google_login.config import Settings, get_settings
from google_login.routers import api_router, auth_router, pages_router
from google_login.services.google_auth import GoogleAuth

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_api(google_auth: GoogleAuth) -> FastAPI:
    """Create the bearer-protected API sub-application."""
    api = FastAPI(title="Google Login API", docs_url=None, redoc_url=None)
    api.state.google_auth = google_auth
    api.middleware("http")(google_auth.build_auth_middleware())
    api.include_router(api_router)
    return api


def create_app(
    settings: Settings | None = None,
    google_auth: GoogleAuth | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    google_auth = google_auth or GoogleAuth.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name}...")
        logger.info(f"Login at: http://localhost:{settings.port}")
        yield
        logger.info(f"{settings.app_name} shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="Sign in with Google",
        version="1.0.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.google_auth = google_auth

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        max_age=settings.session_max_age_seconds,
        https_only=settings.is_production,
        same_site="lax",
    )

    app.include_router(pages_router)
    app.include_router(auth_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.mount("/api", create_api(google_auth))

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "google_login.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=get_settings().port,
        reload=True,
    )
