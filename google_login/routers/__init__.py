"""API routers for Google login."""

from google_login.routers.auth import router as auth_router
from google_login.routers.pages import router as pages_router
from google_login.routers.api import router as api_router

__all__ = [
    "auth_router",
    "pages_router",
    "api_router",
]
