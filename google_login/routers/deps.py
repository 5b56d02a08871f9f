"""Shared router dependencies."""

from fastapi import Request

from google_login.services.google_auth import GoogleAuth


def get_google_auth(request: Request) -> GoogleAuth:
    """Dependency for the app-wide Google login facade."""
    return request.app.state.google_auth


def get_session_user(request: Request) -> dict | None:
    """Profile stored in the session by the OAuth callback, if any."""
    return request.session.get("user")
