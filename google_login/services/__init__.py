"""Services for Google login."""

from google_login.services.certs import GoogleCertsCache
from google_login.services.google_auth import GoogleAuth

__all__ = [
    "GoogleAuth",
    "GoogleCertsCache",
]
