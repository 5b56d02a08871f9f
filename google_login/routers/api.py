"""Bearer-protected JSON API."""

from fastapi import APIRouter, Depends

from google_login.middleware import get_verified_user
from google_login.models.auth import MeResponse

router = APIRouter(tags=["api"])


@router.get("/me", response_model=MeResponse)
async def get_me(user: dict = Depends(get_verified_user)) -> MeResponse:
    """Return the verified ID token claims of the caller."""
    return MeResponse(user=user)
