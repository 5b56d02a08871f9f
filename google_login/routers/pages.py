"""HTML pages for the login example."""

from html import escape
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse

from google_login.routers.deps import get_session_user

router = APIRouter(tags=["pages"])


def _avatar(user: dict) -> str:
    picture = user.get("picture")
    if not picture:
        return ""
    return (
        f'<img src="{escape(picture)}" alt="Profile" '
        'style="border-radius: 50%; width: 100px;">'
    )


@router.get("/", response_class=HTMLResponse)
async def home(user: dict | None = Depends(get_session_user)) -> str:
    """Welcome page, or the login button for anonymous visitors."""
    if user:
        return f"""
      <h1>Welcome, {escape(user["name"])}!</h1>
      {_avatar(user)}
      <p>Email: {escape(user["email"])}</p>
      <a href="/dashboard">Dashboard</a> |
      <a href="/logout">Logout</a>
    """

    return """
      <h1>Google Authentication Example</h1>
      <a href="/auth/google">
        <button style="padding: 10px 20px; font-size: 16px;">
          Login with Google
        </button>
      </a>
    """


@router.get("/dashboard", response_class=HTMLResponse, response_model=None)
async def dashboard(user: dict | None = Depends(get_session_user)) -> str | RedirectResponse:
    """Profile page for logged-in users."""
    if not user:
        return RedirectResponse("/")

    verified = "Yes" if user.get("verified_email") else "No"
    return f"""
    <h1>Dashboard</h1>
    <h2>Welcome, {escape(user["name"])}!</h2>
    <div style="border: 1px solid #ddd; padding: 20px; border-radius: 8px; max-width: 500px;">
      {_avatar(user)}
      <h3>Profile Information</h3>
      <p><strong>Name:</strong> {escape(user["name"])}</p>
      <p><strong>Email:</strong> {escape(user["email"])}</p>
      <p><strong>User ID:</strong> {escape(user["id"])}</p>
      <p><strong>Email Verified:</strong> {verified}</p>
    </div>
    <br>
    <a href="/">Home</a> |
    <a href="/logout">Logout</a>
  """
