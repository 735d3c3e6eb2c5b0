"""HTTP cookie helpers."""
from fastapi import Response

from surveydesk.config import get_settings


def set_session_cookie(response: Response, token: str, *, cookie_name: str | None = None) -> None:
    """Set the session token cookie with secure defaults.

    The secure flag is only dropped for local development, where the frontend
    is served over plain http.
    """
    settings = get_settings()
    max_age = settings.access_token_exp_minutes * 60
    name = cookie_name or settings.access_token_cookie_name

    response.set_cookie(
        key=name,
        value=token,
        httponly=True,
        secure=settings.environment != "development",
        samesite="lax",
        max_age=max_age,
        expires=max_age,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    """Remove the session token cookie from the client."""

    settings = get_settings()
    response.delete_cookie(
        key=settings.access_token_cookie_name,
        path="/",
    )
