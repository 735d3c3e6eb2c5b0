"""FastAPI dependencies."""
import logging
from typing import Callable

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.config import get_settings
from surveydesk.database import get_db
from surveydesk.models.user import User
from surveydesk.services.auth_service import AuthService, AuthError
from surveydesk.services.authorization import Capability, Principal

logger = logging.getLogger(__name__)


def _mask_identifier(identifier: str) -> str:
    """Mask a sensitive identifier for logging (e.g., user_id, token)."""
    if not identifier:
        return "<missing>"
    if len(identifier) <= 8:
        return f"{identifier[:2]}...{identifier[-2:]}"
    return f"{identifier[:4]}...{identifier[-4:]}"


async def get_current_user(
        request: Request,
        authorization: str | None = Header(default=None, alias="Authorization"),
        db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the current authenticated user via JWT access token.

    Checks for access token in the following order:
    1. HTTP-only cookie (preferred, secure)
    2. Authorization header (API clients)
    """
    settings = get_settings()

    token = request.cookies.get(settings.access_token_cookie_name)
    token_source = "cookie"

    if not token and authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(status_code=401, detail="invalid_authorization_header")
        token_source = "header"

    if not token:
        raise HTTPException(status_code=401, detail="missing_credentials")

    try:
        user = await AuthService(db).get_user_from_token(token)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    logger.debug(f"Authenticated user via JWT {token_source}: {_mask_identifier(str(user.user_id))}")
    return user


async def get_principal(user: User = Depends(get_current_user)) -> Principal:
    """Resolve the caller's role into a principal once per request."""
    return Principal.for_user(user)


def require(capability: Capability) -> Callable:
    """Build a dependency that only lets principals holding ``capability`` through."""

    async def _require(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.can(capability):
            logger.warning(
                f"Denied {capability.value} to {principal.__class__.__name__} "
                f"{_mask_identifier(str(principal.user_id))}"
            )
            raise HTTPException(status_code=403, detail="forbidden")
        return principal

    return _require
