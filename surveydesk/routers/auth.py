"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import get_current_user
from surveydesk.models.user import User
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.auth import LoginRequest, SessionInfo, SessionTokenResponse, SignupRequest
from surveydesk.services import AuthError, AuthService, ServiceError, UserService
from surveydesk.utils.cookies import clear_session_cookie, set_session_cookie

router = APIRouter()


def _session_info(user: User) -> SessionInfo:
    return SessionInfo(user_id=user.user_id, username=user.username, email=user.email, role=user.role)


@router.post("/signup", response_model=SessionInfo, status_code=201)
async def signup(
    request: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> SessionInfo:
    """Create a regular account (or an admin one for configured admin e-mails)."""
    try:
        user = await UserService(db).signup(request.username, request.email, request.password)
    except ServiceError as exc:
        raise_http(exc)
    return _session_info(user)


@router.post("/login", response_model=SessionTokenResponse)
async def login(
    request: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> SessionTokenResponse:
    """Authenticate via email/password and issue the session token."""
    auth_service = AuthService(db)
    try:
        user = await auth_service.authenticate_user(request.email, request.password)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    access_token, expires_in = auth_service.create_access_token(user)
    set_session_cookie(response, access_token)

    return SessionTokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=expires_in,
        user=_session_info(user),
    )


@router.post("/logout", status_code=204)
async def logout(response: Response) -> None:
    """Clear the session cookie."""
    clear_session_cookie(response)
    response.status_code = 204
    return None


@router.get("/session", response_model=SessionInfo)
async def get_session(user: User = Depends(get_current_user)) -> SessionInfo:
    """Return the identity behind the current session."""
    return _session_info(user)
