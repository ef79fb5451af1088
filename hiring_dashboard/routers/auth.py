"""
Authentication router for sign-up, login and the current session.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.config import settings
from hiring_dashboard.core.dependencies import get_current_user_id, parse_company_header
from hiring_dashboard.core.security import session_manager
from hiring_dashboard.db.session import get_db
from hiring_dashboard.errors import AuthenticationError
from hiring_dashboard.models.user import User
from hiring_dashboard.schemas.auth import LoginRequest, LoginResponse, SessionRead, SignUpRequest, UserRead
from hiring_dashboard.schemas.company import CompanyRead
from hiring_dashboard.services.auth_service import AuthService
from hiring_dashboard.services.company_selection_service import CompanySelectionService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


async def _describe_session(
    db: AsyncSession,
    user: User,
    requested_company_id: Optional[UUID] = None,
) -> SessionRead:
    selection = CompanySelectionService(db)
    ctx = await selection.resolve_session(user.id, requested_company_id)
    companies = await selection.list_selectable_companies(user.id)
    return SessionRead(
        user=UserRead.model_validate(user),
        companies=[CompanyRead.model_validate(c) for c in companies],
        selected_company_id=ctx.selected_company_id,
        role=ctx.role_for(ctx.selected_company_id) if ctx.selected_company_id else None,
        is_admin=ctx.is_admin,
    )


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
    )


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: SignUpRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a user and their company.

    The new user becomes the company's admin and is signed in.
    """
    service = AuthService(db)
    user, _ = await service.sign_up(payload.email, payload.password, payload.company_name)

    token = session_manager.create_session_token(user.id, user.email)
    _set_session_cookie(response, token)
    session = await _describe_session(db, user)
    return LoginResponse(access_token=token, **session.model_dump())


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate and start a session (cookie and bearer token)."""
    service = AuthService(db)
    user = await service.authenticate(credentials.email, credentials.password)
    if not user:
        raise AuthenticationError("Incorrect email or password")

    token = session_manager.create_session_token(user.id, user.email)
    _set_session_cookie(response, token)
    session = await _describe_session(db, user)
    return LoginResponse(access_token=token, **session.model_dump())


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout():
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=SessionRead)
async def me(
    user_id: UUID = Depends(get_current_user_id),
    x_company_id: Optional[str] = Header(None, alias="X-Company-ID"),
    db: AsyncSession = Depends(get_db),
):
    """Current user, selectable companies and the selected company."""
    user = await AuthService(db).get_user(user_id)
    return await _describe_session(db, user, parse_company_header(x_company_id))
