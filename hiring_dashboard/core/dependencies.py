"""
FastAPI dependencies for the application.
"""

from typing import Optional
from uuid import UUID

from fastapi import Cookie, Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.config import settings
from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.security import session_manager
from hiring_dashboard.db.session import get_db
from hiring_dashboard.errors import AuthenticationError, ValidationError
from hiring_dashboard.repositories.user_repository import UserRepository
from hiring_dashboard.services.company_selection_service import CompanySelectionService
from hiring_dashboard.storage.blob_store import BlobStore, get_blob_store

# Bearer tokens are optional; the session cookie is checked first
security = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session_cookie: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
    db: AsyncSession = Depends(get_db),
) -> UUID:
    """
    Get the authenticated user's id from the session cookie or bearer token.

    Raises:
        AuthenticationError: no token, invalid or expired token, or the
            user no longer exists or is inactive
    """
    token = session_cookie or (credentials.credentials if credentials else None)
    if not token:
        raise AuthenticationError("Not authenticated")

    payload = session_manager.verify_session_token(token)
    if not payload or not payload.get("user_id"):
        raise AuthenticationError("Invalid or expired session")

    try:
        user_id = UUID(payload["user_id"])
    except ValueError as exc:
        raise AuthenticationError("Invalid session payload") from exc

    user = await UserRepository(db).get_by_id(user_id)
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")

    return user.id


def parse_company_header(x_company_id: Optional[str]) -> Optional[UUID]:
    if not x_company_id:
        return None
    try:
        return UUID(x_company_id)
    except ValueError as exc:
        raise ValidationError("X-Company-ID header must be a UUID") from exc


async def get_session_context(
    user_id: UUID = Depends(get_current_user_id),
    x_company_id: Optional[str] = Header(None, alias="X-Company-ID"),
    db: AsyncSession = Depends(get_db),
) -> SessionContext:
    """
    Build the SessionContext for the request.

    The company comes from the X-Company-ID header, falling back to the
    first company the user can select.
    """
    service = CompanySelectionService(db)
    return await service.resolve_session(user_id, parse_company_header(x_company_id))


def get_document_store() -> BlobStore:
    """Blob store dependency; overridden in tests."""
    return get_blob_store()
