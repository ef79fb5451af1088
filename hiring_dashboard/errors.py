"""Error taxonomy and structured error helpers for API responses."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "bad_request"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        *,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.message = message
        self.details = details

    @property
    def payload(self) -> Dict[str, Any]:
        return build_error_payload(self.code, self.message, self.details)


class ValidationError(AppError):
    """Malformed or out-of-scope input. Raised before any write."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"


class NotFoundError(ValidationError):
    """Referenced entity is absent or outside the caller's company scope."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class StageInUseError(ValidationError):
    """A pipeline stage cannot be deleted while candidates point at it."""

    status_code = status.HTTP_409_CONFLICT
    code = "stage_in_use"


class AuthorizationError(AppError):
    """Caller lacks membership or role for the requested company scope."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "not_authenticated"


class TransactionError(AppError):
    """A multi-step write failed partway; nothing was made visible."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "transaction_failed"


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)

