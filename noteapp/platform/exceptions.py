from typing import Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteapp.platform.logger import get_logger
from noteapp.platform.response import api_response

logger = get_logger(__name__)


class AppError(HTTPException):
    """Base for domain errors. Subclasses pin a status code and default message."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request failed"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=message or type(self).message,
            headers=type(self).headers,
        )


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


# ── One-time passcodes ──────────────────────────

class OtpNotFoundOrExpired(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "OTP not found or expired"


class OtpNotFound(OtpNotFoundOrExpired):
    message = "No OTP was requested for this email"


class OtpExpired(OtpNotFoundOrExpired):
    message = "OTP has expired"


class OtpMismatch(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid OTP"


class DeliveryFailure(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Failed to send OTP email. Please try again."


# ── Accounts ────────────────────────────────────

class EmailAlreadyRegistered(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Email already registered"


class UnknownUser(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


# ── Session gate ────────────────────────────────

class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "No token provided"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidToken(Unauthenticated):
    message = "Invalid token"


class TokenExpired(Unauthenticated):
    message = "Token has expired"


# ── Notes ───────────────────────────────────────

class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "You do not have permission to access this note"


class NoteNotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Note not found"


def _describe_validation_errors(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = str(first.get("msg", "Invalid value")).removeprefix("Value error, ")
    return f"{field}: {msg}" if field else msg


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(
            message=str(exc.detail) or "Error",
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message=_describe_validation_errors(exc),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            data={"errors": [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
