# smarttravel/core/errors.py
"""
Application error taxonomy.

Every failure a handler can report is an AppError carrying a kind, an HTTP
status and a client-safe message. main.py registers one exception handler
that renders them as {"message": ..., "cause": ...}.
"""
import enum

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    PERMISSION_DENIED = "permission_denied"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DEPENDENCY_FAILURE = "dependency_failure"


class ConfigurationError(RuntimeError):
    """Raised when a required setting (e.g. a signing secret) is missing."""


class AppError(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, status_code: int | None = None, cause: str | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict:
        body = {"message": self.message}
        if self.cause:
            body["cause"] = self.cause
        return body


class ValidationFailed(AppError):
    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Validation failed", errors: list[dict] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []

    def to_body(self) -> dict:
        body = super().to_body()
        body["errors"] = self.errors
        return body


class Unauthenticated(AppError):
    kind = ErrorKind.UNAUTHENTICATED
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(AppError):
    kind = ErrorKind.PERMISSION_DENIED
    status_code = status.HTTP_403_FORBIDDEN


class Conflict(AppError):
    # Duplicate e-mail is reported as 401 by the public API contract
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(AppError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class DependencyFailure(AppError):
    kind = ErrorKind.DEPENDENCY_FAILURE
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        # Custom validators raise ValueError; show their message without pydantic's prefix
        ctx_error = (err.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error else err.get("msg", "Invalid value")
        errors.append({"field": ".".join(loc) or None, "message": message})
    return errors


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_body()))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    failed = ValidationFailed(errors=_field_errors(exc))
    return JSONResponse(status_code=failed.status_code, content=jsonable_encoder(failed.to_body()))
