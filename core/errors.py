"""
core/errors.py -- Application error taxonomy.

Services raise these; api/main.py converts every AppError into the shared
ErrorResponse envelope ({"error": {"code", "message", "detail"}}) with the
matching status code. Nothing here knows about FastAPI.

  Unauthenticated     401  no, invalid, or expired bearer token
  Forbidden           403  authenticated but not the resource owner
  BadRequest          400  missing required input
  NotFound            404  resource absent
  DuplicateEmail      400  unique constraint on users.email
  InvalidCredentials  400  login mismatch (same message for both causes)
  InternalError       500  unexpected persistence/runtime failure

Layer rule: core/ is the kernel. No imports from api/, auth/, or blog/.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for failures that map onto an HTTP status and error code."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred."

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.detail = detail
        self.headers = headers
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Authentication required."

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        super().__init__(message, detail=detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "Forbidden."


class BadRequest(AppError):
    status_code = 400
    code = "bad_request"
    default_message = "Bad request."


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Not found."


class DuplicateEmail(AppError):
    status_code = 400
    code = "duplicate_email"
    default_message = "User with this email already exists"


class InvalidCredentials(AppError):
    status_code = 400
    code = "invalid_credentials"
    default_message = "Invalid email or password"

    def __init__(self, message: str | None = None, *, detail: str | None = None) -> None:
        super().__init__(message, detail=detail, headers={"Cache-Control": "no-store"})


class InternalError(AppError):
    status_code = 500
    code = "internal_error"
