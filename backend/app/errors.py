"""Error taxonomy and the handlers that turn it into HTTP responses."""

import logging
from collections.abc import Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    status_code: int = 400
    detail: str = "Bad request"

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_dict(self) -> dict:
        return {"detail": self.detail}


class DuplicateUsername(AuthServiceError):
    status_code = 409
    detail = "Username is already taken"


class InvalidCredentials(AuthServiceError):
    # Same message for unknown username and wrong password.
    status_code = 401
    detail = "Invalid username or password"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class Unauthenticated(AuthServiceError):
    status_code = 401
    detail = "Not authenticated"

    @property
    def headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


class MalformedRequest(AuthServiceError):
    status_code = 422
    detail = "Malformed request"

    def __init__(self, fields: Sequence[str] = ()) -> None:
        super().__init__()
        self.fields = list(fields)

    def to_dict(self) -> dict:
        return {"detail": self.detail, "fields": self.fields}


def error_response(exc: AuthServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers
    )


async def _handle_service_error(request: Request, exc: AuthServiceError) -> JSONResponse:
    return error_response(exc)


def _field_path(err: dict) -> str:
    if err.get("type") == "json_invalid":
        return "body"
    return ".".join(str(part) for part in err.get("loc", ()) if part != "body") or "body"


async def _handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Only field paths go back to the caller; the raw input may hold a password.
    fields = [_field_path(err) for err in exc.errors()]
    logger.debug(f"Malformed request to {request.url.path}: {fields}")
    return error_response(MalformedRequest(fields))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
