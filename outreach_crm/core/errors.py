"""Error taxonomy and FastAPI exception handlers.

Client-facing errors carry a human-readable ``detail`` and a machine-readable
``code``. Storage constraint violations are translated by message substring;
anything unmapped becomes a generic 500 and is sent to error tracking.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from outreach_crm.core.tracking import capture_exception

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred on the server"

HTTP_ERROR_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


class ApiError(Exception):
    """An error with a defined HTTP status and machine-readable code."""

    def __init__(self, status_code: int, message: str, code: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message, "code": self.code}


class NotFoundError(ApiError):
    """A referenced row does not exist.

    The code is derived from the entity name: ``company`` -> ``COMPANY_NOT_FOUND``.
    """

    def __init__(self, entity: str, message: str | None = None) -> None:
        code = f"{entity.upper().replace(' ', '_')}_NOT_FOUND"
        super().__init__(
            status.HTTP_404_NOT_FOUND,
            message or f"{entity.capitalize()} not found",
            code,
        )


class BadRequestError(ApiError):
    def __init__(self, message: str, code: str = "VALIDATION_ERROR") -> None:
        super().__init__(status.HTTP_400_BAD_REQUEST, message, code)


class UnauthorizedError(ApiError):
    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHORIZED") -> None:
        super().__init__(status.HTTP_401_UNAUTHORIZED, message, code)


def classify_integrity_error(error: IntegrityError) -> ApiError | None:
    """Map a storage constraint violation to a client error, if recognised."""
    message = str(getattr(error, "orig", None) or error).lower()
    if "foreign key" in message:
        return BadRequestError(
            "Referenced record does not exist", code="FOREIGN_KEY_VIOLATION"
        )
    if "unique" in message or "duplicate key" in message:
        return BadRequestError("Record already exists", code="UNIQUE_VIOLATION")
    return None


def _request_context(request: Request) -> dict[str, str]:
    return {
        "method": request.method,
        "endpoint": request.url.path,
        "query": str(request.url.query),
    }


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing failures (unknown path, wrong method) keep their status and gain a code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors(), exclude={"ctx", "input"}),
        },
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    mapped = classify_integrity_error(exc)
    if mapped is not None:
        logger.info(f"Constraint violation on {request.method} {request.url.path}: {mapped.code}")
        return JSONResponse(status_code=mapped.status_code, content=mapped.to_dict())
    return await unhandled_error_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"API Error on {request.method} {request.url.path}", exc_info=exc)
    capture_exception(exc, extra=_request_context(request))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": GENERIC_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
