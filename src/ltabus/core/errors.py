import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class DataMallError(Exception):
    """Base class for failures that abort a whole fetch operation."""

    status_code = 502


class ConfigError(DataMallError):
    """Raised when a required credential is missing or blank."""

    status_code = 503


class TransportError(DataMallError):
    """Raised on a non-success HTTP status, a connection failure or a timeout."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.upstream_status = status_code


class DecodeError(DataMallError):
    """Raised when a response body does not match the expected JSON shape."""

    def __init__(self, message: str, url: str, body: str) -> None:
        super().__init__(message)
        self.url = url
        self.body = body


async def datamall_exception_handler(request: Request, exc: DataMallError) -> JSONResponse:
    logger.error(
        "DataMall fetch failed",
        exc_info=exc,
        extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "url": getattr(exc, "url", None),
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "code": exc.status_code},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "HTTP exception",
        extra={"path": request.url.path, "method": request.method, "status_code": exc.status_code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.status_code},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "Validation failed",
        extra={"path": request.url.path, "method": request.method, "status_code": 422},
    )
    return JSONResponse(status_code=422, content={"detail": exc.errors()})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method, "status_code": 500},
    )
    return JSONResponse(status_code=500, content={"detail": "internal_error", "code": 500})
