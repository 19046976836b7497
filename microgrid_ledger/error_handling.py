import datetime
import logging
import traceback
from typing import Any, Dict, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from microgrid_ledger.exceptions import ErrorKind, LedgerError
from microgrid_ledger.settings import settings

logger = logging.getLogger(__name__)

ERROR_KIND_STATUS = {
    ErrorKind.ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorKind.EMPTY_NAME: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INACTIVE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.ZERO_AMOUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_AMOUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.SELF_TRADE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INSUFFICIENT_BALANCE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.OUT_OF_RANGE: status.HTTP_404_NOT_FOUND,
    ErrorKind.OVERFLOW: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class ErrorResponse(Exception):
    """Standardised error response format."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        request: Request | None = None,
        details: dict[str, Any] | None = None,
        error_type: str = "error",
        exc: Exception | None = None,
        include_stack: bool = False,
    ) -> None:
        self.timestamp = datetime.datetime.now()
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.details = details or {}

        if request:
            self.details.update(
                {
                    "method": request.method,
                    "path": request.url.path,
                }
            )

        if include_stack and exc and exc.__traceback__:
            tb_exc = traceback.TracebackException.from_exception(exc)
            if tb_exc.stack:
                last = tb_exc.stack[-1]
                self.details["source_location"] = {
                    "file": last.filename,
                    "line": last.lineno,
                    "function": last.name,
                }
            self.details["stack"] = list(tb_exc.format())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status_code": self.status_code,
            "error_message": self.message,
            "details": self.details,
            "error_type": self.error_type,
        }


def format_validation_error(
    exc: RequestValidationError,
    request: Request,
) -> ErrorResponse:
    enriched: list[dict[str, Any]] = []

    for err in exc.errors():
        loc_tuple: tuple[Any, ...] = tuple(err["loc"])
        enriched.append(
            {
                "location": " -> ".join(str(x) for x in loc_tuple),
                "field": loc_tuple[-1] if len(loc_tuple) > 1 else None,
                "message": err["msg"],
                "type": err["type"],
            }
        )

    return ErrorResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation error",
        request=request,
        details={"errors": enriched},
        error_type="validation_error",
    )


def format_ledger_error(exc: LedgerError, request: Request) -> ErrorResponse:
    return ErrorResponse(
        status_code=ERROR_KIND_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        message=exc.message,
        request=request,
        details={"kind": exc.kind.value, "exception_type": type(exc).__name__},
        error_type="ledger_error",
    )


async def ledger_exception_handler(request: Request, exc: LedgerError) -> JSONResponse:
    error_response = format_ledger_error(exc, request)
    logger.info("Ledger rejected request: %s", error_response.to_dict())
    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error_response = format_validation_error(exc, request)
    logger.warning("Validation error", extra={"error": error_response.to_dict()})
    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.to_dict(),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> Union[Response, JSONResponse]:
    """Handle HTTP exceptions."""
    error_response = ErrorResponse(
        status_code=exc.status_code, message=str(exc.detail), error_type="http_error"
    )
    logger.warning(f"HTTP error: {error_response.to_dict()}")
    return JSONResponse(
        status_code=error_response.status_code, content=error_response.to_dict()
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Only expose the stack trace outside PROD
    show_stack = settings.ENVIRONMENT != "PROD"
    error_response = ErrorResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=str(exc),
        request=request,
        details={"exception_type": type(exc).__name__},
        error_type="server_error",
        exc=exc,
        include_stack=show_stack,
    )
    logger.error("Unhandled exception", exc_info=True, extra={"error": error_response.to_dict()})
    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.to_dict(),
    )
