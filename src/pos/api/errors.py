"""Map domain errors to HTTP responses with the error envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pos.core.exceptions import (
    ConflictingDataError,
    DataNotFoundError,
    EmptyAuthorizationHeaderError,
    ExpiredTokenError,
    ForbiddenError,
    InsufficientPaymentError,
    InsufficientStockError,
    InvalidAuthorizationHeaderError,
    InvalidAuthorizationTypeError,
    InvalidCredentialsError,
    InvalidTokenError,
    NoUpdatedDataError,
    POSError,
)
from pos.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[POSError], int] = {
    DataNotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictingDataError: status.HTTP_409_CONFLICT,
    NoUpdatedDataError: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError: status.HTTP_400_BAD_REQUEST,
    InsufficientPaymentError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    EmptyAuthorizationHeaderError: status.HTTP_401_UNAUTHORIZED,
    InvalidAuthorizationHeaderError: status.HTTP_401_UNAUTHORIZED,
    InvalidAuthorizationTypeError: status.HTTP_401_UNAUTHORIZED,
    InvalidTokenError: status.HTTP_401_UNAUTHORIZED,
    ExpiredTokenError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
}


def status_for(error: POSError) -> int:
    """Status code for a domain error; anything unlisted is a 500."""
    return STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(status_code: int, *messages: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(messages=list(messages)).model_dump(),
    )


async def pos_error_handler(request: Request, exc: POSError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        # Internal details stay in the log
        return error_response(status_code, "internal server error")
    return error_response(status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return error_response(status.HTTP_400_BAD_REQUEST, *messages)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(POSError, pos_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
