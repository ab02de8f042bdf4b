"""Translate domain and framework errors into the response envelope.

Every failure leaves the API as ``{"success": false, "message": ..., "errors"?: [...], "data"?: {...}}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    StockValidationError,
)

logger = structlog.get_logger(__name__)


def field_errors(messages) -> list[dict]:
    """Flatten Protean's ``{field: [msg, ...]}`` (or a bare string/list) into ``[{field, message}]``."""
    if isinstance(messages, dict):
        errors = []
        for field, value in messages.items():
            for message in value if isinstance(value, list | tuple) else [value]:
                errors.append({"field": str(field), "message": str(message)})
        return errors
    if isinstance(messages, list | tuple):
        return [{"field": None, "message": str(message)} for message in messages]
    return [{"field": None, "message": str(messages)}]


def exception_messages(exc):
    """Protean carries messages on ``.messages`` for validation errors and as the first argument otherwise."""
    messages = getattr(exc, "messages", None)
    if messages is None:
        messages = exc.args[0] if exc.args else str(exc)
    return messages


def summary(errors: list[dict], default: str) -> str:
    return errors[0]["message"] if len(errors) == 1 else default


def envelope(status_code: int, message: str, errors=None, data=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    errors = field_errors(exception_messages(exc))
    return envelope(400, summary(errors, "Validation failed"), errors=errors)


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return envelope(400, "Validation failed", errors=errors)


async def _stock_validation_error(request: Request, exc: StockValidationError) -> JSONResponse:
    return envelope(400, exc.message, data={"issues": exc.issues})


async def _invalid_operation(request: Request, exc: InvalidOperationError) -> JSONResponse:
    errors = field_errors(exception_messages(exc))
    return envelope(400, summary(errors, "Invalid operation"))


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    errors = field_errors(exception_messages(exc))
    return envelope(404, summary(errors, "Resource not found"))


async def _authentication_error(request: Request, exc: AuthenticationError) -> JSONResponse:
    return envelope(401, exc.message)


async def _authorization_error(request: Request, exc: AuthorizationError) -> JSONResponse:
    return envelope(403, exc.message)


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    logger.warning("request_conflict", path=request.url.path, error=exc.message)
    return envelope(409, exc.message)


async def _version_conflict(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("version_conflict", path=request.url.path, error=str(exc))
    return envelope(409, "The resource was changed by another request, please try again")


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return envelope(500, "Internal Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StockValidationError, _stock_validation_error)
    app.add_exception_handler(InvalidOperationError, _invalid_operation)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(AuthenticationError, _authentication_error)
    app.add_exception_handler(AuthorizationError, _authorization_error)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(ExpectedVersionError, _version_conflict)
    app.add_exception_handler(Exception, _unhandled)
