"""
FastAPI exception handlers mapping service exceptions to HTTP responses.

Status codes and bodies come from the exception classes (``http_status()``,
``to_payload()``); request validation errors become 400 with one message per field.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from veranstalter.core.exceptions import VeranstalterError
from veranstalter.schemas.validation import format_validation_errors

logger = logging.getLogger(__name__)


async def veranstalter_error_handler(request: Request, exc: VeranstalterError) -> JSONResponse:
    logger.info("%s for %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = format_validation_errors(exc.errors())
    logger.info("Validation failed for %s %s: %s", request.method, request.url.path, messages)
    return JSONResponse(
        status_code=400,
        content={"detail": messages, "code": "validation_failed"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VeranstalterError, veranstalter_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
