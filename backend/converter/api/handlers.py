"""Exception handlers rendering errors as {"error": message, "code": code}."""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from converter.errors import ConverterError

logger = logging.getLogger("converter.api")


def _error_payload(code: str, message: str, details: Optional[dict] = None) -> dict:
    return {"error": message, "code": code, **(details or {})}


def register_exception_handlers(app: FastAPI) -> None:
    """Register the converter's error responses on the app."""

    @app.exception_handler(ConverterError)
    def converter_error_handler(_: Request, exc: ConverterError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.message)
        else:
            logger.warning("%s: %s", exc.code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Request validation failed: %s", exc.errors())
        return JSONResponse(
            status_code=400,
            content=_error_payload("invalid_request", "Invalid request"),
        )

    @app.exception_handler(Exception)
    def unhandled_handler(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(
            status_code=500,
            content=_error_payload("internal_error", "Error processing files"),
        )
