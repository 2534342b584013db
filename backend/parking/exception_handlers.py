from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from parking.errors import AppError, error_response

logger = logging.getLogger("exception_handlers")


def _with_correlation_id(request: Request, details: dict[str, Any]) -> dict[str, Any]:
    cid = getattr(request.state, "correlation_id", None)
    if cid and "correlation_id" not in details:
        details["correlation_id"] = cid
    return details


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:  # type: ignore[override]
        details = exc.details.copy() if isinstance(exc.details, dict) else {}
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.code, exc.message, _with_correlation_id(request, details)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore[override]
        details: dict[str, Any] = {"errors": jsonable_encoder(exc.errors())}
        return JSONResponse(
            status_code=400,
            content=error_response(
                "validation_error",
                "Request validation failed",
                _with_correlation_id(request, details),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore[override]
        code = "not_found" if exc.status_code == 404 else "http_error"
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(code, message, _with_correlation_id(request, {})),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore[override]
        logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_response(
                "internal_error",
                "Unexpected server error",
                _with_correlation_id(request, {"error": str(exc)}),
            ),
        )
