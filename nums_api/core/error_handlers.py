"""Centralized error handlers translating failures into the JSON envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from starlette.exceptions import HTTPException as StarletteHTTPException

from nums_api.core.errors import (
    AppError,
    ConflictError,
    InternalError,
    UnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def translate_store_error(exc: Exception) -> AppError:
    """Map storage-engine exceptions onto the application taxonomy."""

    if isinstance(exc, IntegrityError):
        detail = str(exc.orig) if exc.orig is not None else str(exc)
        return ConflictError(
            "데이터 제약 조건을 위반했습니다.",
            extra={"details": detail},
        )
    if isinstance(exc, (OperationalError, DisconnectionError, InterfaceError)):
        return UnavailableError("데이터베이스 연결 오류가 발생했습니다.")
    return InternalError("서버 오류가 발생했습니다.")


def _respond(error: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.to_payload()),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def _handle_app_error(_: Request, exc: AppError) -> JSONResponse:
        return _respond(exc)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details: Any = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
            for err in exc.errors()
        ]
        return _respond(
            ValidationError("요청 값이 올바르지 않습니다.", extra={"details": details})
        )

    @app.exception_handler(IntegrityError)
    async def _handle_integrity(_: Request, exc: IntegrityError) -> JSONResponse:
        logger.info("Integrity error", exc_info=exc)
        return _respond(translate_store_error(exc))

    @app.exception_handler(OperationalError)
    async def _handle_operational(_: Request, exc: OperationalError) -> JSONResponse:
        logger.warning("Database operation failed: %s", exc)
        return _respond(translate_store_error(exc))

    @app.exception_handler(DisconnectionError)
    @app.exception_handler(InterfaceError)
    async def _handle_disconnect(_: Request, exc: Exception) -> JSONResponse:
        logger.warning("Database disconnected: %s", exc)
        return _respond(translate_store_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        _: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            code, message = "ROUTE_NOT_FOUND", "Route not found"
        else:
            code, message = "HTTP_ERROR", str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message, "errorCode": code},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception", exc_info=exc)
        return _respond(InternalError("서버 오류가 발생했습니다."))


__all__ = ["register_error_handlers", "translate_store_error"]
