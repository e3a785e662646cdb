import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import DomainException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


def _code_from_status(status_code: int) -> str:
    mapping = {
        400: "VALIDATION_ERROR",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        409: "CONFLICT",
    }
    if status_code >= 500:
        return "INTERNAL_ERROR"
    return mapping.get(status_code, "VALIDATION_ERROR")


def _error_body(code: str, message: str, details: Optional[Any] = None) -> Dict[str, Any]:
    return {"code": code, "message": message, "details": details}


def _parse_detail(status_code: int, detail: Any) -> Dict[str, Any]:
    if isinstance(detail, dict):
        code = detail.get("code") if isinstance(detail.get("code"), str) else None
        message = detail.get("message")
        return _error_body(
            code or _code_from_status(status_code),
            message if isinstance(message, str) else GENERIC_ERROR_MESSAGE,
            detail.get("details"),
        )
    if isinstance(detail, str) and status_code < 500:
        return _error_body(_code_from_status(status_code), detail)
    return _error_body(_code_from_status(status_code), GENERIC_ERROR_MESSAGE)


def _validation_details(errors: Any) -> Dict[str, Any]:
    items = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        items.append({"field": ".".join(location), "message": error.get("msg", "")})
    return {"errors": items}


def register_error_handlers(app: FastAPI) -> None:
    """Render every failure as ``{code, message, details}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            _parse_detail(exc.status_code, exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        http_exc = exc.to_http_exception()
        if http_exc.status_code >= 500:
            logger.error(f"Service failure on {request.url.path}: {exc.message}")
        return JSONResponse(
            _parse_detail(http_exc.status_code, http_exc.detail),
            status_code=http_exc.status_code,
            headers=http_exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            _error_body(
                "VALIDATION_ERROR", "Invalid request payload", _validation_details(exc.errors())
            ),
            status_code=400,
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            _error_body("VALIDATION_ERROR", "Validation failed", _validation_details(exc.errors())),
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(_error_body("INTERNAL_ERROR", GENERIC_ERROR_MESSAGE), status_code=500)
