# backend/drivedesk/errors.py
"""Every error leaves the API as an ``application/problem+json`` document."""

from http import HTTPStatus
import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import DomainException, RepositoryException

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(
    request: Request,
    status_code: int,
    detail: Optional[str] = None,
    code: Optional[str] = None,
    errors: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    try:
        title = HTTPStatus(status_code).phrase
    except ValueError:
        title = "Error"
    body: Dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status_code,
        "detail": detail or "",
        "instance": request.url.path,
    }
    if code:
        body["code"] = code
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return JSONResponse(body, status_code=status_code, media_type=PROBLEM_MEDIA_TYPE, headers=headers)


def _unpack_detail(detail: Any) -> Tuple[Optional[str], Optional[str], Any]:
    """Split an HTTPException detail into (message, code, errors)."""
    if detail is None:
        return None, None, None
    if not isinstance(detail, dict):
        return str(detail), None, None
    message = detail.get("message") or detail.get("detail")
    code = detail.get("code")
    return (
        message if isinstance(message, str) else None,
        code if isinstance(code, str) else None,
        detail.get("details") or detail.get("errors"),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def on_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message, code, errors = _unpack_detail(exc.detail)
        return problem_response(
            request,
            exc.status_code,
            detail=message,
            code=code,
            errors=errors,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DomainException)
    async def on_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", exc.code, request.url.path, exc.message)
        return await on_http_exception(request, exc.to_http_exception())

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return problem_response(
            request,
            422,
            detail="Request validation failed",
            code="validation_error",
            errors=exc.errors(),
        )

    @app.exception_handler(RepositoryException)
    async def on_repository_error(request: Request, exc: RepositoryException) -> JSONResponse:
        logger.error("Repository error on %s: %s", request.url.path, exc)
        return problem_response(request, 500, detail="A database error occurred", code="database_error")
