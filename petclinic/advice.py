"""
Central error translation: every failure leaves the API as a ProblemDetail.

Routers raise; the handlers registered here decide status code and body.
"""
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Iterable, List, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import NotFoundError, PetClinicError, ValidationFailed
from .schemas.problem import ProblemDetail, ValidationMessage
from .validation import FieldViolation

logger = logging.getLogger(__name__)

PROBLEM_JSON = "application/problem+json"
_BOUND_KEYS = ("ge", "gt", "le", "lt", "min_length", "max_length")
_LOCATIONS = ("body", "query", "path", "header", "cookie")


def problem_response(
    request: Request,
    status: int,
    title: str,
    detail: str,
    violations: Iterable[ValidationMessage] = (),
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    problem = ProblemDetail(
        title=title,
        status=status,
        detail=detail,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
        schema_validation_errors=list(violations),
    )
    return JSONResponse(
        status_code=status,
        content=problem.model_dump(mode="json", by_alias=True),
        media_type=PROBLEM_JSON,
        headers=headers,
    )


def to_validation_message(violation: FieldViolation) -> ValidationMessage:
    data = violation.to_dict()
    data["rejected_value"] = jsonable_encoder(data["rejected_value"])
    return ValidationMessage(**data)


def from_pydantic_errors(errors: Iterable[Dict[str, Any]]) -> List[ValidationMessage]:
    """Converts RequestValidationError entries into ValidationMessage items."""
    out = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in _LOCATIONS:
            loc = loc[1:]
        ctx = err.get("ctx") or {}
        bound = next((ctx[k] for k in _BOUND_KEYS if k in ctx), None)
        out.append(ValidationMessage(
            field=".".join(loc) or "body",
            constraint=err.get("type", "invalid"),
            bound=float(bound) if isinstance(bound, (int, float)) else None,
            rejected_value=jsonable_encoder(err.get("input")),
            message=err.get("msg", "invalid value"),
        ))
    return out


async def handle_validation_failed(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.detail)
    return problem_response(
        request, exc.status_code, exc.title, exc.detail,
        [to_validation_message(v) for v in exc.violations],
    )


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("%s %s: %s", request.method, request.url.path, exc.detail)
    return problem_response(request, exc.status_code, exc.title, exc.detail)


async def handle_clinic_error(request: Request, exc: PetClinicError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(level, "%s %s: %s", request.method, request.url.path, exc.detail)
    return problem_response(request, exc.status_code, exc.title, exc.detail)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # malformed or mistyped bodies are a client error (400), not FastAPI's 422
    messages = from_pydantic_errors(exc.errors())
    logger.warning("Invalid request %s %s: %d error(s)", request.method, request.url.path, len(messages))
    return problem_response(request, 400, "Validation failed", "Request validation failed", messages)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return problem_response(
        request, exc.status_code, HTTPStatus(exc.status_code).phrase, str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return problem_response(request, 500, "Internal Server Error", "Unexpected server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, handle_validation_failed)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(PetClinicError, handle_clinic_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
