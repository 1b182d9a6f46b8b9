"""
HTTP middleware and exception handlers for the MealBills API.

Every failure leaves the API as ``{"error": <message>}`` with an optional
``details`` mapping; the status code comes from the exception type.
"""

import time
import logging
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.exceptions import ServiceError, UnexpectedError

logger = logging.getLogger("mealbills.middleware")

REQUEST_ID_HEADER = "X-Request-ID"


def make_serializable(obj):
    """Make pydantic error payloads JSON-safe (Decimals, nested exceptions)"""
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, dict):
        return {key: make_serializable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    if isinstance(obj, Exception):
        return str(obj)
    return obj


def _request_label(request: Request) -> str:
    request_id = getattr(request.state, "request_id", "-")
    return f"{request.method} {request.url.path} request_id={request_id}"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and log its outcome and duration.

    A caller-supplied ``X-Request-ID`` is reused so ids can be followed
    across services; otherwise one is generated. The id and the processing
    time are echoed back as response headers.
    """

    async def dispatch(self, request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed = time.perf_counter() - started
            logger.exception(f"request_failed {_request_label(request)} elapsed={elapsed:.4f}s")
            raise

        elapsed = time.perf_counter() - started
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"request_completed {_request_label(request)} "
            f"status={response.status_code} elapsed={elapsed:.4f}s"
        )

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed path, query or body values"""
    errors = make_serializable(exc.errors())
    logger.warning(f"validation_failed {_request_label(request)} errors={errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Request validation failed", "details": {"errors": errors}},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes, wrong methods and other framework-level HTTP errors"""
    logger.warning(f"http_error {_request_label(request)} status={exc.status_code}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def service_exception_handler(request: Request, exc: ServiceError):
    """Validation, not-found, conflict and aggregation errors from the services"""
    if isinstance(exc, UnexpectedError):
        logger.error(f"service_failure {_request_label(request)} error={exc}")
    else:
        logger.info(
            f"service_rejected {_request_label(request)} "
            f"type={exc.__class__.__name__} error={exc}"
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """Anything else; the client gets an opaque message"""
    logger.exception(f"unhandled_error {_request_label(request)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred"},
    )
