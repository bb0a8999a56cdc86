import logging
import time
from typing import Any, Callable, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ServiceError
from .rate_limit import RATE_LIMIT_MESSAGE, retry_after


logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON format"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def error_body(message: str, errors: Optional[List[str]] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    body.update(extra)
    return body


async def add_security_headers(request: Request, call_next: Callable):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


async def limit_body_size(request: Request, call_next: Callable):
    max_bytes = request.app.state.settings.max_body_bytes
    length = request.headers.get("content-length", "")
    if length.isdigit() and int(length) > max_bytes:
        logger.warning(f"Rejected {request.method} {request.url.path}: body of {length} bytes > {max_bytes} bytes")
        return JSONResponse(
            status_code=413,
            content=error_body("Request entity too large"),
        )
    return await call_next(request)


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    client = request.client.host if request.client else "-"
    try:
        response = await call_next(request)
    except Exception as e:
        process_time = (time.time() - start_time) * 1000
        logger.error(f"{client} {request.method} {request.url.path} - ERROR: {str(e)} - {process_time:.1f}ms")
        raise
    process_time = (time.time() - start_time) * 1000
    logger.info(f"{client} {request.method} {request.url.path} - {response.status_code} - {process_time:.1f}ms")
    return response


async def service_error_handler(request: Request, exc: ServiceError):
    logger.warning(f"{request.method} {request.url.path} failed with {exc.kind.value}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.errors))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        logger.warning(f"{request.method} {request.url.path}: malformed JSON body")
        return JSONResponse(status_code=400, content=error_body(INVALID_JSON_MESSAGE))
    messages = [f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}" for error in errors]
    logger.warning(f"{request.method} {request.url.path}: request validation failed: {messages}")
    return JSONResponse(status_code=400, content=error_body("Validation failed", messages))


async def route_not_found_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and known paths with an unsupported method are both
    # reported as a missing route.
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content=error_body(f"Route {request.method} {request.url.path} not found"),
        )
    # FastAPI raises a bare 400 for bodies it cannot decode at all
    # (undecodable bytes, runaway nesting).
    if exc.status_code == 400:
        logger.warning(f"{request.method} {request.url.path}: unreadable body ({exc.detail})")
        return JSONResponse(status_code=400, content=error_body(INVALID_JSON_MESSAGE))
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)), headers=exc.headers)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit {exc.detail} exceeded for {get_remote_address(request)} on {request.method} {request.url.path}")
    window = request.app.state.settings.rate_limit_window_seconds
    response = JSONResponse(
        status_code=429,
        content=error_body(RATE_LIMIT_MESSAGE, retryAfter=retry_after(window)),
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    extra = {}
    if request.app.state.settings.debug:
        extra["error"] = str(exc)
    return JSONResponse(status_code=500, content=error_body("Internal server error", **extra))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, global_exception_handler)
