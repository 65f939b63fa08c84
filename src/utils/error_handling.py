"""
Centralized Error Handling and Logging
Structured error logs with trace IDs, and the JSON error shapes returned to clients.
"""

import json
import logging
import traceback
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

# Context variable for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')

logger = logging.getLogger(__name__)


class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    # Security settings
    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization',
        'auth', 'bearer', 'credential', 'api_key'
    ]

    # Logging settings
    LOG_REQUEST_BODIES = True
    LOG_HEADERS = True
    MAX_BODY_LOG_SIZE = 5000  # Truncate large bodies

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively sanitize sensitive data from logs"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> str:
        """Log structured error with full context, returning its trace ID"""

        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": "ERROR"
        }

        if request:
            headers = dict(request.headers)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(headers) if ErrorHandlingConfig.LOG_HEADERS else {},
                "client_ip": request.client.host if request.client else None,
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
                "module": getattr(exception, '__module__', 'unknown')
            }

            if include_traceback:
                log_entry["exception"]["traceback"] = traceback.format_exc()

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.error(json.dumps(log_entry, indent=2, default=str))

        return trace_id


def _captured_body(request: Request) -> Optional[Any]:
    """Request body captured by the middleware, parsed when it is JSON"""
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        text = body.decode('utf-8')
    except Exception:
        return "DECODE_ERROR"
    try:
        return json.loads(text)
    except ValueError:
        return text


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to capture request context and add request IDs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)

        # Keep the body for error logging
        body = None
        if ErrorHandlingConfig.LOG_REQUEST_BODIES:
            try:
                body = await request.body()
            except Exception as e:
                StructuredLogger.log_error(
                    "middleware_error",
                    "Failed to capture request body",
                    request=request,
                    exception=e,
                    include_traceback=False
                )

        request.state.captured_body = body
        request.state.trace_id = trace_id

        try:
            response = await call_next(request)
        except Exception as e:
            StructuredLogger.log_error(
                "unhandled_exception",
                f"Unhandled exception in request processing: {str(e)}",
                request=request,
                exception=e,
                extra_context={"body": ErrorHandlingConfig.sanitize_data(_captured_body(request))}
            )
            raise

        # Trace ID in the response headers for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Render HTTP exceptions

    A string detail becomes {"error": detail}; a dict detail is the body.
    """
    if exc.status_code >= 500:
        StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc,
            extra_context={
                "status_code": exc.status_code,
                "request_body": ErrorHandlingConfig.sanitize_data(_captured_body(request))
            },
            include_traceback=False
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")

    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request bodies that cannot be parsed are a client error (HTTP 400)"""

    validation_details = []
    for error in exc.errors():
        validation_details.append({
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        })

    logger.warning(
        f"Request validation failed for {request.method} {request.url.path}: "
        f"{len(validation_details)} errors"
    )

    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "message": "Request validation failed",
            "detail": validation_details
        }
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""

    StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        extra_context={
            "request_body": ErrorHandlingConfig.sanitize_data(_captured_body(request))
        },
        include_traceback=True
    )

    # Don't expose internal details
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred"
        },
        headers={"X-Trace-ID": getattr(request.state, "trace_id", "")}
    )


def setup_error_handling(app):
    """Setup error handling for FastAPI app"""

    app.add_middleware(RequestContextMiddleware)

    # Most specific first
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling initialized")
