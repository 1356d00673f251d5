"""
Recipe Book Logging Middleware
Structured request/response logging with request IDs
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any
from contextvars import ContextVar

logger = structlog.get_logger()

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with a unique ID and its processing time.

    The ID is echoed back in the X-Request-ID header. Health probes
    are passed through without request logs.
    """

    def __init__(self, app):
        super().__init__(app)

        self.exclude_paths = {
            "/health", "/api/health", "/favicon.ico"
        }

        # Sensitive headers to mask in logs
        self.sensitive_headers = {
            "authorization", "cookie", "x-api-key", "x-goog-api-key"
        }

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        request_id_var.set(request_id)
        user_id_var.set(request.query_params.get("userId", ""))

        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        request_info = self._extract_request_info(request, request_id)
        logger.info("Request started", **request_info, event_type="request_start")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                **request_info,
                process_time=round(time.time() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise

        process_time = time.time() - start_time
        logger.log(
            self._determine_log_level(response.status_code),
            "Request completed",
            **request_info,
            **self._extract_response_info(response, process_time),
            event_type="request_complete"
        )

        response.headers["X-Request-ID"] = request_id
        return response

    def _extract_request_info(self, request: Request, request_id: str) -> Dict[str, Any]:
        info = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "content_type": request.headers.get("content-type", ""),
            "headers": self._filter_headers(dict(request.headers)),
        }
        user_id = user_id_var.get()
        if user_id:
            info["user_id"] = user_id
        return info

    def _extract_response_info(self, response: Response, process_time: float) -> Dict[str, Any]:
        return {
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
            "response_content_type": response.headers.get("content-type", ""),
        }

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded

        return request.client.host if request.client else "unknown"

    def _filter_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        return {
            key: "***MASKED***" if key.lower() in self.sensitive_headers else value
            for key, value in headers.items()
        }

    def _determine_log_level(self, status_code: int) -> int:
        """Map status codes to stdlib log levels"""
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        return 20  # INFO


def get_request_id() -> str:
    """Get current request ID from context"""
    return request_id_var.get()


def get_user_id() -> str:
    return user_id_var.get()


def log_business_event(event: str, data: Dict[str, Any] = None):
    """Log domain events (recipe created, favorite toggled, ...)"""
    logger.info(
        "Business event",
        request_id=get_request_id(),
        user_id=get_user_id(),
        business_event=event,
        data=data or {},
        event_type="business_event"
    )
