"""
Request logging middleware
Logs every request and response with its processing time
"""

import time
import logging
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Request logging middleware"""

    def __init__(self, app, excluded_paths=None):
        super().__init__(app)
        self.excluded_paths = set(excluded_paths or {"/health", "/docs", "/redoc", "/openapi.json"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log requests and attach the processing time header"""
        if request.url.path in self.excluded_paths:
            return await call_next(request)

        start_time = time.time()
        client_ip = self._get_client_ip(request)

        logger.info(f"Request: {request.method} {request.url.path} from {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {request.method} {request.url.path} "
                f"from {client_ip} in {process_time:.3f}s - Error: {e}"
            )
            raise

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(
            f"Response: {response.status_code} "
            f"for {request.method} {request.url.path} "
            f"in {process_time:.3f}s"
        )

        if response.status_code >= 500:
            logger.error(f"Server error {response.status_code}: {client_ip} on {request.url.path}")
        elif response.status_code >= 400:
            logger.warning(f"Client error {response.status_code}: {client_ip} on {request.url.path}")

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Client IP, honouring reverse proxy headers"""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"
