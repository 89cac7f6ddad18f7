# backend/planoaula/core/middleware.py

import re
import time
from typing import Callable, Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .constants import LoggingConstants
from .logging import get_logger, set_request_context, clear_request_context, generate_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9_.:-]{1,64}$")

SECURITY_HEADERS = {
    "Strict-Transport-Security": "max-age=63072000; includeSubDomains; preload",
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline';",
}

# Planos gerados e arquivos exportados são únicos por requisição
API_CACHE_CONTROL = "no-store"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, headers: Dict[str, str] = None):
        super().__init__(app)
        self.headers = headers or SECURITY_HEADERS

    async def dispatch(self, request: Request, call_next: Callable):
        response: Response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        if request.url.path.startswith("/api/"):
            response.headers.setdefault("Cache-Control", API_CACHE_CONTROL)
        return response


def resolve_request_id(request: Request) -> str:
    """Reaproveita o X-Request-ID enviado pelo frontend quando ele é um identificador simples."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    if _ACCEPTED_REQUEST_ID.match(incoming):
        return incoming
    return generate_request_id()


def client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.headers.get("x-real-ip"):
        return request.headers["x-real-ip"]
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Um evento no início e outro ao fim de cada requisição, com request_id.

    Respostas sem Content-Length (o plano de aula em streaming) são registradas
    quando os cabeçalhos saem; a duração é o tempo até o primeiro byte, e o
    fim do stream é registrado pelo serviço de IA.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.logger = get_logger("middleware.request")
        self.skip_paths = set(LoggingConstants.SKIP_PATHS)

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = resolve_request_id(request)
        set_request_context(request_id)

        start_time = time.time()
        quiet = request.url.path in self.skip_paths

        if not quiet:
            self.logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                user_agent=request.headers.get("user-agent"),
                client_ip=client_ip(request),
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            if not quiet:
                self.logger.error(
                    "Request failed with exception",
                    method=request.method,
                    path=request.url.path,
                    duration_ms=self._elapsed_ms(start_time),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
            raise
        finally:
            clear_request_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        if not quiet:
            self._log_response(request, response, request_id, self._elapsed_ms(start_time))
        return response

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.time() - start_time) * 1000, 2)

    def _log_response(self, request: Request, response: Response, request_id: str, duration_ms: float) -> None:
        streamed = "content-length" not in response.headers
        log = self.logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            duration_ms=duration_ms,
        )

        if response.status_code >= 500:
            log.error("Server error response")
        elif response.status_code >= 400:
            log.warning("Client error response")
        elif streamed:
            log.info("Streaming response started")
        elif duration_ms > LoggingConstants.SLOW_REQUEST_THRESHOLD_MS:
            log.warning("Slow request detected", content_length=response.headers.get("content-length"))
        else:
            log.info("Request completed successfully", content_length=response.headers.get("content-length"))
