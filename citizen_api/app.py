import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from citizen_api import __version__
from citizen_api.core.config import Settings, get_settings
from citizen_api.core.errors import StoreError
from citizen_api.core.logging_config import configure_logging
from citizen_api.core.rate_limiter import RateLimiter, client_ip
from citizen_api.db.bootstrap import SynchronousBootstrap
from citizen_api.routers import applications as applications_router
from citizen_api.routers import contact as contact_router
from citizen_api.routers import dev as dev_router
from citizen_api.routers import grievances as grievances_router
from citizen_api.routers import reports as reports_router
from citizen_api.routers import schemes as schemes_router
from citizen_api.services.registry import build_services

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP fixed window; 429 once the window's budget is spent."""

    def __init__(self, app, *, limiter: RateLimiter) -> None:
        super().__init__(app)
        self._limiter = limiter

    async def dispatch(self, request, call_next):
        allowed, remaining, reset_at = self._limiter.hit(client_ip(request))
        if not allowed:
            return JSONResponse(
                {"error": "Too many requests, please try again later."},
                status_code=429,
                headers={"Retry-After": str(max(1, int(reset_at - time.time())))},
            )
        response = await call_next(request)
        response.headers["RateLimit-Limit"] = str(self._limiter.limit)
        response.headers["RateLimit-Remaining"] = str(remaining)
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse({"error": exc.message, "code": exc.code}, status_code=exc.status_code)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API. The store is loaded by the lifespan hook before the first
    request is served; a load failure aborts startup.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    bootstrap = SynchronousBootstrap(settings.db_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = bootstrap.ensure_database()
        app.state.services = build_services(store)
        try:
            yield
        finally:
            app.state.services = None
            bootstrap.shutdown()

    app = FastAPI(title="Citizen Services API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.bootstrap = bootstrap
    app.state.services = None

    app.add_middleware(RateLimitMiddleware, limiter=RateLimiter(settings.rate_limit_per_minute, 60))
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.is_production)
    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(StoreError, store_error_handler)

    @app.get(f"{API_PREFIX}/health")
    def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(schemes_router.router, prefix=API_PREFIX)
    app.include_router(applications_router.router, prefix=API_PREFIX)
    app.include_router(grievances_router.router, prefix=API_PREFIX)
    app.include_router(contact_router.router, prefix=API_PREFIX)
    app.include_router(reports_router.router, prefix=API_PREFIX)
    if not settings.is_production:
        app.include_router(dev_router.router, prefix=API_PREFIX)

    return app
