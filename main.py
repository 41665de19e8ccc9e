"""
main.py
FastAPI application entry point.
Registers all routers, middleware, startup/shutdown events.

- Request ID + process time headers on every response
- Redis rate limit for unauthenticated public writes (fail open)
- Prometheus metrics at /metrics
"""

import json
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from logging import LogRecord

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from jose import JWTError
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from config import redis_client as redis_module
from config.database import close_db, get_db, get_db_context, init_db
from config.redis_client import RateLimiter, close_redis, init_redis
from config.settings import settings
from shared.utils.media import MediaStorageError
from shared.utils.security import verify_access_token

# Service routers
from services.auth.router import router as auth_router
from services.user.router import router as user_router
from services.event.router import router as event_router
from services.gallery.router import router as gallery_router
from services.testimonial.router import router as testimonial_router
from services.category.router import router as category_router
from services.stat.router import router as stat_router
from services.settings.router import router as settings_router
from services.about.router import router as about_router
from services.contact_page.router import router as contact_page_router
from services.page_hero.router import router as page_hero_router
from services.contact.router import router as contact_router
from services.admin.router import router as admin_router


# ── Logging ──────────────────────────────────────────────────

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "instance": os.getenv("INSTANCE_NAME", "unknown"),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)


configure_logging()
logger = logging.getLogger(__name__)


# ── Lifespan (startup/shutdown) ───────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle handler."""
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)

    await init_db()
    logger.info("Database ready")

    try:
        await init_redis()
    except Exception as e:
        # Rate limiting is optional; serve without it
        logger.warning("Redis unavailable, rate limiting disabled: %s", e)
        await close_redis()

    if settings.APP_ENV == "development":
        await seed_admin()

    yield

    await close_redis()
    await close_db()
    logger.info("Server shutdown complete")


# ── Helpers ───────────────────────────────────────────────────

def _format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into "field: message; field: message"."""
    parts = []
    for error in exc.errors():
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def _has_valid_token(request: Request) -> bool:
    """True only for a bearer token that verifies; junk headers count as anonymous."""
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme != "Bearer" or not token:
        return False
    try:
        verify_access_token(token)
    except JWTError:
        return False
    return True


# ── App Factory ───────────────────────────────────────────────

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
## Event planning site CMS API

Content API behind the public marketing site and its admin console:
- **Auth**: email + password, admin approval, 7-day JWT
- **Portfolio**: events, gallery, categories, testimonials, stats
- **Pages**: site settings, about, contact page, page heroes
- **Inbox**: public contact form with NEW → READ → REPLIED workflow

### Authentication
Admin endpoints require `Authorization: Bearer <token>`.
Get a token from `POST /api/auth/login`.
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Middleware (outermost first) ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # ── Custom Middleware ──────────────────────────────────────────

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Add unique X-Request-ID to every request."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.middleware("http")
    async def process_time_middleware(request: Request, call_next):
        """Track and expose request processing time."""
        start = time.perf_counter()
        response = await call_next(request)
        process_time = round((time.perf_counter() - start) * 1000, 2)
        response.headers["X-Process-Time"] = f"{process_time}ms"
        return response

    @app.middleware("http")
    async def rate_limit_middleware(request: Request, call_next):
        """
        Limit unauthenticated POSTs (contact form, registration, login)
        per client IP. Requests pass through when Redis is absent or down.
        """
        client = redis_module.redis_client
        if client is None or request.method != "POST" or _has_valid_token(request):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        try:
            allowed = await RateLimiter(client).hit(
                f"rate:unauth:{client_ip}", settings.RATE_LIMIT_UNAUTH_PER_MINUTE
            )
        except Exception as e:
            logger.error("Rate limit check failed: %s", e)
            allowed = True

        if not allowed:
            logger.warning("Rate limit exceeded for IP %s", client_ip)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"detail": "Rate limit exceeded. Please slow down."},
                headers={"Retry-After": "60"},
            )
        return await call_next(request)

    # ── Exception Handlers ─────────────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _format_validation_errors(exc)},
        )

    @app.exception_handler(MediaStorageError)
    async def media_exception_handler(request: Request, exc: MediaStorageError):
        request_id = getattr(request.state, "request_id", None)
        logger.error("[%s] Media host failure: %s", request_id, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Image upload failed", "request_id": request_id},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler. Never expose internals in production."""
        request_id = getattr(request.state, "request_id", None)
        logger.error("[%s] Exception: %s", request_id, exc, exc_info=True)

        detail = str(exc) if settings.DEBUG else "An internal server error occurred"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": detail, "request_id": request_id},
        )

    # ── Routes ────────────────────────────────────────────────────

    @app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
    async def health_check(db: AsyncSession = Depends(get_db)):
        checks = {"status": "OK", "version": settings.APP_VERSION}
        try:
            await db.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception as e:
            logger.error("Health check database failure: %s", e)
            checks["database"] = "error"
            checks["status"] = "DEGRADED"

        status_code = 200 if checks["status"] == "OK" else 503
        return JSONResponse(content=checks, status_code=status_code)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": f"{settings.API_PREFIX}/health",
        }

    # Register all service routers
    for router in (
        auth_router,
        user_router,
        event_router,
        gallery_router,
        testimonial_router,
        category_router,
        stat_router,
        settings_router,
        about_router,
        contact_page_router,
        page_hero_router,
        contact_router,
        admin_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    # ── Prometheus Metrics ─────────────────────────────────────────
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", tags=["Monitoring"])

    return app


# ── Dev Data Seeder ───────────────────────────────────────────

async def seed_admin():
    """Create the first approved admin from ADMIN_EMAIL/ADMIN_PASSWORD (development only)."""
    from shared.models.models import User, UserRole, UserStatus
    from shared.utils.security import hash_password

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return

    email = settings.ADMIN_EMAIL.strip().lower()
    async with get_db_context() as db:
        existing = await db.scalar(select(User).where(User.email == email))
        if existing:
            return
        db.add(User(
            email=email,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            status=UserStatus.APPROVED,
        ))
    logger.info("Seeded admin account %s", email)


# ── Entry Point ───────────────────────────────────────────────

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else settings.WORKERS,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )
