import asyncio
import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api.activities import router as activities_router
from api.applets import router as applets_router
from api.services import router as services_router
from core.config import settings
from db.supabase_client import get_service_role_client
from middleware.request_id import RequestIDMiddleware

logger = structlog.get_logger()


def _configure_logging() -> None:
    """Drop structlog events below LOG_LEVEL."""
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def _init_sentry() -> None:
    """Initialize Sentry error tracking if DSN is configured."""
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
        send_default_pii=False,
    )
    logger.info("Sentry initialized", environment=settings.environment)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup and shutdown events."""
    _configure_logging()
    _init_sentry()
    logger.info("Starting Applets API", environment=settings.environment)
    yield
    logger.info("Shutting down Applets API")


app = FastAPI(
    title="Applets API",
    description="Applet catalog and mock activity feed",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestIDMiddleware)


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health/deep")
async def deep_health_check() -> JSONResponse:
    """Check connectivity to the catalog database."""
    checks: dict = {}
    all_healthy = True

    start = time.monotonic()
    try:
        db = get_service_role_client()
        await asyncio.wait_for(
            asyncio.to_thread(lambda: db.table("applets").select("id").limit(1).execute()),
            timeout=5.0,
        )
        latency_ms = round((time.monotonic() - start) * 1000, 1)
        checks["postgres"] = {"status": "healthy", "latency_ms": latency_ms}
    except TimeoutError:
        latency_ms = round((time.monotonic() - start) * 1000, 1)
        checks["postgres"] = {"status": "unhealthy", "latency_ms": latency_ms, "error": "timeout"}
        all_healthy = False
    except Exception:
        latency_ms = round((time.monotonic() - start) * 1000, 1)
        checks["postgres"] = {
            "status": "unhealthy",
            "latency_ms": latency_ms,
            "error": "connection_failed",
        }
        all_healthy = False

    status = "healthy" if all_healthy else "unhealthy"
    status_code = 200 if all_healthy else 503
    return JSONResponse(content={"status": status, "checks": checks}, status_code=status_code)


app.include_router(applets_router)
app.include_router(services_router)
app.include_router(activities_router)
